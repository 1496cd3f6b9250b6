# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — World Map Geodata
# © 2026 Aparajita Parihar. All rights reserved.
#
# Country outlines for the business-travel choropleth.
# Source chain (first usable GeoJSON FeatureCollection wins):
#   1. Optional deployment override  (CAMPUSLENS_GEODATA_URL)
#   2. D3 graph gallery world.geojson
#   3. Natural Earth 110m admin-0 countries
#   4. Embedded fallback — bounding boxes for every destination country
#
# Antarctica is dropped from every source. Caching: st.cache_data TTL=86400 s.
# load_world_geojson() never raises; the map always has something to draw.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
from typing import Optional

import requests
import streamlit as st

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# MODULE CONSTANTS
# ─────────────────────────────────────────────────────────────────────────────
GEODATA_SOURCES: tuple[str, ...] = (
    "https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson",
    "https://raw.githubusercontent.com/nvkelso/natural-earth-vector/master/geojson/ne_110m_admin_0_countries.geojson",
)
CACHE_TTL_SECONDS     = 86_400       # outlines change rarely
DEFAULT_TIMEOUT_S     = 8.0
_NAME_PROPERTIES      = ("name", "NAME", "NAME_EN", "ADMIN")

# (west, south, east, north) in degrees
FALLBACK_BOXES: dict[str, tuple[float, float, float, float]] = {
    "United States":  (-125.0,  25.0,  -66.0,  48.0),
    "Canada":         (-140.0,  42.0,  -52.0,  70.0),
    "United Kingdom": (  -8.0,  49.0,    2.0,  60.0),
    "Germany":        (   5.0,  47.0,   15.0,  55.0),
    "France":         (  -5.0,  42.0,    8.0,  51.0),
    "Netherlands":    (   3.0,  50.0,    8.0,  54.0),
    "Spain":          ( -10.0,  35.0,    5.0,  44.0),
    "Italy":          (   6.0,  36.0,   19.0,  47.0),
    "China":          (  73.0,  18.0,  135.0,  54.0),
    "Japan":          ( 129.0,  30.0,  146.0,  46.0),
    "Singapore":      ( 103.6,   1.1,  104.1,   1.5),
    "India":          (  68.0,   6.0,   97.0,  37.0),
    "Australia":      ( 113.0, -44.0,  154.0, -10.0),
    "Brazil":         ( -74.0, -34.0,  -34.0,   5.0),
    "South Korea":    ( 124.0,  33.0,  132.0,  39.0),
}


# ─────────────────────────────────────────────────────────────────────────────
# HELPERS
# ─────────────────────────────────────────────────────────────────────────────
def feature_name(feature: dict) -> str:
    """Country name from whichever naming property the source uses."""
    props = feature.get("properties") or {}
    for key in _NAME_PROPERTIES:
        if props.get(key):
            return str(props[key])
    return ""


def drop_antarctica(collection: dict) -> dict:
    features = [
        f for f in collection.get("features", [])
        if "antarctic" not in feature_name(f).lower()
    ]
    return {**collection, "features": features}


def _box_feature(name: str, box: tuple[float, float, float, float]) -> dict:
    west, south, east, north = box
    ring = [[west, north], [west, south], [east, south], [east, north], [west, north]]
    return {
        "type":       "Feature",
        "id":         name,
        "properties": {"name": name},
        "geometry":   {"type": "Polygon", "coordinates": [ring]},
    }


def fallback_geojson() -> dict:
    """Embedded FeatureCollection of destination bounding boxes."""
    return {
        "type":     "FeatureCollection",
        "source":   "embedded",
        "features": [_box_feature(name, box) for name, box in FALLBACK_BOXES.items()],
    }


def _is_feature_collection(payload) -> bool:
    return (
        isinstance(payload, dict)
        and payload.get("type") == "FeatureCollection"
        and bool(payload.get("features"))
    )


# ─────────────────────────────────────────────────────────────────────────────
# FETCH
# ─────────────────────────────────────────────────────────────────────────────
@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner=False)
def _fetch_geojson(url: str, timeout: float) -> dict:
    """
    Download one source and validate it as a GeoJSON FeatureCollection.

    Raises:
        requests.RequestException: On network or HTTP errors.
        ValueError: If the body is not JSON or not a FeatureCollection
                    (TopoJSON topologies are rejected here).
    """
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    payload = resp.json()
    if not _is_feature_collection(payload):
        raise ValueError(f"{url} did not return a GeoJSON FeatureCollection")
    return payload


# ─────────────────────────────────────────────────────────────────────────────
# PUBLIC API
# ─────────────────────────────────────────────────────────────────────────────
def load_world_geojson(
    extra_url:     Optional[str] = None,
    timeout:       float         = DEFAULT_TIMEOUT_S,
    force_refresh: bool          = False,
) -> dict:
    """
    Return a world FeatureCollection without Antarctica.

    Parameters
    ----------
    extra_url     : Source tried before the public defaults (deployment override)
    timeout       : Per-request timeout in seconds
    force_refresh : Clear the cache and fetch immediately
    """
    if force_refresh:
        _fetch_geojson.clear()

    chain = ([extra_url.strip()] if extra_url and extra_url.strip() else []) + list(GEODATA_SOURCES)
    for url in chain:
        try:
            collection = drop_antarctica(_fetch_geojson(url, timeout))
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Geodata source %s unavailable (%s)", url, type(exc).__name__)
            continue
        collection["source"] = url
        return collection

    logger.info("All geodata sources failed; using embedded country outlines")
    return fallback_geojson()

# © 2026 Aparajita Parihar. All rights reserved.
# CampusLens Platform — Source hygiene gate
#
# Static checks over the shipped source tree. A failure here should block the
# build: secrets in literals, unsafe execution primitives, plain-HTTP
# endpoints, and an audit log that could leak or persist.

import glob
import os
import re

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SOURCE_PACKAGES = ("app", "config", "core", "services")


def _shipped_sources():
    found = []
    for pkg in SOURCE_PACKAGES:
        pattern = os.path.join(ROOT_DIR, pkg, "**", "*.py")
        found.extend(os.path.relpath(p, ROOT_DIR) for p in glob.glob(pattern, recursive=True))
    found.append("streamlit_app.py")
    return sorted(found)


SOURCES = _shipped_sources()


def _code_only(relpath):
    """Source text with whole-line comments removed."""
    with open(os.path.join(ROOT_DIR, relpath), encoding="utf-8") as fh:
        lines = fh.read().splitlines()
    return "\n".join(l for l in lines if not l.lstrip().startswith("#"))


def test_tree_discovered():
    # Guard against the glob silently matching nothing
    for expected in ("app/session.py", "services/audit.py", "services/geodata.py", "core/engine.py"):
        assert expected in SOURCES


# ─────────────────────────────────────────────────────────────────────────────
# 1. FORBIDDEN PATTERNS
# ─────────────────────────────────────────────────────────────────────────────
FORBIDDEN = {
    "long token literal":  re.compile(r"""['"][A-Za-z0-9]{40,}['"]"""),
    "password literal":    re.compile(r"""(?:password|passwd)\s*=\s*['"][^'"]{4,}['"]""", re.I),
    "eval":                re.compile(r"\beval\s*\("),
    "exec":                re.compile(r"\bexec\s*\("),
    "pickle.loads":        re.compile(r"\bpickle\.loads\b"),
    "os.system":           re.compile(r"\bos\.system\s*\("),
    "subprocess shell":    re.compile(r"shell\s*=\s*True"),
    "TLS verify disabled": re.compile(r"verify\s*=\s*False"),
}


@pytest.mark.parametrize("relpath", SOURCES)
@pytest.mark.parametrize("label", sorted(FORBIDDEN))
def test_forbidden_pattern_absent(relpath, label):
    hit = FORBIDDEN[label].search(_code_only(relpath))
    assert hit is None, f"{label} in {relpath}: {hit.group(0)!r}"


# ─────────────────────────────────────────────────────────────────────────────
# 2. SECRETS ACCESS
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("relpath", [p for p in SOURCES if p != os.path.join("app", "session.py")])
def test_secrets_only_read_by_session_module(relpath):
    assert "st.secrets" not in _code_only(relpath)


# ─────────────────────────────────────────────────────────────────────────────
# 3. NETWORK
# ─────────────────────────────────────────────────────────────────────────────
_PLAIN_HTTP = re.compile(r"""http://(?!localhost|127\.0\.0\.1)[^\s'"]+""")
_REQUESTS_CALL = re.compile(r"requests\.(?:get|post|put|delete|head)\(([^)]*)\)")


@pytest.mark.parametrize("relpath", SOURCES)
def test_external_urls_are_https(relpath):
    assert _PLAIN_HTTP.findall(_code_only(relpath)) == []


@pytest.mark.parametrize("relpath", SOURCES)
def test_http_calls_carry_timeout(relpath):
    for args in _REQUESTS_CALL.findall(_code_only(relpath)):
        assert "timeout" in args, f"untimed request in {relpath}: ({args})"


# ─────────────────────────────────────────────────────────────────────────────
# 4. AUDIT LOG
# ─────────────────────────────────────────────────────────────────────────────
def test_audit_log_guards_details_and_stays_in_memory():
    code = _code_only(os.path.join("services", "audit.py"))
    assert "_assert_no_secret(details)" in code
    assert "open(" not in code
    assert "session_state" in code


def test_audit_log_documents_no_pii():
    with open(os.path.join(ROOT_DIR, "services", "audit.py"), encoding="utf-8") as fh:
        assert "PII" in fh.read()

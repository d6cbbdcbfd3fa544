"""
Redirect targets produced by the access gate.

    Login:   /auth/login?from=<encoded path+query>
    Billing: /billing?from=<encoded path+query>

The return-to value is encoded exactly once, with the same character set
as JavaScript's encodeURIComponent so the dashboard router can decode it.
"""

from typing import Optional
from urllib.parse import quote, urlsplit

from futdash.config import get_settings

RETURN_TO_PARAM = "from"

# Characters encodeURIComponent leaves alone besides [A-Za-z0-9_.-~]
_URI_COMPONENT_SAFE = "!*'()"


def encode_return_to(return_to: str) -> str:
    return quote(return_to, safe=_URI_COMPONENT_SAFE)


def return_to_from_url(url: str) -> str:
    """Path plus query string of a URL; the fragment and origin are dropped."""
    parts = urlsplit(str(url))
    path = parts.path or "/"
    return f"{path}?{parts.query}" if parts.query else path


def _with_return_to(base_path: str, return_to: Optional[str]) -> str:
    if not return_to:
        return base_path
    return f"{base_path}?{RETURN_TO_PARAM}={encode_return_to(return_to)}"


def login_redirect(return_to: Optional[str], login_path: Optional[str] = None) -> str:
    return _with_return_to(login_path or get_settings().login_path, return_to)


def billing_redirect(return_to: Optional[str], billing_path: Optional[str] = None) -> str:
    return _with_return_to(billing_path or get_settings().billing_path, return_to)

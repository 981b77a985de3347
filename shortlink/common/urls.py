"""Public URL construction for short links.

Behind a proxy the request's own scheme and host are internal, so the
X-Forwarded-* pair wins when both halves are present.
"""

from typing import Mapping, Optional


def _first_hop(value: Optional[str]) -> Optional[str]:
    # Chained proxies append, the client-facing value comes first
    if not value:
        return None
    return value.split(",")[0].strip() or None


def forwarded_origin(headers: Mapping[str, str]) -> Optional[str]:
    """Origin from X-Forwarded-Proto and X-Forwarded-Host, or None if either is missing."""
    lowered = {k.lower(): v for k, v in headers.items()}
    proto = _first_hop(lowered.get("x-forwarded-proto"))
    host = _first_hop(lowered.get("x-forwarded-host"))
    if proto and host:
        return f"{proto}://{host}"
    return None


def resolve_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Base URL clients should use, without a trailing slash.

    Order: forwarded headers, then the request's scheme and Host, then the
    configured fallback.
    """
    origin = forwarded_origin(headers)
    if origin:
        return origin
    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"
    return fallback_base_url.rstrip("/")


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional prefix and code, e.g. https://sho.rt/s/aB3xYz."""
    parts = [base_url.rstrip("/"), path_prefix.strip("/"), short_code]
    return "/".join(part for part in parts if part)

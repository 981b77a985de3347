"""Request helpers shared by the route modules."""

from fastapi import Request

from shortlink.common.urls import resolve_base_url, build_short_url


def public_base_url(request: Request) -> str:
    """Base URL clients reached us on (proxy headers, Host, then config)."""
    return resolve_base_url(
        headers=request.headers,
        fallback_base_url=request.app.state.config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )


def short_url_for(request: Request, short_code: str) -> str:
    """Complete short URL for a code, as seen by the requesting client."""
    return build_short_url(
        short_code=short_code,
        base_url=public_base_url(request),
        path_prefix=request.app.state.config.path_prefix,
    )

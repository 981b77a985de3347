"""Landing page and redirect routes for the API deployment."""

import os
from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, PlainTextResponse

from shortlink.errors import NotFoundError
from ..errors import FALLBACK_TEXT

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "templates")


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve the landing page."""
    html_file = os.path.join(template_dir, "index.html")

    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            content = f.read()
        return HTMLResponse(content=content)

    return HTMLResponse(
        content="<h1>URL Shortener</h1><p>POST a URL to /api/shorten to create a short link.</p>",
        status_code=200,
    )


@router.get("/{short_code}", include_in_schema=False)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    # Dotted paths are files (favicon.ico, robots.txt), never short codes
    if "." in short_code:
        return PlainTextResponse(FALLBACK_TEXT, status_code=status.HTTP_404_NOT_FOUND)

    service = request.app.state.service

    try:
        # Counts a click
        original_url = await service.resolve(short_code)
    except NotFoundError:
        return PlainTextResponse("URL not found", status_code=status.HTTP_404_NOT_FOUND)

    # 302 so browsers come back through us and every visit is counted
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)


@router.api_route(
    "/{path:path}",
    methods=["POST", "PUT", "DELETE", "PATCH"],
    include_in_schema=False,
)
async def fallback(path: str):
    """Anything else outside /api."""
    return PlainTextResponse(FALLBACK_TEXT, status_code=status.HTTP_404_NOT_FOUND)

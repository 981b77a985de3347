"""Routes for the Telegram bot deployment.

Every POST is a webhook delivery, every GET below the root is a short link.
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from shortlink.errors import NotFoundError, MethodNotAllowedError
from ..request_utils import public_base_url

router = APIRouter()

logger = logging.getLogger("shortlink.web")

UNCONFIGURED_ROOT_TEXT = (
    "This is a Telegram URL Shortener Bot. The GitHub repository link is not configured."
)


@router.post("/{path:path}")
async def telegram_webhook(request: Request, path: str):
    """Handle a Telegram update. Always acknowledged with 200."""
    bot = request.app.state.bot

    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Webhook body is not JSON, ignoring")
        payload = None

    try:
        await bot.handle_update(payload, public_base_url(request))
    except Exception as e:
        # A non-2xx answer makes Telegram re-deliver the same update
        logger.error(f"Webhook handling failed: {e}", exc_info=e)

    return PlainTextResponse("OK", status_code=status.HTTP_200_OK)


@router.get("/")
async def root(request: Request):
    """Send visitors to the project repository."""
    repository_url = request.app.state.config.repository_url
    if repository_url:
        return RedirectResponse(url=repository_url, status_code=status.HTTP_302_FOUND)
    return PlainTextResponse(UNCONFIGURED_ROOT_TEXT, status_code=status.HTTP_200_OK)


@router.get("/{path:path}")
async def redirect_to_url(request: Request, path: str):
    """Permanently redirect a short code to its original URL."""
    service = request.app.state.service

    try:
        original_url = await service.resolve(path)
    except NotFoundError:
        return PlainTextResponse("URL not found.", status_code=status.HTTP_404_NOT_FOUND)

    return RedirectResponse(url=original_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)


@router.api_route("/{path:path}", methods=["PUT", "DELETE", "PATCH", "OPTIONS"])
async def method_not_allowed(path: str):
    raise MethodNotAllowedError()

"""QR code generation through an external image service."""

import base64
import logging
from typing import Optional

import httpx

from .errors import UpstreamFailureError


DEFAULT_QR_SERVICE_URL = "https://api.qrserver.com/v1/create-qr-code/"


class QRCodeClient:
    """Fetch QR code images and return them as data URLs."""

    def __init__(
        self,
        service_url: str = DEFAULT_QR_SERVICE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize QR client.

        Args:
            service_url: Image endpoint accepting ``size`` and ``data`` query params
            http_client: Shared async HTTP client (one is created if omitted)
            timeout_seconds: Timeout for the image fetch
            logger: Optional logger instance
        """
        self.service_url = service_url
        self.client = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self.logger = logger or logging.getLogger(__name__)

    async def generate_data_url(self, url: str, size: int = 200) -> str:
        """Render ``url`` as a QR code image.

        Args:
            url: Content to encode
            size: Edge length of the square image in pixels

        Returns:
            ``data:<mime>;base64,...`` URL of the image

        Raises:
            UpstreamFailureError: If the image service is unreachable or errors
        """
        params = {"size": f"{size}x{size}", "data": url}
        try:
            response = await self.client.get(self.service_url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            self.logger.error(f"QR service request failed: {e}")
            raise UpstreamFailureError("Failed to generate QR code") from e

        content_type = response.headers.get("content-type", "image/png").split(";")[0].strip()
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type or 'image/png'};base64,{encoded}"

    async def close(self) -> None:
        await self.client.aclose()

"""
Webhook Notifier Module

Posts short status messages to a Discord compatible webhook.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """
    Webhook Notifier

    Sends `{"content": message}` to the configured URL. Delivery problems are
    logged and never raised to the caller.
    """

    def __init__(self, url: str, timeout: Optional[int] = 10, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize Notifier

        Args:
            url: Webhook URL
            timeout: Request timeout (seconds)
            client: Shared HTTP client, created on demand when omitted
        """
        self.url = url
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def notify(self, message: str) -> bool:
        """
        Send a message

        Args:
            message: Message text

        Returns:
            bool: True if the webhook accepted the message
        """
        try:
            response = await self._get_client().post(self.url, json={"content": message})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to send webhook notification: {str(e)}")
            return False
        logger.debug("Webhook notification sent")
        return True

    async def close(self) -> None:
        """Close HTTP Client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

"""
Shared aiohttp session for lookup services.

One lazily created ClientSession per HttpSession; the optional proxy is a
URL prefix placed in front of every request URL (CORS-style forwarding).
"""

import logging
from typing import Any, Dict, Optional, Tuple

import aiohttp

from rdf_formgen.protocols.form_config import get_form_config
from .exceptions import LookupServiceError

logger = logging.getLogger(__name__)


def proxied(url: str, proxy: Optional[str]) -> str:
    """Prefix url with the proxy, if one is configured."""
    return f"{proxy}{url}" if proxy else url


class HttpSession:
    """Thin wrapper owning one aiohttp.ClientSession."""

    def __init__(self, timeout_s: Optional[float] = None, user_agent: Optional[str] = None):
        config = get_form_config()
        self._timeout = aiohttp.ClientTimeout(total=timeout_s or config.request_timeout_s)
        self._headers = {'User-Agent': user_agent or config.user_agent}
        self.session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self):
        """Ensure aiohttp session exists."""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(headers=self._headers, timeout=self._timeout)

    async def close(self):
        """Close the session."""
        if self.session and not self.session.closed:
            await self.session.close()

    async def get_text(self, url: str, params: Optional[Dict[str, str]] = None,
                       headers: Optional[Dict[str, str]] = None,
                       proxy: Optional[str] = None) -> Tuple[str, str]:
        """
        GET a document.

        Returns:
            (body text, content type)

        Raises:
            LookupServiceError: On transport errors or non-2xx responses
        """
        await self._ensure_session()
        target = proxied(url, proxy)
        try:
            async with self.session.get(target, params=params, headers=headers) as response:
                body = await response.text()
                if response.status >= 400:
                    raise LookupServiceError(f"GET {target} failed with HTTP {response.status}")
                return body, response.content_type
        except aiohttp.ClientError as e:
            raise LookupServiceError(f"GET {target} failed: {e}") from e

    async def get_json(self, url: str, params: Optional[Dict[str, str]] = None,
                       headers: Optional[Dict[str, str]] = None,
                       proxy: Optional[str] = None) -> Any:
        """
        GET a JSON document, whatever content type the server declares.

        Raises:
            LookupServiceError: On transport errors or non-2xx responses
            ValueError: If the body is not JSON
        """
        await self._ensure_session()
        target = proxied(url, proxy)
        try:
            async with self.session.get(target, params=params, headers=headers) as response:
                if response.status >= 400:
                    raise LookupServiceError(f"GET {target} failed with HTTP {response.status}")
                return await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise LookupServiceError(f"GET {target} failed: {e}") from e

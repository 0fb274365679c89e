"""HTTP transport for the Solve360 API.

Transport is the interface the record layer talks to; HttpxTransport is the
production implementation on top of httpx.AsyncClient. Tests substitute an
AsyncMock(spec=Transport).

Responses come back as plain dicts. JSON bodies are decoded as-is. XML
bodies are converted so leaf elements that carry attributes become content
envelopes (``{"__content__": text, **attributes}``) and repeated sibling
tags become lists.

Transport errors (httpx.HTTPStatusError, httpx.ConnectError,
httpx.TimeoutException, ...) are raised unchanged. There are no retries:
each execute() call sends exactly one request.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from src.solve360.config import Settings
from src.solve360.schemas import CONTENT_KEY

logger = structlog.get_logger(__name__)


class Transport(ABC):
    """Abstract interface for sending one request to the Solve360 API."""

    @abstractmethod
    async def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None = None,
        query: dict[str, Any] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send the request and return the parsed response body."""
        ...


def _element_to_value(element: ET.Element) -> Any:
    children = list(element)
    text = element.text if element.text and element.text.strip() else None

    if not children:
        if element.attrib:
            value: dict[str, Any] = dict(element.attrib)
            if text is not None:
                value[CONTENT_KEY] = text
            return value
        return text

    result: dict[str, Any] = dict(element.attrib)
    for child in children:
        child_value = _element_to_value(child)
        if child.tag in result:
            existing = result[child.tag]
            if isinstance(existing, list):
                existing.append(child_value)
            else:
                result[child.tag] = [existing, child_value]
        else:
            result[child.tag] = child_value
    return result


def parse_xml_response(text: str) -> dict[str, Any]:
    """Convert an XML response document to nested dicts.

    Example:
        <response><item><id>7</id><fields>
          <firstname label="First Name">Steve</firstname>
        </fields></item></response>
        => {"response": {"item": {"id": "7", "fields":
              {"firstname": {"label": "First Name", "__content__": "Steve"}}}}}
    """
    root = ET.fromstring(text)
    return {root.tag: _element_to_value(root)}


def parse_response(response: httpx.Response) -> dict[str, Any]:
    """Decode an httpx response as JSON or XML based on its content."""
    text = response.text
    if not text.strip():
        return {}

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return response.json()
    if "xml" in content_type or text.lstrip().startswith("<"):
        return parse_xml_response(text)
    return json.loads(text)


class HttpxTransport(Transport):
    """Transport backed by httpx.AsyncClient.

    Args:
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpxTransport:
        return cls(timeout=settings.SOLVE360_TIMEOUT)

    def _client(self) -> httpx.AsyncClient:
        """Create a new httpx client with the configured timeout."""
        return httpx.AsyncClient(timeout=self._timeout)

    async def execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None = None,
        query: dict[str, Any] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> dict[str, Any]:
        async with self._client() as client:
            response = await client.request(
                method,
                url,
                headers=headers,
                content=body or None,
                params=query,
                auth=auth,
            )
            logger.debug(
                "solve360.http_response",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            response.raise_for_status()
            return parse_response(response)

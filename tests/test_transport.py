"""Unit tests for HttpxTransport and XML response parsing.

Patches httpx.AsyncClient.request -- no real HTTP calls.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.solve360.transport import HttpxTransport, Transport, parse_xml_response


# ── XML parsing ────────────────────────────────────────────────────────────


class TestParseXmlResponse:
    def test_leaf_with_attributes_becomes_envelope(self):
        result = parse_xml_response(
            "<response><item><id>7</id><fields>"
            '<firstname label="First Name">Steve</firstname>'
            '<custom12345 label="Description"/>'
            "</fields></item></response>"
        )

        fields = result["response"]["item"]["fields"]
        assert result["response"]["item"]["id"] == "7"
        assert fields["firstname"] == {"label": "First Name", "__content__": "Steve"}
        assert fields["custom12345"] == {"label": "Description"}

    def test_repeated_tags_become_lists(self):
        result = parse_xml_response(
            "<response><relateditems>"
            "<relatedto><id>1</id></relatedto>"
            "<relatedto><id>2</id></relatedto>"
            "</relateditems></response>"
        )

        assert result["response"]["relateditems"]["relatedto"] == [{"id": "1"}, {"id": "2"}]

    def test_single_tag_stays_a_mapping(self):
        result = parse_xml_response(
            "<response><relateditems><relatedto><id>1</id></relatedto></relateditems></response>"
        )

        assert result["response"]["relateditems"]["relatedto"] == {"id": "1"}

    def test_entities_are_unescaped_once(self):
        result = parse_xml_response("<response><name>Tom &amp; Jerry</name></response>")

        assert result["response"]["name"] == "Tom & Jerry"

    def test_leaf_text_keeps_surrounding_whitespace(self):
        result = parse_xml_response(
            "<response><fields>"
            '<background label="Background">  line one\nline two\n</background>'
            "<note>  padded  </note>"
            "<blank>   </blank>"
            "</fields></response>"
        )

        fields = result["response"]["fields"]
        assert fields["background"]["__content__"] == "  line one\nline two\n"
        assert fields["note"] == "  padded  "
        assert fields["blank"] is None


# ── HttpxTransport ─────────────────────────────────────────────────────────


class TestHttpxTransport:
    @pytest.fixture
    def transport(self):
        return HttpxTransport(timeout=5.0)

    def test_is_a_transport(self, transport):
        assert isinstance(transport, Transport)

    async def test_execute_sends_request_and_decodes_json(self, transport):
        mock_response = httpx.Response(
            200,
            json={"response": {"status": "success", "item": {"id": 12}}},
            request=httpx.Request("POST", "https://crm.test/contacts"),
        )

        with patch(
            "httpx.AsyncClient.request", new_callable=AsyncMock, return_value=mock_response
        ) as mock_request:
            result = await transport.execute(
                "POST",
                "https://crm.test/contacts",
                headers={"Content-Type": "application/xml"},
                body="<request></request>",
                query={"layout": "1"},
                auth=("user", "token"),
            )

        assert result == {"response": {"status": "success", "item": {"id": 12}}}
        args, kwargs = mock_request.call_args
        assert args == ("POST", "https://crm.test/contacts")
        assert kwargs["content"] == "<request></request>"
        assert kwargs["params"] == {"layout": "1"}
        assert kwargs["auth"] == ("user", "token")
        assert kwargs["headers"] == {"Content-Type": "application/xml"}

    async def test_execute_decodes_xml(self, transport):
        mock_response = httpx.Response(
            200,
            content=b"<response><status>success</status></response>",
            headers={"content-type": "application/xml"},
            request=httpx.Request("GET", "https://crm.test/contacts/1"),
        )

        with patch("httpx.AsyncClient.request", new_callable=AsyncMock, return_value=mock_response):
            result = await transport.execute("GET", "https://crm.test/contacts/1", headers={})

        assert result == {"response": {"status": "success"}}

    async def test_empty_body_decodes_to_empty_dict(self, transport):
        mock_response = httpx.Response(
            200,
            content=b"",
            request=httpx.Request("PUT", "https://crm.test/contacts/1"),
        )

        with patch("httpx.AsyncClient.request", new_callable=AsyncMock, return_value=mock_response):
            assert await transport.execute("PUT", "https://crm.test/contacts/1", headers={}) == {}

    async def test_http_error_is_raised_without_retry(self, transport):
        error_response = httpx.Response(
            503,
            request=httpx.Request("GET", "https://crm.test/contacts/"),
        )

        with patch(
            "httpx.AsyncClient.request", new_callable=AsyncMock, return_value=error_response
        ) as mock_request:
            with pytest.raises(httpx.HTTPStatusError):
                await transport.execute("GET", "https://crm.test/contacts/", headers={})

        assert mock_request.await_count == 1

    def test_from_settings_uses_configured_timeout(self, settings):
        transport = HttpxTransport.from_settings(settings.model_copy(update={"SOLVE360_TIMEOUT": 12.5}))

        assert transport._timeout == 12.5

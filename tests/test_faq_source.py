"""
Tests for the FAQ source.

Validates pass-through of a live FAQ document and fallback to the
built-in FAQ on every kind of failure.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx

from callrelay.facade import DEFAULT_FAQ_ITEMS, FaqSource, default_faq

from conftest import FAQ_URL, http_response

_LIVE = {"items": [{"q": "Where is the centre?", "a": "Deansgrange."}]}


def _client_returning(**kwargs) -> AsyncMock:
    client = AsyncMock()
    client.get = AsyncMock(**kwargs)
    return client


class TestDefaultFaq:
    def test_default_has_three_items(self) -> None:
        faq = default_faq()
        assert len(faq.items) == 3
        assert faq.items[0].q == "What do I need to book an NCT slot?"
        assert faq.fallback is True

    def test_default_is_a_fresh_copy(self) -> None:
        default_faq().items.clear()
        assert len(default_faq().items) == len(DEFAULT_FAQ_ITEMS)


class TestFaqFetch:
    async def test_unconfigured_returns_default_without_network(self) -> None:
        source = FaqSource("")
        with patch.object(source, "_get_client") as mock_gc:
            faq = await source.fetch()
        mock_gc.assert_not_called()
        assert faq == default_faq()

    async def test_live_document_passed_through(self) -> None:
        source = FaqSource(FAQ_URL)
        with patch.object(source, "_get_client") as mock_gc:
            mock_gc.return_value = _client_returning(
                return_value=http_response("GET", FAQ_URL, json=_LIVE),
            )
            faq = await source.fetch()

        assert [item.q for item in faq.items] == ["Where is the centre?"]
        assert faq.fallback is None

    async def test_network_error_returns_default(self) -> None:
        source = FaqSource(FAQ_URL)
        with patch.object(source, "_get_client") as mock_gc:
            mock_gc.return_value = _client_returning(
                side_effect=httpx.ConnectError("name resolution failed"),
            )
            faq = await source.fetch()
        assert faq == default_faq()

    async def test_timeout_returns_default(self) -> None:
        source = FaqSource(FAQ_URL)
        with patch.object(source, "_get_client") as mock_gc:
            mock_gc.return_value = _client_returning(
                side_effect=httpx.ReadTimeout("timed out"),
            )
            faq = await source.fetch()
        assert faq.fallback is True

    async def test_non_2xx_returns_default(self) -> None:
        source = FaqSource(FAQ_URL)
        with patch.object(source, "_get_client") as mock_gc:
            mock_gc.return_value = _client_returning(
                return_value=http_response("GET", FAQ_URL, status=503, json=_LIVE),
            )
            faq = await source.fetch()
        assert faq == default_faq()

    async def test_non_json_body_returns_default(self) -> None:
        source = FaqSource(FAQ_URL)
        with patch.object(source, "_get_client") as mock_gc:
            mock_gc.return_value = _client_returning(
                return_value=http_response("GET", FAQ_URL, text="<html>oops</html>"),
            )
            faq = await source.fetch()
        assert faq == default_faq()

    async def test_wrong_shape_returns_default(self) -> None:
        source = FaqSource(FAQ_URL)
        with patch.object(source, "_get_client") as mock_gc:
            mock_gc.return_value = _client_returning(
                return_value=http_response("GET", FAQ_URL, json={"items": [{"question": "?"}]}),
            )
            faq = await source.fetch()
        assert faq == default_faq()


class TestFaqClose:
    async def test_close_closes_client(self) -> None:
        source = FaqSource(FAQ_URL)
        mock_client = AsyncMock()
        mock_client.is_closed = False
        source._client = mock_client
        await source.close()
        mock_client.aclose.assert_awaited_once()
        assert source._client is None

    async def test_close_noop_when_no_client(self) -> None:
        await FaqSource(FAQ_URL).close()  # should not raise

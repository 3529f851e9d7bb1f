"""Tests for the FetchClient status classification and transport handling."""

from __future__ import annotations

import threading
import time

import httpx
import pytest

from pokesdk.client import FetchClient
from pokesdk.context import RequestContext
from pokesdk.exceptions import NotFoundError, RequestFailedError, TransportError
from pokesdk.output import OutputManager, set_output


URL = "https://pokeapi.test/api/v2/pokemon/pikachu"


def _client_for(handler) -> FetchClient:
    return FetchClient(timeout=5, transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# Context manager / lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_enter_opens_and_exit_closes(self) -> None:
        client = _client_for(lambda request: httpx.Response(200))
        assert client._client is None
        with client:
            assert client._client is not None
        assert client._client is None

    def test_fetch_opens_client_lazily(self) -> None:
        client = _client_for(lambda request: httpx.Response(200, content=b"{}"))
        assert client.fetch(URL) == b"{}"
        assert client._client is not None
        client.close()
        client.close()
        assert client._client is None

    def test_concurrent_first_fetches_share_one_client(self, monkeypatch) -> None:
        created: list[httpx.Client] = []
        original_init = httpx.Client.__init__

        def counting_init(self, *args, **kwargs) -> None:
            time.sleep(0.01)
            original_init(self, *args, **kwargs)
            created.append(self)

        monkeypatch.setattr(httpx.Client, "__init__", counting_init)
        client = _client_for(lambda request: httpx.Response(200, content=b"{}"))
        barrier = threading.Barrier(8)
        bodies: list[bytes] = []

        def worker() -> None:
            barrier.wait()
            bodies.append(client.fetch(URL))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert bodies == [b"{}"] * 8
        assert len(created) == 1
        client.close()
        assert created[0].is_closed


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------


class TestStatusClassification:
    def test_200_returns_raw_body(self) -> None:
        body = b'{"id": 25, "name": "pikachu"}'

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert str(request.url) == URL
            return httpx.Response(200, content=body)

        with _client_for(handler) as client:
            assert client.fetch(URL) == body

    def test_sends_json_accept_header(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["accept"] == "application/json"
            assert request.headers["user-agent"].startswith("pokesdk/")
            return httpx.Response(200, content=b"{}")

        with _client_for(handler) as client:
            client.fetch(URL)

    def test_404_raises_not_found(self) -> None:
        with _client_for(lambda request: httpx.Response(404)) as client:
            with pytest.raises(NotFoundError) as exc_info:
                client.fetch(URL)
        assert exc_info.value.url == URL
        assert exc_info.value.exit_code == 4

    @pytest.mark.parametrize("status", [201, 204, 400, 429, 500, 503])
    def test_other_statuses_raise_request_failed(self, status: int) -> None:
        with _client_for(lambda request: httpx.Response(status)) as client:
            with pytest.raises(RequestFailedError) as exc_info:
                client.fetch(URL)
        assert exc_info.value.status_code == status
        assert not isinstance(exc_info.value, NotFoundError)

    def test_no_retry_on_server_error(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with _client_for(handler) as client:
            with pytest.raises(RequestFailedError):
                client.fetch(URL)
        assert len(calls) == 1

    def test_redirect_is_followed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/pikachu"):
                return httpx.Response(301, headers={"location": f"{URL}/"})
            return httpx.Response(200, content=b"{}")

        with _client_for(handler) as client:
            assert client.fetch(URL) == b"{}"


# ---------------------------------------------------------------------------
# Transport errors and context
# ---------------------------------------------------------------------------


class TestTransportErrors:
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            httpx.RemoteProtocolError("bad frame"),
        ],
    )
    def test_network_errors_become_transport_error(self, error: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise error

        with _client_for(handler) as client:
            with pytest.raises(TransportError) as exc_info:
                client.fetch(URL)
        assert exc_info.value.__cause__ is error
        assert exc_info.value.url == URL

    def test_cancelled_context_skips_request(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        ctx = RequestContext.background()
        ctx.cancel()
        with _client_for(handler) as client:
            with pytest.raises(TransportError, match="cancelled"):
                client.fetch(URL, ctx)
        assert calls == []

    def test_expired_context_skips_request(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        ctx = RequestContext.with_timeout(-1)
        with _client_for(handler) as client:
            with pytest.raises(TransportError, match="deadline"):
                client.fetch(URL, ctx)
        assert calls == []

    def test_cancel_during_request_discards_response(self) -> None:
        ctx = RequestContext.background()

        def handler(request: httpx.Request) -> httpx.Response:
            ctx.cancel()
            return httpx.Response(200, content=b"{}")

        with _client_for(handler) as client:
            with pytest.raises(TransportError):
                client.fetch(URL, ctx)

    def test_context_deadline_caps_timeout(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.extensions["timeout"])
            return httpx.Response(200, content=b"{}")

        with _client_for(handler) as client:
            client.fetch(URL, RequestContext.with_timeout(1.0))
        assert 0 < seen["read"] <= 1.0

    def test_default_timeout_used_without_deadline(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.extensions["timeout"])
            return httpx.Response(200, content=b"{}")

        with _client_for(handler) as client:
            client.fetch(URL)
        assert seen["read"] == 5


class TestDebugOutput:
    def test_verbose_logs_request_and_status(self, capsys) -> None:
        set_output(OutputManager(no_color=True, verbose=True))
        with _client_for(lambda request: httpx.Response(200, content=b"{}")) as client:
            client.fetch(URL)
        err = capsys.readouterr().err
        assert f"[debug] GET {URL}" in err
        assert f"[debug] HTTP 200 for {URL}" in err

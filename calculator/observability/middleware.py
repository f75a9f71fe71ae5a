from __future__ import annotations

import uuid
from typing import Any, Callable

import structlog

from calculator.observability.logging import LogSink


def _request_url(scope: dict[str, Any]) -> str:
    url = scope.get("path", "")
    query_string = scope.get("query_string", b"")
    if query_string:
        url = f"{url}?{query_string.decode('latin-1')}"
    return url


def _request_headers(scope: dict[str, Any]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw_name, raw_value in scope.get("headers", []):
        name = raw_name.decode("latin-1").lower()
        value = raw_value.decode("latin-1")
        headers[name] = f"{headers[name]}, {value}" if name in headers else value
    return headers


def _decode(chunks: list[bytes]) -> str:
    # Invalid UTF-8 is replaced with U+FFFD rather than failing the request.
    return b"".join(chunks).decode("utf-8", errors="replace")


class CapturingReceive:
    """Passes request messages through and keeps a copy of the request body."""

    def __init__(self, receive: Callable[..., Any]) -> None:
        self._receive = receive
        self._chunks: list[bytes] = []

    async def __call__(self) -> dict[str, Any]:
        message = await self._receive()
        if message.get("type") == "http.request":
            self._chunks.append(bytes(message.get("body", b"")))
        return message

    def text(self) -> str | None:
        body = _decode(self._chunks)
        return body or None


class CapturingSend:
    """Wraps the real ``send`` of one response and records the body it carries.

    Body bytes are forwarded as soon as they are written. The final body
    message is split in two: its bytes are forwarded first, then
    ``on_complete(status_code, body_text)`` runs, and only then is the
    completion signal sent, so no response finishes before it is logged.
    """

    def __init__(self, send: Callable[..., Any], on_complete: Callable[[int, str], None]) -> None:
        self._send = send
        self._on_complete = on_complete
        self._chunks: list[bytes] = []
        self.status_code: int | None = None
        self.completed = False

    async def __call__(self, message: dict[str, Any]) -> None:
        message_type = message.get("type")

        if message_type == "http.response.start":
            self.status_code = int(message.get("status", 500))
            await self._send(message)
            return

        if message_type != "http.response.body" or self.completed:
            await self._send(message)
            return

        body = bytes(message.get("body", b""))
        if message.get("more_body", False):
            await self._send(message)
            self._chunks.append(body)
            return

        if body:
            await self._send({**message, "more_body": True})
            self._chunks.append(body)
        self.close()
        await self._send({**message, "body": b"", "more_body": False})

    def close(self) -> None:
        """Report the captured response and drop the buffer; idempotent."""

        if self.completed:
            return
        self.completed = True
        body = _decode(self._chunks)
        self._chunks = []
        self._on_complete(self.status_code if self.status_code is not None else 500, body)


class ResponseCaptureMiddleware:
    """Logs every HTTP request on arrival and again with the response it produced."""

    def __init__(self, app: Callable[..., Any], sink: LogSink) -> None:
        self.app = app
        self.sink = sink

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method")
        url = _request_url(scope)
        client = scope.get("client")

        structlog.contextvars.bind_contextvars(
            request_id=str(uuid.uuid4()),
            path=scope.get("path"),
            method=method,
        )

        self.sink.info(
            f"Incoming request {method} {url}",
            ip=client[0] if client else None,
            method=method,
            url=url,
            headers=_request_headers(scope),
        )

        capturing_receive = CapturingReceive(receive)

        def log_response(status_code: int, body: str) -> None:
            self.sink.info(
                f"Response for {method} {url}",
                requestBody=capturing_receive.text(),
                responseStatus=status_code,
                responseBody=body,
            )

        capturing_send = CapturingSend(send, on_complete=log_response)
        try:
            await self.app(scope, capturing_receive, capturing_send)
        finally:
            # Handlers that raise never complete the response; log what was written.
            capturing_send.close()
            structlog.contextvars.clear_contextvars()

"""Request body size limit middleware.

Caps the whole request body (attachment plus form fields) at max_bytes.
Requests declaring a larger Content-Length are rejected before the body is
read; bodies without Content-Length (chunked) are counted while buffered.
Uses raw ASGI (no BaseHTTPMiddleware) so streaming responses are unaffected.
"""

from typing import Any, Callable

from app.middleware._asgi import get_header, send_json


async def _send_413(send: Callable, max_bytes: int, actual: int | None = None) -> None:
    details: dict[str, Any] = {"max_bytes": max_bytes}
    if actual is not None:
        details["content_length"] = actual
    await send_json(
        send,
        413,
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": details,
        },
    )


def _replay(chunks: list[bytes]) -> Callable:
    """receive() that hands the buffered chunks to the app one message at a time."""
    index = 0

    async def receive() -> dict:
        nonlocal index
        if index < len(chunks):
            body = chunks[index]
            index += 1
            return {"type": "http.request", "body": body, "more_body": index < len(chunks)}
        return {"type": "http.request", "body": b"", "more_body": False}

    return receive


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes with 413. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") in ("GET", "HEAD", "OPTIONS"):
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                length = None
            if length is not None and length > max_bytes:
                await _send_413(send, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _send_413(send, max_bytes, total)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break
        await app(scope, _replay(chunks), send)

    return asgi_app

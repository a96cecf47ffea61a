"""Request ID middleware (raw ASGI).

Each request gets an id: the client's X-Request-ID when it is a short token of
letters, digits, '-' and '_', otherwise a fresh UUID4. The id is stored on
scope["state"]["request_id"] and echoed on the response.
"""

import re
import uuid
from typing import Callable

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(rf"[A-Za-z0-9_-]{{1,{REQUEST_ID_MAX_LENGTH}}}")


def sanitize_request_id(raw: str | None) -> str:
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app so every HTTP response carries header_name."""
    header_key = header_name.lower().encode("latin-1")

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        incoming = next(
            (v.decode("latin-1") for k, v in scope.get("headers", []) if k.lower() == header_key),
            None,
        )
        request_id = sanitize_request_id(incoming)
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_key, request_id.encode("latin-1")),
                ]
            await send(message)

        await app(scope, receive, send_with_request_id)

    return asgi_app

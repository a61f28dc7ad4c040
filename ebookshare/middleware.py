"""Raw ASGI middleware enforcing MAX_REQUEST_BYTES on the bytes actually received."""

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ebookshare.core.errors import PayloadTooLarge


class BodySizeLimitMiddleware:
    """
    Reject requests whose body exceeds max_bytes with 413.

    Content-Length is checked first; chunked bodies carry none, so the body is
    read up to the limit and then replayed to the app.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    def _too_large(self) -> JSONResponse:
        exc = PayloadTooLarge(f"Request body must not exceed {self.max_bytes} bytes.")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        headers_list = list(scope.get("headers") or [])
        content_length = next((v for k, v in headers_list if k.lower() == b"content-length"), b"")
        if content_length.isdigit() and int(content_length) > self.max_bytes:
            await self._too_large()(scope, receive, send)
            return

        buffered: list[Message] = []
        received = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_bytes:
                await self._too_large()(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)

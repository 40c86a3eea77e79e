"""
Request Logging Middleware

Pure ASGI middleware that logs each HTTP request's headers and body before
handing it to the application, then logs the response status and duration.
The body is read once and replayed to the downstream app unchanged.
"""

import time
import logging
from typing import List

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Middleware to log incoming requests and their outcome"""

    def __init__(self, app, log_bodies: bool = True):
        self.app = app
        self.log_bodies = log_bodies

    async def _read_body(self, receive) -> bytes:
        chunks: List[bytes] = []
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] != "http.request":
                break
            chunks.append(message.get("body", b""))
            more_body = message.get("more_body", False)
        return b"".join(chunks)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method")
        path = scope.get("path")
        downstream_receive = receive

        if self.log_bodies:
            headers = {k.decode("latin-1"): v.decode("latin-1") for k, v in scope.get("headers", [])}
            logger.info(f"Request Headers: {headers}")
            body = await self._read_body(receive)
            logger.info(f"Request Body: {body.decode('utf-8', errors='replace')}")

            replayed = False

            async def replay_receive():
                nonlocal replayed
                if not replayed:
                    replayed = True
                    return {"type": "http.request", "body": body, "more_body": False}
                return await receive()

            downstream_receive = replay_receive

        start_time = time.time()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, downstream_receive, send_wrapper)
        finally:
            elapsed_ms = (time.time() - start_time) * 1000
            logger.info(f"{method} {path} -> {status_code} ({elapsed_ms:.1f} ms)")

# evictiontracker/middleware/request_id.py
from __future__ import annotations

import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Generates or propagates X-Request-ID and stores it in request.state.request_id.
    Adds the header to every response.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        req_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = req_id

        response: Response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = req_id
        return response

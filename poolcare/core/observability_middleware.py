from __future__ import annotations

import json
import logging
import re
from time import perf_counter
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from poolcare.services.observability import observability_tracker

logger = logging.getLogger("poolcare.request")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logging.getLogger("poolcare").setLevel(level.upper())


UNMATCHED_ROUTE = "<unmatched>"

_PATH_PARAM = re.compile(r"{(\w+)(?::\w+)?}")


def _route_template(request: Request) -> str:
    """Full route template for the request, e.g. ``/api/v1/pools/{pool_id}``.

    Depending on the FastAPI version, the matched route's ``path`` may or may not
    carry the ``include_router`` prefix, so the prefix is recovered from the
    concrete request path instead.
    """
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    if route is None or template is None:
        return UNMATCHED_ROUTE

    path_params = request.scope.get("path_params", {})
    concrete = _PATH_PARAM.sub(lambda match: str(path_params.get(match.group(1), match.group(0))), template)
    path = request.url.path
    if path.endswith(concrete):
        return path[: len(path) - len(concrete)] + template
    return request.scope.get("root_path", "") + template


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        started = perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            status_code = 500
            duration_ms = self._record(request, status_code, started)
            logger.exception(json.dumps(self._payload("request_error", request, request_id, status_code, duration_ms)))
            response = JSONResponse(
                status_code=status_code,
                content={"detail": "Internal server error", "request_id": request_id},
            )
        else:
            status_code = response.status_code
            duration_ms = self._record(request, status_code, started)
            line = json.dumps(self._payload("request_completed", request, request_id, status_code, duration_ms))
            if status_code >= 500:
                logger.error(line)
            elif status_code >= 400:
                logger.warning(line)
            else:
                logger.info(line)

        response.headers["X-Request-ID"] = request_id
        return response

    @staticmethod
    def _record(request: Request, status_code: int, started: float) -> float:
        duration_ms = (perf_counter() - started) * 1000
        observability_tracker.record(
            method=request.method,
            route=_route_template(request),
            status_code=status_code,
            duration_ms=duration_ms,
        )
        return duration_ms

    @staticmethod
    def _payload(
        event: str,
        request: Request,
        request_id: str,
        status_code: int,
        duration_ms: float,
    ) -> dict[str, object]:
        return {
            "event": event,
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "route": _route_template(request),
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "user_id": getattr(request.state, "user_id", None),
            "org_id": getattr(request.state, "org_id", None),
        }

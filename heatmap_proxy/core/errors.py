import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class HeatmapProxyError(Exception):
    """Base error translated into a JSON `{"error": ...}` response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HeatmapProxyError):
    """Raised when a required query parameter is missing or invalid."""

    status_code = 400


class UpstreamError(HeatmapProxyError):
    """Raised when the GitHub GraphQL request fails for a user."""

    def __init__(
        self,
        username: str,
        upstream_status: int | None = None,
        reason: str | None = None,
    ) -> None:
        if reason is not None:
            message = f"GitHub API request failed for user '{username}': {reason}"
        elif upstream_status is None:
            message = f"GitHub API request failed for user '{username}'"
        else:
            message = (
                f"GitHub API request failed for user '{username}' "
                f"with status {upstream_status}"
            )
        super().__init__(message)
        self.username = username
        self.upstream_status = upstream_status


class RenderError(HeatmapProxyError):
    """Raised when contributions cannot be combined or rasterized."""


async def heatmap_proxy_error_handler(
    request: Request, exc: HeatmapProxyError
) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    """Install the single error-to-response translation layer on `app`."""

    app.add_exception_handler(HeatmapProxyError, heatmap_proxy_error_handler)

import io
import logging
from typing import Any

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query
from fastapi import Request
from fastapi.responses import StreamingResponse

from heatmap_proxy.api.schemas.contributions import ThemesResponse
from heatmap_proxy.core.errors import HeatmapProxyError
from heatmap_proxy.core.errors import RenderError
from heatmap_proxy.core.errors import ValidationError
from heatmap_proxy.github_api import fetch_contributions
from heatmap_proxy.services.contributions_service import build_combined_image
from heatmap_proxy.services.themes import get_theme
from heatmap_proxy.services.themes import list_themes
from heatmap_proxy.settings import Settings


logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    return request.app.state.settings


def parse_usernames(raw_usernames: str | None) -> list[str]:
    if not raw_usernames:
        return []
    return [name.strip() for name in raw_usernames.split(",") if name.strip()]


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/themes")
def get_themes() -> ThemesResponse:
    return ThemesResponse(themes=list_themes())


@router.get("/contributions")
async def get_contributions(
    username: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Proxy the GitHub contribution calendar of a single user."""

    if username is None or not username.strip():
        raise ValidationError("username is required")

    return await fetch_contributions(
        username.strip(),
        token=settings.github_token,
        graphql_url=settings.github_graphql_url,
        timeout=settings.github_timeout_seconds,
    )


@router.get("/combined-contributions")
async def get_combined_contributions(
    usernames: str | None = Query(default=None),
    theme: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    """Render one PNG heat-map of the summed contributions of several users."""

    names = parse_usernames(usernames)
    if not names:
        raise ValidationError("At least one username is required")

    selected_theme = get_theme(theme)
    logger.info(
        "Rendering combined contributions for %s with theme %s",
        ", ".join(names),
        selected_theme.name,
    )

    try:
        image_bytes = await build_combined_image(names, selected_theme, settings)
    except HeatmapProxyError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure while building combined image")
        raise RenderError(str(exc) or exc.__class__.__name__) from exc

    return StreamingResponse(io.BytesIO(image_bytes), media_type="image/png")

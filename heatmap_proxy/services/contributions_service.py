import asyncio
import logging
from collections.abc import Mapping
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from heatmap_proxy.api.schemas.contributions import ContributionCalendar
from heatmap_proxy.core.errors import HeatmapProxyError
from heatmap_proxy.core.errors import RenderError
from heatmap_proxy.core.errors import UpstreamError
from heatmap_proxy.github_api import fetch_contributions
from heatmap_proxy.services.combine_service import combine_contributions
from heatmap_proxy.services.image_service import create_contributions_image
from heatmap_proxy.services.themes import Theme
from heatmap_proxy.settings import Settings


logger = logging.getLogger(__name__)


def extract_calendar(payload: Mapping[str, Any], username: str) -> ContributionCalendar:
    """Pull the contribution calendar out of a GraphQL response envelope."""

    data = payload.get("data")
    user = data.get("user") if isinstance(data, Mapping) else None
    if not isinstance(user, Mapping):
        if payload.get("errors"):
            raise UpstreamError(username, reason="GitHub GraphQL returned errors")
        raise UpstreamError(username, reason="user not found")

    collection = user.get("contributionsCollection")
    calendar = (
        collection.get("contributionCalendar")
        if isinstance(collection, Mapping)
        else None
    )
    if not isinstance(calendar, Mapping):
        raise UpstreamError(username, reason="contribution calendar is missing")

    try:
        return ContributionCalendar.model_validate(calendar)
    except PydanticValidationError as exc:
        raise UpstreamError(
            username, reason="contribution calendar is invalid"
        ) from exc


async def fetch_all_contributions(
    usernames: Sequence[str],
    *,
    token: str | None,
    graphql_url: str,
    timeout: float = 20.0,
) -> list[dict[str, Any]]:
    """Fetch every user's calendar concurrently, failing on the first error.

    A failed request cancels the ones still in flight and its error is
    re-raised as is. Results keep the order of `usernames`.
    """

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(
                        fetch_contributions(
                            username,
                            token=token,
                            graphql_url=graphql_url,
                            client=client,
                            timeout=timeout,
                        )
                    )
                    for username in usernames
                ]
    except ExceptionGroup as group_error:
        first_error = group_error.exceptions[0]
        if len(group_error.exceptions) > 1:
            logger.warning(
                "%d of %d GitHub requests failed",
                len(group_error.exceptions),
                len(usernames),
            )
        raise first_error from None

    return [task.result() for task in tasks]


async def build_combined_image(
    usernames: Sequence[str],
    theme: Theme,
    app_settings: Settings,
) -> bytes:
    """Fetch, combine and render the contribution heat-map for `usernames`."""

    payloads = await fetch_all_contributions(
        usernames,
        token=app_settings.github_token,
        graphql_url=app_settings.github_graphql_url,
        timeout=app_settings.github_timeout_seconds,
    )
    calendars = [
        extract_calendar(payload, username)
        for payload, username in zip(payloads, usernames)
    ]

    try:
        series = combine_contributions(calendars)
        return create_contributions_image(series, theme, list(usernames))
    except HeatmapProxyError:
        raise
    except Exception as exc:
        raise RenderError(f"Failed to render contributions image: {exc}") from exc

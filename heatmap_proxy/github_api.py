import logging
from typing import Any

import httpx

from heatmap_proxy.core.errors import UpstreamError


logger = logging.getLogger(__name__)

CONTRIBUTIONS_QUERY = """
query($userName: String!) {
  user(login: $userName) {
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            contributionCount
            date
          }
        }
      }
    }
  }
}
"""


async def fetch_contributions(
    username: str,
    *,
    token: str | None,
    graphql_url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = 20.0,
) -> dict[str, Any]:
    """Fetch the contribution calendar envelope for a user from GitHub GraphQL.

    The parsed JSON body is returned unmodified.

    Raises:
        UpstreamError: If GitHub answers with a non-success status or the
            request cannot be sent.
    """

    headers = {
        "Authorization": f"Bearer {token or ''}",
        "Content-Type": "application/json",
        "User-Agent": "heatmap-proxy",
    }
    body = {"query": CONTRIBUTIONS_QUERY, "variables": {"userName": username}}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.post(graphql_url, json=body, headers=headers)
        else:
            response = await client.post(
                graphql_url, json=body, headers=headers, timeout=timeout
            )
    except httpx.HTTPError as exc:
        logger.warning("GitHub request for %s could not be sent: %s", username, exc)
        raise UpstreamError(username) from exc

    if not response.is_success:
        logger.warning(
            "GitHub responded %s for %s", response.status_code, username
        )
        raise UpstreamError(username, response.status_code)

    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamError(username, reason="response is not valid JSON") from exc

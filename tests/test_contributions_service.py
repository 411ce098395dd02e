import asyncio

import pytest

from heatmap_proxy.core.errors import UpstreamError
from heatmap_proxy.services.contributions_service import extract_calendar
from heatmap_proxy.services.contributions_service import fetch_all_contributions


def test_extract_calendar_reads_nested_calendar(calendar_payload) -> None:
    calendar = extract_calendar(calendar_payload([4, 0, 2, 1, 0, 0, 0, 3]), "octocat")

    assert calendar.total_contributions == 10
    assert len(calendar.weeks) == 2
    assert [day.count for day in calendar.flatten()] == [4, 0, 2, 1, 0, 0, 0, 3]


def test_extract_calendar_rejects_unknown_user() -> None:
    payload = {
        "data": {"user": None},
        "errors": [{"type": "NOT_FOUND", "message": "Could not resolve to a User"}],
    }

    with pytest.raises(UpstreamError) as exc_info:
        extract_calendar(payload, "ghost")

    assert exc_info.value.username == "ghost"


def test_extract_calendar_rejects_malformed_calendar() -> None:
    payload = {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {"totalContributions": 1, "weeks": "x"}
                }
            }
        }
    }

    with pytest.raises(UpstreamError):
        extract_calendar(payload, "octocat")


def test_fetch_all_contributions_keeps_username_order(
    monkeypatch, calendar_payload
) -> None:
    delays = {"a": 0.05, "b": 0.0, "c": 0.02}

    async def fake_fetch(username, *, token, graphql_url, client, timeout):
        await asyncio.sleep(delays[username])
        return calendar_payload([ord(username)])

    monkeypatch.setattr(
        "heatmap_proxy.services.contributions_service.fetch_contributions", fake_fetch
    )

    results = asyncio.run(
        fetch_all_contributions(["a", "b", "c"], token="t", graphql_url="http://x")
    )

    totals = [
        result["data"]["user"]["contributionsCollection"]["contributionCalendar"][
            "totalContributions"
        ]
        for result in results
    ]
    assert totals == [ord("a"), ord("b"), ord("c")]


def test_fetch_all_contributions_fails_fast_and_cancels_siblings(
    monkeypatch, calendar_payload
) -> None:
    cancelled: list[str] = []

    async def fake_fetch(username, *, token, graphql_url, client, timeout):
        if username == "b":
            raise UpstreamError(username, 502)
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(username)
            raise
        return calendar_payload([1])

    monkeypatch.setattr(
        "heatmap_proxy.services.contributions_service.fetch_contributions", fake_fetch
    )

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(
            fetch_all_contributions(["a", "b"], token="t", graphql_url="http://x")
        )

    assert exc_info.value.username == "b"
    assert exc_info.value.upstream_status == 502
    assert cancelled == ["a"]

import pytest

from heatmap_proxy.api.schemas.contributions import ContributionCalendar
from heatmap_proxy.core.errors import RenderError
from heatmap_proxy.services.combine_service import combine_contributions
from tests.factories import build_calendar_payload


def make_calendar(counts: list[int]) -> ContributionCalendar:
    payload = build_calendar_payload(counts)
    raw = payload["data"]["user"]["contributionsCollection"]["contributionCalendar"]
    return ContributionCalendar.model_validate(raw)


def test_single_calendar_is_flattened_unchanged() -> None:
    counts = [0, 3, 1, 0, 7, 2, 0, 5, 1]
    calendar = make_calendar(counts)

    series = combine_contributions([calendar])

    assert series.contributions == counts
    assert series.dates == [day.date.isoformat() for day in calendar.flatten()]
    assert series.dates[0] == "2025-10-19"
    assert series.dates[-1] == "2025-10-27"


def test_calendars_are_summed_by_position() -> None:
    first = make_calendar([1, 0, 2, 0, 0, 0, 4, 1])
    second = make_calendar([0, 5, 1, 0, 3, 0, 0, 2])
    third = make_calendar([2, 2, 2, 2, 2, 2, 2, 2])

    series = combine_contributions([first, second, third])

    assert series.contributions == [3, 7, 5, 2, 5, 2, 6, 5]
    assert len(series.dates) == len(series.contributions) == 8


def test_dates_come_from_first_calendar() -> None:
    first = make_calendar([1, 1])
    second = ContributionCalendar.model_validate(
        {
            "totalContributions": 2,
            "weeks": [
                {
                    "contributionDays": [
                        {"contributionCount": 1, "date": "2024-01-01"},
                        {"contributionCount": 1, "date": "2024-01-02"},
                    ]
                }
            ],
        }
    )

    series = combine_contributions([first, second])

    assert series.dates == ["2025-10-19", "2025-10-20"]
    assert series.contributions == [2, 2]


def test_combine_requires_a_calendar() -> None:
    with pytest.raises(RenderError):
        combine_contributions([])


def test_combine_rejects_calendars_of_different_length() -> None:
    with pytest.raises(RenderError) as exc_info:
        combine_contributions([make_calendar([1, 2, 3]), make_calendar([1, 2])])

    assert "has 2 days, expected 3" in exc_info.value.message

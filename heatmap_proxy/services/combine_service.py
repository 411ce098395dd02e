from collections.abc import Sequence

from heatmap_proxy.api.schemas.contributions import CombinedSeries
from heatmap_proxy.api.schemas.contributions import ContributionCalendar
from heatmap_proxy.core.errors import RenderError


def combine_contributions(calendars: Sequence[ContributionCalendar]) -> CombinedSeries:
    """Sum daily counts of several calendars position by position.

    Dates come from the first calendar only. Every calendar must flatten to
    the same number of days, since days are matched by index, not by date.
    """

    if not calendars:
        raise RenderError("At least one contribution calendar is required")

    first_days = calendars[0].flatten()
    dates = [day.date.isoformat() for day in first_days]
    contributions = [day.count for day in first_days]

    for position, calendar in enumerate(calendars[1:], start=1):
        days = calendar.flatten()
        if len(days) != len(contributions):
            raise RenderError(
                f"Contribution calendar {position} has {len(days)} days, "
                f"expected {len(contributions)}"
            )
        for index, day in enumerate(days):
            contributions[index] += day.count

    return CombinedSeries(dates=dates, contributions=contributions)

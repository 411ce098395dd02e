from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ContributionDay(BaseModel):
    """Single calendar day as returned by the GitHub GraphQL API."""

    model_config = ConfigDict(populate_by_name=True)

    date: date
    count: int = Field(alias="contributionCount", ge=0)


class ContributionWeek(BaseModel):
    """Chronological week of up to seven contribution days."""

    model_config = ConfigDict(populate_by_name=True)

    days: list[ContributionDay] = Field(alias="contributionDays")


class ContributionCalendar(BaseModel):
    """Trailing-year contribution calendar for one user."""

    model_config = ConfigDict(populate_by_name=True)

    total_contributions: int = Field(alias="totalContributions")
    weeks: list[ContributionWeek]

    def flatten(self) -> list[ContributionDay]:
        return [day for week in self.weeks for day in week.days]


class CombinedSeries(BaseModel):
    """Per-day contribution totals summed across several users."""

    dates: list[str]
    contributions: list[int]


class ThemesResponse(BaseModel):
    themes: list[str]

"""Field types shared by the analysis result models."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator

from ..domain_type import MatchupDifficulty, RiskLevel, Trend
from ..sanitize import LenientModel, Points, clamped, nested, one_of, text_or


def utc_now() -> datetime:
    return datetime.now(UTC)


# Always stamped locally; whatever the backend claims is ignored
GeneratedAt = Annotated[datetime, BeforeValidator(lambda _value: utc_now())]

Risk = one_of(RiskLevel, RiskLevel.MEDIUM)
Difficulty = one_of(MatchupDifficulty, MatchupDifficulty.MEDIUM)
TrendField = one_of(Trend, Trend.STABLE)
PlayerId = text_or("unknown")
PlayerName = text_or("Unknown Player")
Position = text_or("UNKNOWN")
Percent = clamped(0.0, 100.0, 50.0)


class ProjectedPoints(LenientModel):
    """Fantasy point range for one player or lineup."""

    floor: Points = 0.0
    expected: Points = 0.0
    ceiling: Points = 0.0


ProjectedRange = nested(ProjectedPoints)


__all__ = [
    "Difficulty",
    "GeneratedAt",
    "Percent",
    "PlayerId",
    "PlayerName",
    "Position",
    "ProjectedPoints",
    "ProjectedRange",
    "Risk",
    "TrendField",
    "utc_now",
]

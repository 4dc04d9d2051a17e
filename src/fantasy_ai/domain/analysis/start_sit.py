"""Start/Sit Results.

StartSitAnalysis covers a whole roster; StartSitRecommendation is both the
per-player entry inside it and the result of a quick single-player call.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Self

from pydantic import Field, ValidationInfo, model_validator

from ..domain_type import MatchupDifficulty, StartSitCall
from ..sanitize import (
    Confidence,
    LenientModel,
    StringList,
    StringMap,
    clamped,
    nested,
    object_list,
    one_of,
    text_or,
)
from .common import Difficulty, GeneratedAt, PlayerId, PlayerName, Position, ProjectedPoints, ProjectedRange, utc_now


class MatchupAnalysis(LenientModel):
    opponent: text_or("Unknown") = "Unknown"
    difficulty: Difficulty = MatchupDifficulty.MEDIUM
    key_factors: StringList = Field(default_factory=list)


class StartSitRecommendation(LenientModel):
    player_id: PlayerId = "unknown"
    player_name: PlayerName = "Unknown Player"
    position: Position = "UNKNOWN"
    recommendation: one_of(StartSitCall, StartSitCall.SIT) = StartSitCall.SIT
    confidence: Confidence = 0.5
    reasoning: text_or("No reasoning provided") = "No reasoning provided"
    projected_points: ProjectedRange = Field(default_factory=ProjectedPoints)
    matchup_analysis: nested(MatchupAnalysis) = Field(default_factory=MatchupAnalysis)
    risk_factors: StringList = Field(default_factory=list)
    alternative_options: StringList = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _with_requested_player(cls, data: Any, info: ValidationInfo) -> Any:
        """A quick call about one player defaults the id to that player."""
        player_id = (info.context or {}).get("player_id")
        if not isinstance(data, Mapping) or not player_id:
            return data
        if isinstance(data.get("playerId"), str) and data["playerId"]:
            return data
        return {**data, "playerId": player_id}

    @classmethod
    def fallback(cls, player_id: str = "unknown", **context: Any) -> Self:
        return cls(
            player_id=player_id,
            confidence=0.1,
            reasoning="Quick analysis failed",
            risk_factors=["Analysis unavailable"],
        )

    @classmethod
    def unavailable(cls, player_id: str) -> Self:
        """Placeholder entry used when a full roster analysis fails."""
        return cls(
            player_id=player_id,
            confidence=0.1,
            reasoning="Analysis failed - manual review required",
            matchup_analysis=MatchupAnalysis(key_factors=["Analysis failed"]),
            risk_factors=["AI analysis unavailable"],
        )


class StartSitAnalysis(LenientModel):
    recommendations: object_list(StartSitRecommendation) = Field(default_factory=list)
    optimal_lineup: StringMap = Field(default_factory=dict)
    bench_players: StringList = Field(default_factory=list)
    confidence_score: clamped(0.0, 1.0, 0.7) = 0.7
    weekly_outlook: text_or("Analysis completed") = "Analysis completed"
    key_insights: StringList = Field(default_factory=list)
    last_updated: GeneratedAt = Field(default_factory=utc_now)

    @classmethod
    def fallback(cls, player_ids: Sequence[str] = (), **context: Any) -> Self:
        """Every requested player benched at low confidence."""
        return cls(
            recommendations=[StartSitRecommendation.unavailable(player_id) for player_id in player_ids],
            bench_players=list(player_ids),
            confidence_score=0.1,
            weekly_outlook="Analysis failed - please try again",
            key_insights=["AI analysis is currently unavailable"],
        )


__all__ = ["MatchupAnalysis", "StartSitAnalysis", "StartSitRecommendation"]

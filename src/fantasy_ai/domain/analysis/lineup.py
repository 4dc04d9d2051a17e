"""Lineup Optimization Results.

Structure:
    LineupOptimization
    ├─ optimal_lineup: LineupScenario (slot → player id, projected total, risk)
    ├─ alternative_lineups: LineupScenario[] (e.g. high floor, high ceiling)
    ├─ player_projections: PlayerProjection[] (floor/expected/ceiling + factors)
    ├─ bench_analysis: BenchAnalysis[] (keep/drop, upcoming value 1-10)
    ├─ key_decisions: KeyDecision[] (close calls per slot)
    └─ stacking_opportunities: StackingOpportunity[] (correlation 0-1)

PlayerProjectionSet wraps the projections returned by player comparisons and
positional rankings.
"""

from collections.abc import Sequence
from typing import Any, Self

from pydantic import Field

from ..domain_type import KeepOrDrop, MatchupRating, RiskLevel, SlotDecision
from ..sanitize import (
    Confidence,
    LenientModel,
    StringList,
    StringMap,
    clamped,
    nested,
    object_list,
    one_of,
    optional_clamped,
    text_or,
)
from .common import GeneratedAt, Percent, PlayerId, PlayerName, Position, ProjectedPoints, ProjectedRange, Risk, utc_now

Factor = clamped(-2.0, 2.0, 0.0)
UpcomingScore = clamped(1.0, 10.0, 5.0)


class ProjectionFactors(LenientModel):
    recent_form: Factor = 0.0
    matchup_advantage: Factor = 0.0
    weather_impact: Factor = 0.0
    injury_risk: clamped(0.0, 2.0, 0.0) = 0.0
    game_script: Factor = 0.0


class PlayerProjection(LenientModel):
    player_id: PlayerId = "unknown"
    player_name: PlayerName = "Unknown Player"
    position: Position = "UNKNOWN"
    team: text_or("FA") = "FA"
    opponent: text_or("BYE") = "BYE"
    projected_points: ProjectedRange = Field(default_factory=ProjectedPoints)
    confidence: Confidence = 0.5
    start_probability: Percent = 50.0
    variance: clamped(0.0, None, 0.0) = 0.0
    matchup_rating: one_of(MatchupRating, MatchupRating.AVERAGE) = MatchupRating.AVERAGE
    factors: nested(ProjectionFactors) = Field(default_factory=ProjectionFactors)
    reasoning: text_or("No analysis provided") = "No analysis provided"


class LineupScenario(LenientModel):
    scenario_name: text_or("Unknown Scenario") = "Unknown Scenario"
    lineup: StringMap = Field(default_factory=dict)
    projected_total: ProjectedRange = Field(default_factory=ProjectedPoints)
    confidence: Confidence = 0.5
    risk_level: Risk = RiskLevel.MEDIUM
    reasoning: text_or("No reasoning provided") = "No reasoning provided"
    advantages: StringList = Field(default_factory=list)
    concerns: StringList = Field(default_factory=list)
    win_probability: optional_clamped(0.0, 100.0) = None


class UpcomingValue(LenientModel):
    """Bench player outlook, each on a 1-10 scale."""

    next_week: UpcomingScore = 5.0
    rest_of_season: UpcomingScore = 5.0
    playoff_schedule: UpcomingScore = 5.0


class BenchAnalysis(LenientModel):
    player_id: PlayerId = "unknown"
    player_name: PlayerName = "Unknown Player"
    position: Position = "UNKNOWN"
    bench_reason: text_or("Lower projected points") = "Lower projected points"
    alternative_scenarios: StringList = Field(default_factory=list)
    keep_or_drop: one_of(KeepOrDrop, KeepOrDrop.KEEP) = KeepOrDrop.KEEP
    upcoming_value: nested(UpcomingValue) = Field(default_factory=UpcomingValue)


class DecisionOption(LenientModel):
    player_id: PlayerId = "unknown"
    player_name: PlayerName = "Unknown Player"
    pros: StringList = Field(default_factory=list)
    cons: StringList = Field(default_factory=list)
    recommendation: one_of(SlotDecision, SlotDecision.CONSIDER) = SlotDecision.CONSIDER


class KeyDecision(LenientModel):
    position: text_or("FLEX") = "FLEX"
    options: object_list(DecisionOption) = Field(default_factory=list)
    recommendation: text_or("No recommendation provided") = "No recommendation provided"


class StackingOpportunity(LenientModel):
    players: StringList = Field(default_factory=list)
    correlation: clamped(0.0, 1.0, 0.0) = 0.0
    upside: text_or("Moderate correlation upside") = "Moderate correlation upside"
    risk: text_or("Standard correlation risk") = "Standard correlation risk"


class LineupOptimization(LenientModel):
    optimal_lineup: nested(LineupScenario) = Field(default_factory=LineupScenario)
    alternative_lineups: object_list(LineupScenario) = Field(default_factory=list)
    player_projections: object_list(PlayerProjection) = Field(default_factory=list)
    bench_analysis: object_list(BenchAnalysis) = Field(default_factory=list)
    key_decisions: object_list(KeyDecision) = Field(default_factory=list)
    stacking_opportunities: object_list(StackingOpportunity) = Field(default_factory=list)
    last_updated: GeneratedAt = Field(default_factory=utc_now)

    @classmethod
    def fallback(
        cls,
        roster_slots: Sequence[str] = (),
        available_players: Sequence[str] = (),
        **context: Any,
    ) -> Self:
        """Slots filled with available players in order, flagged for manual review."""
        lineup = {
            slot: available_players[index] if index < len(available_players) else "unknown"
            for index, slot in enumerate(roster_slots)
        }
        scenario = LineupScenario(
            scenario_name="Fallback Lineup",
            lineup=lineup,
            confidence=0.1,
            reasoning="Lineup optimization failed - manual review required",
            concerns=["AI analysis unavailable"],
        )
        return cls(optimal_lineup=scenario)


class PlayerProjectionSet(LenientModel):
    """Projections from a player comparison or positional ranking."""

    player_projections: object_list(PlayerProjection) = Field(default_factory=list)
    last_updated: GeneratedAt = Field(default_factory=utc_now)


__all__ = [
    "BenchAnalysis",
    "DecisionOption",
    "KeyDecision",
    "LineupOptimization",
    "LineupScenario",
    "PlayerProjection",
    "PlayerProjectionSet",
    "ProjectionFactors",
    "StackingOpportunity",
    "UpcomingValue",
]

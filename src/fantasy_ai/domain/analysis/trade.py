"""Trade Analysis Results.

Every field is sanitized the same way as the other analyses: a missing grade
becomes "C", a missing decision becomes "consider", and the four core
positions always carry a before/after strength rating (0-10, default 5).

Derived values are computed rather than trusted:
    PositionChange.change      = after - before
    MarketValue.difference     = team1_total - team2_total
"""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import Field, computed_field, field_validator

from ..domain_type import RiskLevel, TradeDecision, TradeGrade, ValueVerdict
from ..sanitize import (
    Confidence,
    LenientModel,
    Points,
    StringList,
    as_mapping,
    clamped,
    flag,
    nested,
    object_list,
    one_of,
    optional_nested,
    text_or,
)
from .common import GeneratedAt, PlayerId, Risk, utc_now

CORE_POSITIONS = ("QB", "RB", "WR", "TE")

Strength = clamped(0.0, 10.0, 5.0)
ImpactScale = clamped(-5.0, 5.0, 0.0)


class PositionChange(LenientModel):
    before: Strength = 5.0
    after: Strength = 5.0

    @computed_field
    @property
    def change(self) -> float:
        return self.after - self.before


class TradeImpact(LenientModel):
    positional_change: dict[str, PositionChange] = Field(
        default_factory=lambda: {position: PositionChange() for position in CORE_POSITIONS}
    )
    starting_lineup_impact: ImpactScale = 0.0
    depth_chart_impact: ImpactScale = 0.0
    bye_week_help: flag() = False
    playoff_implications: text_or("Minimal impact") = "Minimal impact"

    @field_validator("positional_change", mode="before")
    @classmethod
    def _with_core_positions(cls, value: Any) -> dict[str, Any]:
        """Core positions always present; non-object entries fall back to defaults."""
        data = value if isinstance(value, Mapping) else {}
        positions = {str(key): as_mapping(entry) for key, entry in data.items()}
        for position in CORE_POSITIONS:
            positions.setdefault(position, {})
        return positions


class CounterOffer(LenientModel):
    description: text_or("No counter offer details") = "No counter offer details"
    adjustments: StringList = Field(default_factory=list)


class TradeRecommendation(LenientModel):
    decision: one_of(TradeDecision, TradeDecision.CONSIDER) = TradeDecision.CONSIDER
    confidence: Confidence = 0.5
    reasoning: text_or("Analysis incomplete") = "Analysis incomplete"
    pros: StringList = Field(default_factory=list)
    cons: StringList = Field(default_factory=list)
    counter_offer_suggestion: optional_nested(CounterOffer) = None


class TeamTradeAnalysis(LenientModel):
    grade: one_of(TradeGrade, TradeGrade.C) = TradeGrade.C
    impact: nested(TradeImpact) = Field(default_factory=TradeImpact)
    recommendation: nested(TradeRecommendation) = Field(default_factory=TradeRecommendation)


class MarketValue(LenientModel):
    team1_total: Points = 0.0
    team2_total: Points = 0.0
    value_verdict: one_of(ValueVerdict, ValueVerdict.FAIR) = ValueVerdict.FAIR

    @computed_field
    @property
    def difference(self) -> float:
        return self.team1_total - self.team2_total


class RiskAssessment(LenientModel):
    team1_risk: Risk = RiskLevel.MEDIUM
    team2_risk: Risk = RiskLevel.MEDIUM
    risk_factors: StringList = Field(default_factory=list)


class TradeTiming(LenientModel):
    optimal_timing: flag() = False
    season_context: text_or("Unknown timing") = "Unknown timing"
    urgency: Risk = RiskLevel.MEDIUM


class TradeAnalysis(LenientModel):
    fairness_score: clamped(0.0, 10.0, 5.0) = 5.0
    team1_analysis: nested(TeamTradeAnalysis) = Field(default_factory=TeamTradeAnalysis)
    team2_analysis: nested(TeamTradeAnalysis) = Field(default_factory=TeamTradeAnalysis)
    market_value: nested(MarketValue) = Field(default_factory=MarketValue)
    risk_assessment: nested(RiskAssessment) = Field(default_factory=RiskAssessment)
    timing: nested(TradeTiming) = Field(default_factory=TradeTiming)
    summary: text_or("Trade analysis completed") = "Trade analysis completed"
    key_insights: StringList = Field(default_factory=list)
    similar_trades: StringList = Field(default_factory=list)
    last_updated: GeneratedAt = Field(default_factory=utc_now)

    @classmethod
    def fallback(cls, **context: Any) -> Self:
        return cls(
            summary="Trade analysis failed - manual review required",
            key_insights=["AI analysis is currently unavailable"],
        )


class PlayerTradeValue(LenientModel):
    player_id: PlayerId = "unknown"
    player_name: text_or("Unknown Player") = "Unknown Player"
    value: clamped(0.0, 100.0, 50.0) = 50.0
    tier: text_or("Tier 5") = "Tier 5"
    reasoning: text_or("No reasoning provided") = "No reasoning provided"


class PlayerTradeValues(LenientModel):
    """Trade values (0-100) and tiers for a set of players."""

    player_values: object_list(PlayerTradeValue) = Field(default_factory=list)
    last_updated: GeneratedAt = Field(default_factory=utc_now)

    def missing(self, player_ids: list[str]) -> list[str]:
        """Requested players the backend did not value."""
        valued = {entry.player_id for entry in self.player_values}
        return [player_id for player_id in player_ids if player_id not in valued]


__all__ = [
    "CORE_POSITIONS",
    "CounterOffer",
    "MarketValue",
    "PlayerTradeValue",
    "PlayerTradeValues",
    "PositionChange",
    "RiskAssessment",
    "TeamTradeAnalysis",
    "TradeAnalysis",
    "TradeImpact",
    "TradeRecommendation",
    "TradeTiming",
]

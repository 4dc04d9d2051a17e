"""Waiver Wire Results.

WaiverPickup is the shared unit: top pickups, sleepers, streaming options,
quick pickup calls. Priority is 1-10 (1 = highest); when a backend omits it
inside a list, the item's position in that list (1-based) is used instead.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Self

from pydantic import BeforeValidator, Field, ValidationInfo, model_validator

from ..domain_type import DropSafety, Trend
from ..sanitize import (
    Confidence,
    IntList,
    LenientModel,
    StringList,
    clamped,
    clamped_int,
    flag,
    is_number,
    nested,
    object_list,
    one_of,
    optional_nested,
    text_or,
)
from .common import GeneratedAt, PlayerId, PlayerName, Position, TrendField, utc_now

Priority = clamped_int(1, 10, 5)
Bid = clamped(0.0, None, 1.0)


class ProjectedImpact(LenientModel):
    immediate_starter: flag() = False
    flex_consideration: flag() = False
    depth_upgrade: flag() = False
    future_upside: flag() = False


class BidRecommendation(LenientModel):
    """FAAB bid guidance (dollars)."""

    suggested: Bid = 1.0
    minimum: Bid = 1.0
    maximum: clamped(0.0, None, 5.0) = 5.0
    reasoning: text_or("Standard bid") = "Standard bid"


class RecentTrends(LenientModel):
    usage: TrendField = Trend.STABLE
    opportunity: TrendField = Trend.STABLE
    production: TrendField = Trend.STABLE


class WaiverPickup(LenientModel):
    player_id: PlayerId = "unknown"
    player_name: PlayerName = "Unknown Player"
    position: Position = "UNKNOWN"
    team: text_or("FA") = "FA"
    priority: Priority = 5
    confidence: Confidence = 0.5
    reasoning: text_or("No reasoning provided") = "No reasoning provided"
    projected_impact: nested(ProjectedImpact) = Field(default_factory=ProjectedImpact)
    bid_recommendation: optional_nested(BidRecommendation) = None
    target_weeks: IntList = Field(default_factory=list)
    drop_candidates: StringList = Field(default_factory=list)
    risk_factors: StringList = Field(default_factory=list)
    upside: text_or("Moderate upside potential") = "Moderate upside potential"
    recent_trends: nested(RecentTrends) = Field(default_factory=RecentTrends)


def _ranked_items(value: Any) -> list[Any]:
    """Objects only, with a missing priority replaced by list position."""
    if not isinstance(value, list):
        return []
    ranked: list[Any] = []
    for item in value:
        if isinstance(item, WaiverPickup):
            ranked.append(item)
        elif isinstance(item, Mapping):
            if not is_number(item.get("priority")):
                item = {**item, "priority": len(ranked) + 1}
            ranked.append(item)
    return ranked


RankedPickups = Annotated[list[WaiverPickup], BeforeValidator(_ranked_items)]


class StreamingPicks(LenientModel):
    defense: RankedPickups = Field(default_factory=list)
    kicker: RankedPickups = Field(default_factory=list)
    qb: RankedPickups = Field(default_factory=list)


class DropCandidate(LenientModel):
    player_id: PlayerId = "unknown"
    player_name: PlayerName = "Unknown Player"
    reasoning: text_or("Safe to drop") = "Safe to drop"
    safety_level: one_of(DropSafety, DropSafety.MODERATE_RISK) = DropSafety.MODERATE_RISK


class BudgetStrategy(LenientModel):
    aggressive_targets: StringList = Field(default_factory=list)
    conservative_targets: StringList = Field(default_factory=list)
    remaining_budget: clamped(0.0, None, 0.0) = 0.0
    allocation_advice: text_or("Budget strategy not available") = "Budget strategy not available"


class WaiverWireAnalysis(LenientModel):
    top_pickups: RankedPickups = Field(default_factory=list)
    sleepers: RankedPickups = Field(default_factory=list)
    streaming_options: nested(StreamingPicks) = Field(default_factory=StreamingPicks)
    drop_candidates: object_list(DropCandidate) = Field(default_factory=list)
    budget_strategy: optional_nested(BudgetStrategy) = None
    weekly_outlook: text_or("Waiver wire analysis completed") = "Waiver wire analysis completed"
    key_trends: StringList = Field(default_factory=list)
    last_updated: GeneratedAt = Field(default_factory=utc_now)

    @model_validator(mode="before")
    @classmethod
    def _budget_for_faab(cls, data: Any, info: ValidationInfo) -> Any:
        """FAAB leagues (a budget in context) always get a strategy; others never do."""
        if not isinstance(data, Mapping) or not info.context or "budget" not in info.context:
            return data
        budget = info.context["budget"]
        data = dict(data)
        if not budget:
            data["budgetStrategy"] = None
            return data
        raw = data.get("budgetStrategy")
        strategy = dict(raw) if isinstance(raw, Mapping) else {}
        remaining = strategy.get("remainingBudget")
        if not is_number(remaining) or not remaining:
            strategy["remainingBudget"] = budget
        data["budgetStrategy"] = strategy
        return data

    @classmethod
    def fallback(cls, budget: float | None = None, **context: Any) -> Self:
        strategy = None
        if budget:
            strategy = BudgetStrategy(
                remaining_budget=budget,
                allocation_advice="Analysis failed - manual review required",
            )
        return cls(
            budget_strategy=strategy,
            weekly_outlook="Waiver wire analysis failed - please try again",
            key_trends=["AI analysis is currently unavailable"],
        )


class WaiverPickupResult(LenientModel):
    """Quick single-player pickup call (the backend wraps it in ``pickup``)."""

    pickup: nested(WaiverPickup) = Field(default_factory=WaiverPickup)

    @model_validator(mode="before")
    @classmethod
    def _with_request_defaults(cls, data: Any, info: ValidationInfo) -> Any:
        """Player id and target week default to what was asked about."""
        if not isinstance(data, Mapping) or not info.context:
            return data
        raw = data.get("pickup")
        pickup = dict(raw) if isinstance(raw, Mapping) else {}
        player_id = info.context.get("player_id")
        week = info.context.get("week")
        if player_id and not (isinstance(pickup.get("playerId"), str) and pickup["playerId"]):
            pickup["playerId"] = player_id
        if week and not isinstance(pickup.get("targetWeeks"), list):
            pickup["targetWeeks"] = [week]
        return {**data, "pickup": pickup}

    @classmethod
    def fallback(cls, player_id: str = "unknown", week: int | None = None, **context: Any) -> Self:
        pickup = WaiverPickup(
            player_id=player_id,
            reasoning="Quick analysis completed",
            projected_impact=ProjectedImpact(depth_upgrade=True),
            target_weeks=[week] if week else [],
        )
        return cls(pickup=pickup)


class StreamingOptions(LenientModel):
    """Streaming picks for one position (DEF, K or QB)."""

    streaming_options: RankedPickups = Field(default_factory=list)
    last_updated: GeneratedAt = Field(default_factory=utc_now)

    @model_validator(mode="before")
    @classmethod
    def _with_requested_position(cls, data: Any, info: ValidationInfo) -> Any:
        """Picks without a position belong to the position that was asked for."""
        position = (info.context or {}).get("position")
        if not isinstance(data, Mapping) or not position or not isinstance(data.get("streamingOptions"), list):
            return data
        picks = [
            {**pick, "position": str(position)}
            if isinstance(pick, Mapping) and not (isinstance(pick.get("position"), str) and pick["position"])
            else pick
            for pick in data["streamingOptions"]
        ]
        return {**data, "streamingOptions": picks}


__all__ = [
    "BidRecommendation",
    "BudgetStrategy",
    "DropCandidate",
    "ProjectedImpact",
    "RecentTrends",
    "StreamingOptions",
    "StreamingPicks",
    "WaiverPickup",
    "WaiverPickupResult",
    "WaiverWireAnalysis",
]

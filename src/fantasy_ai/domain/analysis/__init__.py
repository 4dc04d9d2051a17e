"""Analysis Results - Sanitized, Bounded Outputs of the Feature Analysts.

Each result model validates any JSON object into a fully-populated instance
(see ``fantasy_ai.domain.sanitize``) and offers ``fallback()`` for output that
could not be parsed at all.
"""

from .lineup import (
    BenchAnalysis,
    KeyDecision,
    LineupOptimization,
    LineupScenario,
    PlayerProjection,
    PlayerProjectionSet,
    StackingOpportunity,
)
from .start_sit import MatchupAnalysis, StartSitAnalysis, StartSitRecommendation
from .trade import MarketValue, PlayerTradeValues, TeamTradeAnalysis, TradeAnalysis
from .waiver import StreamingOptions, WaiverPickup, WaiverPickupResult, WaiverWireAnalysis

__all__ = [
    "BenchAnalysis",
    "KeyDecision",
    "LineupOptimization",
    "LineupScenario",
    "MarketValue",
    "MatchupAnalysis",
    "PlayerProjection",
    "PlayerProjectionSet",
    "PlayerTradeValues",
    "StackingOpportunity",
    "StartSitAnalysis",
    "StartSitRecommendation",
    "StreamingOptions",
    "TeamTradeAnalysis",
    "TradeAnalysis",
    "WaiverPickup",
    "WaiverPickupResult",
    "WaiverWireAnalysis",
]

"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for domain concepts.
Using StrEnum instead of plain Enum provides automatic string coercion
and better JSON serialization without custom encoders.

The analysis enums double as whitelists for the output sanitizer: any value
a backend produces outside these sets is replaced by the field's default.
"""

from enum import StrEnum


class BackendId(StrEnum):
    """LLM Backend Identifiers.

    Keys of the router's adapter map and the values accepted for
    DEFAULT_AI_PROVIDER and per-request backend preference.
    """

    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"


class MessageRole(StrEnum):
    """Conversation Message Roles."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class RiskLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskTolerance(StrEnum):
    """Caller preference steering how aggressive recommendations are."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class MatchupRating(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    TERRIBLE = "terrible"


class MatchupDifficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class StartSitCall(StrEnum):
    START = "start"
    SIT = "sit"
    FLEX = "flex"


class SlotDecision(StrEnum):
    """Per-option verdict inside a lineup key decision."""

    START = "start"
    BENCH = "bench"
    CONSIDER = "consider"


class KeepOrDrop(StrEnum):
    KEEP = "keep"
    CONSIDER_DROPPING = "consider_dropping"
    DROP_CANDIDATE = "drop_candidate"


class TradeGrade(StrEnum):
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D_PLUS = "D+"
    D = "D"
    F = "F"


class TradeDecision(StrEnum):
    ACCEPT = "accept"
    REJECT = "reject"
    COUNTER = "counter"
    CONSIDER = "consider"


class ValueVerdict(StrEnum):
    FAIR = "fair"
    TEAM1_WINS = "team1_wins"
    TEAM2_WINS = "team2_wins"


class Trend(StrEnum):
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class DropSafety(StrEnum):
    SAFE = "safe"
    MODERATE_RISK = "moderate_risk"
    RISKY = "risky"


class StreamingPosition(StrEnum):
    """Positions that are commonly streamed week to week."""

    DEF = "DEF"
    K = "K"
    QB = "QB"


__all__ = [
    "BackendId",
    "DropSafety",
    "KeepOrDrop",
    "MatchupDifficulty",
    "MatchupRating",
    "MessageRole",
    "RiskLevel",
    "RiskTolerance",
    "SlotDecision",
    "StartSitCall",
    "StreamingPosition",
    "TradeDecision",
    "TradeGrade",
    "Trend",
    "ValueVerdict",
]

"""Feature analysts - one per fantasy football question.

Each analyst turns a typed request into a system + user message pair that
asks for a specific JSON shape, sends it through the router with tools
enabled, and sanitizes the reply into its result model. Sanitizing never
fails; ``AllBackendsFailedError`` from the router propagates to the caller.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from ..domain.analysis import (
    LineupOptimization,
    PlayerProjectionSet,
    PlayerTradeValues,
    StartSitAnalysis,
    StartSitRecommendation,
    StreamingOptions,
    TradeAnalysis,
    WaiverPickupResult,
    WaiverWireAnalysis,
)
from ..domain.domain_type import BackendId, RiskTolerance, StreamingPosition
from ..domain.domain_value import ChatRequest, Message
from ..domain.router import RequestRouter
from ..domain.sanitize import LenientModel, sanitize

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=LenientModel)

ANALYST_TEMPERATURE = 0.1

JSON_ONLY = "You must respond with a valid JSON object following the exact schema. No text outside the JSON object."

PROJECTION_SHAPE = """{
  "playerId": "string",
  "playerName": "string",
  "position": "string",
  "team": "string",
  "opponent": "string",
  "projectedPoints": {"floor": number, "expected": number, "ceiling": number},
  "confidence": 0.0-1.0,
  "startProbability": 0-100,
  "variance": number,
  "matchupRating": "excellent|good|average|poor|terrible",
  "factors": {
    "recentForm": -2 to +2,
    "matchupAdvantage": -2 to +2,
    "weatherImpact": -2 to +2,
    "injuryRisk": 0-2,
    "gameScript": -2 to +2
  },
  "reasoning": "detailed explanation"
}"""

SCENARIO_SHAPE = """{
    "scenarioName": "string",
    "lineup": {"<slot>": "playerId"},
    "projectedTotal": {"floor": number, "expected": number, "ceiling": number},
    "confidence": 0.0-1.0,
    "riskLevel": "low|medium|high",
    "reasoning": "explanation of lineup construction",
    "advantages": ["string"],
    "concerns": ["string"],
    "winProbability": 0-100
  }"""

PICKUP_SHAPE = """{
  "playerId": "string",
  "playerName": "string",
  "position": "string",
  "team": "string",
  "priority": 1-10 (1 = highest),
  "confidence": 0.0-1.0,
  "reasoning": "detailed explanation",
  "projectedImpact": {
    "immediateStarter": boolean,
    "flexConsideration": boolean,
    "depthUpgrade": boolean,
    "futureUpside": boolean
  },
  "bidRecommendation": {"suggested": number, "minimum": number, "maximum": number, "reasoning": "string"},
  "targetWeeks": [number],
  "dropCandidates": ["playerId"],
  "riskFactors": ["string"],
  "upside": "string",
  "recentTrends": {
    "usage": "increasing|stable|decreasing",
    "opportunity": "increasing|stable|decreasing",
    "production": "increasing|stable|decreasing"
  }
}"""

RISK_GUIDELINES = """RISK TOLERANCE GUIDELINES:
- Conservative: prioritize high-floor players, minimize bust potential
- Moderate: balance floor and ceiling, mix safe and upside plays
- Aggressive: chase ceiling outcomes, accept higher variance"""


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def _listing(values: list[str]) -> str:
    return ", ".join(values) if values else "none"


class BaseAnalyst:
    """Shared request/sanitize plumbing."""

    def __init__(self, router: RequestRouter):
        self.router = router

    async def _ask(
        self,
        system: str,
        user: str,
        schema: type[ResultT],
        max_tokens: int,
        preferred_backend: BackendId | None = None,
        **context: object,
    ) -> ResultT:
        request = ChatRequest(
            messages=(Message.system(system), Message.user(user)),
            max_tokens=max_tokens,
            temperature=ANALYST_TEMPERATURE,
        )
        response = await self.router.chat(request, preferred_backend, enable_tools=True)
        logger.info(
            "analysis_response",
            extra={
                "schema": schema.__name__,
                "backend": response.backend_id,
                "tool_calls": [call.name for call in response.tool_calls],
            },
        )
        return sanitize(response.content, schema, **context)


# ---------------------------------------------------------------------------
# Lineup
# ---------------------------------------------------------------------------


class LineupPreferences(BaseModel):
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE
    prioritize_floor: bool = False
    stack_preference: str | None = None
    avoid_opponents: bool = False
    weather_concerns: bool = False

    model_config = ConfigDict(frozen=True)


class LineupConstraints(BaseModel):
    must_start: list[str] = Field(default_factory=list)
    cannot_start: list[str] = Field(default_factory=list)
    max_players_per_team: int | None = None
    min_projected_points: float | None = None

    model_config = ConfigDict(frozen=True)


class LineupRequest(BaseModel):
    user_id: str
    league_id: str
    week: int = Field(ge=1, le=18)
    available_players: list[str]
    roster_slots: list[str]
    preferences: LineupPreferences | None = None
    constraints: LineupConstraints | None = None

    model_config = ConfigDict(frozen=True)


class LineupAnalyst(BaseAnalyst):
    """Lineup optimization, player comparison and positional rankings."""

    async def optimize_lineup(
        self, request: LineupRequest, preferred_backend: BackendId | None = None
    ) -> LineupOptimization:
        logger.info("lineup_optimization_started", extra={"user_id": request.user_id, "week": request.week})
        preferences = request.preferences or LineupPreferences()
        strategy = (
            "FLOOR-FOCUSED STRATEGY: prefer consistent usage and stable target shares; avoid volatile roles."
            if preferences.prioritize_floor
            else "CEILING-FOCUSED STRATEGY: target high-upside players, positive game scripts and stacks."
        )
        system = (
            "You are an expert fantasy football lineup optimizer. Build the lineup that maximizes points "
            "for the user's risk tolerance.\n\n"
            "OPTIMIZATION FRAMEWORK:\n"
            "1. Use the available tools to gather player data, projections and matchups\n"
            "2. Calculate floor, expected and ceiling projections for each player\n"
            "3. Consider stacking correlations, game script, weather and injuries\n"
            "4. Provide alternative lineups for different strategic approaches\n\n"
            f"{RISK_GUIDELINES}\n\n{strategy}\n\n{JSON_ONLY}"
        )

        lines = [
            "Please optimize my fantasy football lineup for maximum expected points.",
            "",
            "LINEUP DETAILS:",
            f"- League ID: {request.league_id} (use this ID for all tool calls)",
            f"- Week: {request.week}",
            f"- User ID: {request.user_id}",
            f"- Available Players: {_listing(request.available_players)}",
            f"- Roster Slots: {_listing(request.roster_slots)}",
        ]
        if request.preferences:
            lines += [
                "",
                "User Preferences:",
                f"- Risk Tolerance: {preferences.risk_tolerance}",
                f"- Prioritize Floor: {_yes_no(preferences.prioritize_floor)}",
                f"- Stacking Preference: {preferences.stack_preference or 'None specified'}",
                f"- Avoid Opponents: {_yes_no(preferences.avoid_opponents)}",
                f"- Weather Concerns: {_yes_no(preferences.weather_concerns)}",
            ]
        if request.constraints:
            constraints = request.constraints
            lines += ["", "Lineup Constraints:"]
            if constraints.must_start:
                lines.append(f"- Must Start: {_listing(constraints.must_start)}")
            if constraints.cannot_start:
                lines.append(f"- Cannot Start: {_listing(constraints.cannot_start)}")
            if constraints.max_players_per_team:
                lines.append(f"- Max Players Per Team: {constraints.max_players_per_team}")
            if constraints.min_projected_points:
                lines.append(f"- Minimum Projected Points: {constraints.min_projected_points}")
        lines += [
            "",
            "Respond with this JSON object:",
            "{",
            f'  "optimalLineup": {SCENARIO_SHAPE},',
            '  "alternativeLineups": [/* same shape as optimalLineup, e.g. "High Floor", "High Ceiling" */],',
            f'  "playerProjections": [{PROJECTION_SHAPE}],',
            '  "benchAnalysis": [{"playerId": "string", "playerName": "string", "position": "string", '
            '"benchReason": "string", "alternativeScenarios": ["string"], '
            '"keepOrDrop": "keep|consider_dropping|drop_candidate", '
            '"upcomingValue": {"nextWeek": 1-10, "restOfSeason": 1-10, "playoffSchedule": 1-10}}],',
            '  "keyDecisions": [{"position": "FLEX", "options": [{"playerId": "string", "playerName": "string", '
            '"pros": ["string"], "cons": ["string"], "recommendation": "start|bench|consider"}], '
            '"recommendation": "string"}],',
            '  "stackingOpportunities": [{"players": ["playerId"], "correlation": 0.0-1.0, '
            '"upside": "string", "risk": "string"}]',
            "}",
        ]

        return await self._ask(
            system,
            "\n".join(lines),
            LineupOptimization,
            max_tokens=8000,
            preferred_backend=preferred_backend,
            roster_slots=request.roster_slots,
            available_players=request.available_players,
        )

    async def compare_players(
        self,
        player_ids: list[str],
        position: str,
        week: int,
        league_id: str,
        preferred_backend: BackendId | None = None,
    ) -> PlayerProjectionSet:
        system = (
            "You are a fantasy football expert specializing in player comparisons for lineup decisions. "
            "Use the available tools for current data.\n\n"
            f'{JSON_ONLY}\n{{\n  "playerProjections": [{PROJECTION_SHAPE}]\n}}'
        )
        user = (
            f"Compare these {position} players for week {week} in league {league_id}: {_listing(player_ids)}.\n\n"
            "Provide floor/expected/ceiling projections, matchup difficulty, recent form, weather and game "
            f"script factors. Use get_league with league ID {league_id}, get_players_nfl, get_player_stats "
            f"and get_projections. Rank by expected fantasy points for week {week}."
        )
        return await self._ask(system, user, PlayerProjectionSet, max_tokens=3000, preferred_backend=preferred_backend)

    async def positional_rankings(
        self,
        position: str,
        week: int,
        league_id: str,
        preferred_backend: BackendId | None = None,
    ) -> PlayerProjectionSet:
        system = (
            "You are a fantasy football expert. Provide weekly positional rankings with detailed projections. "
            "Use the available tools for current data.\n\n"
            f'{JSON_ONLY}\n{{\n  "playerProjections": [{PROJECTION_SHAPE}]\n}}'
        )
        user = (
            f"Get the top 15-20 {position} rankings for week {week} in league {league_id}, with projections, "
            "matchup ratings, recent trends and start/sit tiers. Use get_league with league ID "
            f"{league_id}, get_players_nfl, get_player_stats and get_projections. "
            f"Rank by expected fantasy points for week {week}."
        )
        return await self._ask(system, user, PlayerProjectionSet, max_tokens=4000, preferred_backend=preferred_backend)


# ---------------------------------------------------------------------------
# Start / sit
# ---------------------------------------------------------------------------


class StartSitPreferences(BaseModel):
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE
    prioritize_upside: bool = False
    avoid_injured_players: bool = False

    model_config = ConfigDict(frozen=True)


class StartSitRequest(BaseModel):
    user_id: str
    league_id: str
    week: int = Field(ge=1, le=18)
    player_ids: list[str]
    roster_slots: list[str]
    preferences: StartSitPreferences | None = None

    model_config = ConfigDict(frozen=True)


class StartSitAnalyst(BaseAnalyst):
    async def analyze(self, request: StartSitRequest, preferred_backend: BackendId | None = None) -> StartSitAnalysis:
        logger.info("start_sit_analysis_started", extra={"user_id": request.user_id, "week": request.week})
        system = (
            "You are an expert fantasy football analyst making start/sit decisions. Use the available tools "
            "to check league settings, rosters, matchups, player status and recent usage.\n\n"
            f"{RISK_GUIDELINES}\n\n{JSON_ONLY}\n"
            "{\n"
            '  "recommendations": [{"playerId": "string", "playerName": "string", "position": "string", '
            '"recommendation": "start|sit|flex", "confidence": 0.0-1.0, "reasoning": "string", '
            '"projectedPoints": {"floor": number, "ceiling": number, "expected": number}, '
            '"matchupAnalysis": {"opponent": "string", "difficulty": "easy|medium|hard", "keyFactors": ["string"]}, '
            '"riskFactors": ["string"], "alternativeOptions": ["string"]}],\n'
            '  "optimalLineup": {"<slot>": "playerId"},\n'
            '  "benchPlayers": ["playerId"],\n'
            '  "confidenceScore": 0.0-1.0,\n'
            '  "weeklyOutlook": "string",\n'
            '  "keyInsights": ["string"]\n'
            "}"
        )
        lines = [
            "Please analyze the start/sit decisions for my fantasy team this week.",
            "",
            "LEAGUE DETAILS:",
            f"- League ID: {request.league_id}",
            f"- Week: {request.week}",
            f"- User ID: {request.user_id}",
            "",
            "ROSTER ANALYSIS NEEDED:",
            f"- Player IDs to analyze: {_listing(request.player_ids)}",
            f"- Available roster slots: {_listing(request.roster_slots)}",
        ]
        if request.preferences:
            lines += [
                "",
                "User Preferences:",
                f"- Risk Tolerance: {request.preferences.risk_tolerance}",
                f"- Prioritize Upside: {_yes_no(request.preferences.prioritize_upside)}",
                f"- Avoid Injured Players: {_yes_no(request.preferences.avoid_injured_players)}",
            ]
        lines += [
            "",
            "Use get_league, get_league_rosters and get_league_matchups for context. Focus on maximizing "
            "my team's scoring potential for this specific week.",
        ]
        return await self._ask(
            system,
            "\n".join(lines),
            StartSitAnalysis,
            max_tokens=4000,
            preferred_backend=preferred_backend,
            player_ids=request.player_ids,
        )

    async def quick_recommendation(
        self,
        player_id: str,
        league_id: str,
        week: int,
        preferred_backend: BackendId | None = None,
    ) -> StartSitRecommendation:
        system = (
            "You are a fantasy football expert. Provide a quick start/sit recommendation for a single player. "
            "Use the available tools to get current data.\n\n"
            f"{JSON_ONLY}\n"
            '{"playerId": "string", "playerName": "string", "position": "string", '
            '"recommendation": "start|sit|flex", "confidence": 0.0-1.0, "reasoning": "string", '
            '"projectedPoints": {"floor": number, "ceiling": number, "expected": number}, '
            '"matchupAnalysis": {"opponent": "string", "difficulty": "easy|medium|hard", "keyFactors": ["string"]}, '
            '"riskFactors": ["string"]}'
        )
        user = (
            f"Quick start/sit recommendation for player {player_id} in league {league_id} for week {week}. "
            "Get player info, stats and projections using the available tools."
        )
        return await self._ask(
            system,
            user,
            StartSitRecommendation,
            max_tokens=1000,
            preferred_backend=preferred_backend,
            player_id=player_id,
        )


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------


class TradeContext(BaseModel):
    deadline: str | None = None
    keepers: bool = False
    dynasty_league: bool = False
    need_analysis: str | None = None

    model_config = ConfigDict(frozen=True)


class TradeRequest(BaseModel):
    league_id: str
    team1_user_id: str
    team2_user_id: str
    team1_players: list[str]
    team2_players: list[str]
    requesting_user_id: str
    context: TradeContext | None = None

    model_config = ConfigDict(frozen=True)


TEAM_ANALYSIS_SHAPE = """{
    "grade": "A+|A|A-|B+|B|B-|C+|C|C-|D+|D|F",
    "impact": {
      "positionalChange": {
        "QB": {"before": 0-10, "after": 0-10},
        "RB": {"before": 0-10, "after": 0-10},
        "WR": {"before": 0-10, "after": 0-10},
        "TE": {"before": 0-10, "after": 0-10}
      },
      "startingLineupImpact": -5 to +5,
      "depthChartImpact": -5 to +5,
      "byeWeekHelp": boolean,
      "playoffImplications": "string"
    },
    "recommendation": {
      "decision": "accept|reject|counter|consider",
      "confidence": 0.0-1.0,
      "reasoning": "string",
      "pros": ["string"],
      "cons": ["string"],
      "counterOfferSuggestion": {"description": "string", "adjustments": ["string"]}
    }
  }"""


class TradeAnalyst(BaseAnalyst):
    async def analyze(self, request: TradeRequest, preferred_backend: BackendId | None = None) -> TradeAnalysis:
        logger.info(
            "trade_analysis_started",
            extra={"team1_user_id": request.team1_user_id, "team2_user_id": request.team2_user_id},
        )
        system = (
            "You are an expert fantasy football trade analyst. Gather league settings, rosters, player data "
            "and projections with the available tools, then evaluate the trade for both teams. Do not ask "
            "questions.\n\n"
            f"{JSON_ONLY}\n"
            "{\n"
            '  "fairnessScore": 0-10 (5 = perfectly fair),\n'
            f'  "team1Analysis": {TEAM_ANALYSIS_SHAPE},\n'
            '  "team2Analysis": /* same shape as team1Analysis */,\n'
            '  "marketValue": {"team1Total": number, "team2Total": number, '
            '"valueVerdict": "fair|team1_wins|team2_wins"},\n'
            '  "riskAssessment": {"team1Risk": "low|medium|high", "team2Risk": "low|medium|high", '
            '"riskFactors": ["string"]},\n'
            '  "timing": {"optimalTiming": boolean, "seasonContext": "string", "urgency": "low|medium|high"},\n'
            '  "summary": "string",\n'
            '  "keyInsights": ["string"],\n'
            '  "similarTrades": ["string"]\n'
            "}"
        )
        lines = [
            "Analyze this fantasy football trade.",
            "",
            "TRADE DETAILS:",
            f"- League ID: {request.league_id}",
            f"- Team 1 (user {request.team1_user_id}) sends: {_listing(request.team1_players)}",
            f"- Team 2 (user {request.team2_user_id}) sends: {_listing(request.team2_players)}",
            f"- Requested by: {request.requesting_user_id}",
        ]
        if request.context:
            context = request.context
            lines += [
                "",
                "Trade Context:",
                f"- Trade Deadline: {context.deadline or 'Not specified'}",
                f"- Keeper League: {_yes_no(context.keepers)}",
                f"- Dynasty League: {_yes_no(context.dynasty_league)}",
                f"- Needs: {context.need_analysis or 'Not specified'}",
            ]
        lines += [
            "",
            "Use get_league, get_league_rosters, get_players_nfl and get_projections before answering.",
        ]
        return await self._ask(
            system,
            "\n".join(lines),
            TradeAnalysis,
            max_tokens=5000,
            preferred_backend=preferred_backend,
        )

    async def trade_values(
        self,
        player_ids: list[str],
        league_id: str,
        preferred_backend: BackendId | None = None,
    ) -> PlayerTradeValues:
        system = (
            "You are a fantasy football expert. Gather player data, trends and league scoring with the "
            "available tools, then provide player trade values. Do not ask questions.\n\n"
            f"{JSON_ONLY}\n"
            '{"playerValues": [{"playerId": "string", "playerName": "string", "value": 0-100, '
            '"tier": "Tier 1-5", "reasoning": "string"}]}'
        )
        user = (
            f"Get trade values and tiers for players {_listing(player_ids)} in league {league_id}.\n"
            "Scale: 90-100 elite (Tier 1), 80-89 high (Tier 2), 70-79 mid (Tier 3), 60-69 low (Tier 4), "
            "below 60 waiver (Tier 5)."
        )
        values = await self._ask(system, user, PlayerTradeValues, max_tokens=2000, preferred_backend=preferred_backend)
        missing = values.missing(player_ids)
        if missing:
            logger.warning("trade_values_incomplete", extra={"missing": missing})
        return values


# ---------------------------------------------------------------------------
# Waiver wire
# ---------------------------------------------------------------------------


class WaiverPreferences(BaseModel):
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE
    focus_on_upside: bool = False
    prioritize_immediate_help: bool = False
    max_bid_percentage: float | None = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class WaiverWireRequest(BaseModel):
    user_id: str
    league_id: str
    week: int = Field(ge=1, le=18)
    current_roster: list[str]
    budget: float | None = Field(default=None, ge=0)
    roster_needs: list[str] = Field(default_factory=list)
    preferences: WaiverPreferences | None = None

    model_config = ConfigDict(frozen=True)


class WaiverWireAnalyst(BaseAnalyst):
    async def analyze(
        self, request: WaiverWireRequest, preferred_backend: BackendId | None = None
    ) -> WaiverWireAnalysis:
        logger.info("waiver_analysis_started", extra={"user_id": request.user_id, "week": request.week})
        system = (
            "You are an expert fantasy football waiver wire analyst. Use the available tools to find "
            "available players, recent usage trends and upcoming matchups, then rank pickups.\n\n"
            f"{RISK_GUIDELINES}\n\n{JSON_ONLY}\n"
            "{\n"
            f'  "topPickups": [{PICKUP_SHAPE}],\n'
            '  "sleepers": [/* same shape as topPickups */],\n'
            '  "streamingOptions": {"defense": [/* pickups */], "kicker": [/* pickups */], "qb": [/* pickups */]},\n'
            '  "dropCandidates": [{"playerId": "string", "playerName": "string", "reasoning": "string", '
            '"safetyLevel": "safe|moderate_risk|risky"}],\n'
            '  "budgetStrategy": {"aggressiveTargets": ["playerId"], "conservativeTargets": ["playerId"], '
            f'"remainingBudget": {request.budget or 0}, "allocationAdvice": "string"}},\n'
            '  "weeklyOutlook": "string",\n'
            '  "keyTrends": ["string"]\n'
            "}"
        )
        lines = [
            "Please analyze the waiver wire for my team.",
            "",
            "LEAGUE DETAILS:",
            f"- League ID: {request.league_id}",
            f"- Week: {request.week}",
            f"- User ID: {request.user_id}",
            f"- Current Roster: {_listing(request.current_roster)}",
            f"- Roster Needs: {_listing(request.roster_needs)}",
            f"- FAAB Budget Remaining: {request.budget if request.budget is not None else 'Not a FAAB league'}",
        ]
        if request.preferences:
            preferences = request.preferences
            lines += [
                "",
                "User Preferences:",
                f"- Risk Tolerance: {preferences.risk_tolerance}",
                f"- Focus on Upside: {_yes_no(preferences.focus_on_upside)}",
                f"- Prioritize Immediate Help: {_yes_no(preferences.prioritize_immediate_help)}",
                f"- Max Bid Percentage: {preferences.max_bid_percentage or 'Not specified'}",
            ]
        lines += [
            "",
            "Use get_league, get_league_rosters, get_players_nfl and get_player_stats. Provide specific bid "
            "amounts and drop suggestions.",
        ]
        return await self._ask(
            system,
            "\n".join(lines),
            WaiverWireAnalysis,
            max_tokens=6000,
            preferred_backend=preferred_backend,
            budget=request.budget,
        )

    async def quick_pickup(
        self,
        player_id: str,
        league_id: str,
        week: int,
        preferred_backend: BackendId | None = None,
    ) -> WaiverPickupResult:
        system = (
            "You are a fantasy football expert. Provide a quick waiver wire pickup analysis for a single "
            "player. Use the available tools for current data.\n\n"
            f'{JSON_ONLY}\n{{"pickup": {PICKUP_SHAPE}}}'
        )
        user = (
            f"Quick waiver wire analysis for player {player_id} in league {league_id} for week {week}. "
            f"Use get_league with league ID {league_id}, get_players_nfl and get_player_stats. "
            "Provide a specific pickup recommendation with priority ranking."
        )
        return await self._ask(
            system,
            user,
            WaiverPickupResult,
            max_tokens=1000,
            preferred_backend=preferred_backend,
            player_id=player_id,
            week=week,
        )

    async def streaming_options(
        self,
        position: StreamingPosition,
        league_id: str,
        week: int,
        preferred_backend: BackendId | None = None,
    ) -> StreamingOptions:
        system = (
            f"You are a fantasy football expert specializing in {position} streaming recommendations. "
            "Use the available tools for current data.\n\n"
            f'{JSON_ONLY}\n{{"streamingOptions": [{PICKUP_SHAPE}]}}'
        )
        user = (
            f"Get the top 3-5 {position} streaming recommendations for league {league_id} week {week}. "
            "Focus on matchup, opponent tendencies and game environment. Use get_league, get_players_nfl "
            "and get_player_stats. Rank by expected weekly performance for this position."
        )
        return await self._ask(
            system,
            user,
            StreamingOptions,
            max_tokens=2000,
            preferred_backend=preferred_backend,
            position=position,
        )


__all__ = [
    "LineupAnalyst",
    "LineupConstraints",
    "LineupPreferences",
    "LineupRequest",
    "StartSitAnalyst",
    "StartSitPreferences",
    "StartSitRequest",
    "TradeAnalyst",
    "TradeContext",
    "TradeRequest",
    "WaiverPreferences",
    "WaiverWireAnalyst",
    "WaiverWireRequest",
]

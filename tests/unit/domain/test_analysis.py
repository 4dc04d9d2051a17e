"""Unit tests for the analysis result models.

Tests focus on what each result guarantees to callers:
- Documented ranges hold no matter what the backend sent
- Unknown enum values fall back to the documented default
- Missing structure is filled with defaults (never None where a value is promised)
- Context-aware fallbacks and request-derived defaults
"""

import json
from datetime import UTC, datetime, timedelta

import pytest

from fantasy_ai.domain.analysis import (
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
from fantasy_ai.domain.domain_type import (
    DropSafety,
    KeepOrDrop,
    MatchupDifficulty,
    MatchupRating,
    RiskLevel,
    SlotDecision,
    StartSitCall,
    StreamingPosition,
    TradeDecision,
    TradeGrade,
    Trend,
    ValueVerdict,
)
from fantasy_ai.domain.sanitize import sanitize


def decode(schema, payload, **context):
    return sanitize(json.dumps(payload), schema, **context)


# =============================================================================
# Lineup
# =============================================================================


class TestLineupOptimization:
    def test_projection_ranges_are_enforced(self):
        """
        Demonstrates: Every documented range is clamped, every enum whitelisted.
        """
        result = decode(
            LineupOptimization,
            {
                "optimalLineup": {"lineup": {"QB": "p1", "RB1": 7}, "riskLevel": "extreme", "winProbability": 140},
                "playerProjections": [
                    {
                        "playerId": "p1",
                        "confidence": 1.7,
                        "startProbability": -20,
                        "variance": -4,
                        "matchupRating": "EXCELLENT",
                        "factors": {"recentForm": 5, "injuryRisk": -1, "gameScript": -9, "weatherImpact": "cold"},
                    }
                ],
                "benchAnalysis": [{"keepOrDrop": "sell", "upcomingValue": {"nextWeek": 0, "restOfSeason": 11}}],
                "keyDecisions": [{"options": [{"recommendation": "maybe"}, "junk"]}],
                "stackingOpportunities": [{"players": ["p1", "p2"], "correlation": 3}],
            },
        )

        assert result.optimal_lineup.lineup == {"QB": "p1"}
        assert result.optimal_lineup.risk_level == RiskLevel.MEDIUM
        assert result.optimal_lineup.win_probability == 100.0

        projection = result.player_projections[0]
        assert projection.confidence == 1.0
        assert projection.start_probability == 0.0
        assert projection.variance == 0.0
        assert projection.matchup_rating == MatchupRating.EXCELLENT
        assert projection.factors.recent_form == 2.0
        assert projection.factors.injury_risk == 0.0
        assert projection.factors.game_script == -2.0
        assert projection.factors.weather_impact == 0.0
        assert projection.team == "FA"
        assert projection.opponent == "BYE"

        bench = result.bench_analysis[0]
        assert bench.keep_or_drop == KeepOrDrop.KEEP
        assert (bench.upcoming_value.next_week, bench.upcoming_value.rest_of_season) == (1.0, 10.0)
        assert bench.upcoming_value.playoff_schedule == 5.0

        assert len(result.key_decisions[0].options) == 1
        assert result.key_decisions[0].options[0].recommendation == SlotDecision.CONSIDER
        assert result.stacking_opportunities[0].correlation == 1.0

    def test_missing_win_probability_stays_absent(self):
        assert decode(LineupOptimization, {"optimalLineup": {}}).optimal_lineup.win_probability is None

    def test_fallback_fills_slots_in_order(self):
        result = sanitize(
            "The model refused.",
            LineupOptimization,
            roster_slots=["QB", "RB1", "RB2"],
            available_players=["p1", "p2"],
        )

        assert result.optimal_lineup.scenario_name == "Fallback Lineup"
        assert result.optimal_lineup.lineup == {"QB": "p1", "RB1": "p2", "RB2": "unknown"}
        assert result.optimal_lineup.confidence == 0.1

    def test_fallback_needs_no_context(self):
        assert LineupOptimization.fallback().optimal_lineup.lineup == {}

    def test_last_updated_is_stamped_locally(self):
        before = datetime.now(UTC) - timedelta(seconds=1)

        result = decode(PlayerProjectionSet, {"lastUpdated": "1999-01-01T00:00:00Z"})

        assert result.last_updated >= before


# =============================================================================
# Start / sit
# =============================================================================


class TestStartSit:
    def test_defaults_and_ranges(self):
        result = decode(
            StartSitAnalysis,
            {
                "recommendations": [
                    {"playerId": "p1", "recommendation": "bench", "confidence": -1, "matchupAnalysis": {"difficulty": "Hard"}},
                    42,
                ],
                "confidenceScore": "very",
            },
        )

        assert len(result.recommendations) == 1
        recommendation = result.recommendations[0]
        assert recommendation.recommendation == StartSitCall.SIT
        assert recommendation.confidence == 0.0
        assert recommendation.matchup_analysis.difficulty == MatchupDifficulty.HARD
        assert recommendation.matchup_analysis.opponent == "Unknown"
        assert result.confidence_score == 0.7

    def test_fallback_sits_every_requested_player(self):
        """
        Demonstrates: An unusable answer still covers every player asked about.
        """
        result = sanitize("", StartSitAnalysis, player_ids=["p1", "p2"])

        assert [r.player_id for r in result.recommendations] == ["p1", "p2"]
        assert all(r.recommendation == StartSitCall.SIT for r in result.recommendations)
        assert all(r.confidence == 0.1 for r in result.recommendations)
        assert result.bench_players == ["p1", "p2"]
        assert result.confidence_score == 0.1

    def test_quick_recommendation_defaults_to_requested_player(self):
        result = decode(StartSitRecommendation, {"recommendation": "start"}, player_id="p9")

        assert result.player_id == "p9"
        assert result.recommendation == StartSitCall.START

    def test_quick_recommendation_keeps_backend_player_id(self):
        assert decode(StartSitRecommendation, {"playerId": "p1"}, player_id="p9").player_id == "p1"

    def test_quick_recommendation_fallback(self):
        result = sanitize("oops", StartSitRecommendation, player_id="p9")

        assert result.player_id == "p9"
        assert result.confidence == 0.1
        assert result.risk_factors == ["Analysis unavailable"]


# =============================================================================
# Trade
# =============================================================================


class TestTradeAnalysis:
    def test_invalid_fields_are_sanitized_not_raised(self):
        """
        Demonstrates: Trade decoding is total like every other analysis.
        """
        result = decode(
            TradeAnalysis,
            {
                "fairnessScore": 14,
                "team1Analysis": {
                    "grade": "A++",
                    "impact": {"positionalChange": {"RB": {"before": 3, "after": 12}}, "startingLineupImpact": -9},
                    "recommendation": {"decision": "ACCEPT", "counterOfferSuggestion": "no"},
                },
                "team2Analysis": "missing",
                "marketValue": {"team1Total": 80, "team2Total": 65.5, "valueVerdict": "robbery"},
                "riskAssessment": {"team1Risk": "LOW"},
            },
        )

        assert result.fairness_score == 10.0
        team1 = result.team1_analysis
        assert team1.grade == TradeGrade.C
        assert team1.impact.starting_lineup_impact == -5.0
        assert set(team1.impact.positional_change) == {"QB", "RB", "WR", "TE"}
        assert team1.impact.positional_change["RB"].after == 10.0
        assert team1.impact.positional_change["RB"].change == 7.0
        assert team1.impact.positional_change["QB"].change == 0.0
        assert team1.recommendation.decision == TradeDecision.ACCEPT
        assert team1.recommendation.counter_offer_suggestion is None
        assert result.team2_analysis.grade == TradeGrade.C
        assert result.market_value.value_verdict == ValueVerdict.FAIR
        assert result.market_value.difference == 14.5
        assert result.risk_assessment.team1_risk == RiskLevel.LOW
        assert result.risk_assessment.team2_risk == RiskLevel.MEDIUM

    def test_grade_with_sign_is_accepted(self):
        assert decode(TradeAnalysis, {"team1Analysis": {"grade": "B+"}}).team1_analysis.grade == TradeGrade.B_PLUS

    def test_fallback(self):
        result = sanitize("no json", TradeAnalysis)

        assert result.fairness_score == 5.0
        assert result.summary == "Trade analysis failed - manual review required"

    def test_trade_values_clamped_and_missing_players_reported(self):
        values = decode(PlayerTradeValues, {"playerValues": [{"playerId": "p1", "value": 130}]})

        assert values.player_values[0].value == 100.0
        assert values.player_values[0].tier == "Tier 5"
        assert values.missing(["p1", "p2"]) == ["p2"]


# =============================================================================
# Waiver wire
# =============================================================================


class TestWaiverWire:
    def test_priority_defaults_to_list_position(self):
        result = decode(
            WaiverWireAnalysis,
            {"topPickups": [{"playerId": "a"}, {"playerId": "b", "priority": 15}, "junk", {"playerId": "c"}]},
        )

        assert [pickup.priority for pickup in result.top_pickups] == [1, 10, 3]

    def test_nested_defaults(self):
        result = decode(
            WaiverWireAnalysis,
            {
                "sleepers": [{"recentTrends": {"usage": "up"}, "confidence": 2}],
                "dropCandidates": [{"safetyLevel": "Safe"}],
                "streamingOptions": {"defense": [{"playerId": "DEF1"}]},
            },
        )

        sleeper = result.sleepers[0]
        assert sleeper.recent_trends.usage == Trend.STABLE
        assert sleeper.confidence == 1.0
        assert sleeper.bid_recommendation is None
        assert result.drop_candidates[0].safety_level == DropSafety.SAFE
        assert result.streaming_options.defense[0].priority == 1
        assert result.streaming_options.kicker == []

    def test_budget_strategy_follows_faab_budget(self):
        with_budget = decode(WaiverWireAnalysis, {}, budget=85)
        without_budget = decode(WaiverWireAnalysis, {"budgetStrategy": {"remainingBudget": 40}}, budget=None)

        assert with_budget.budget_strategy is not None
        assert with_budget.budget_strategy.remaining_budget == 85
        assert without_budget.budget_strategy is None

    def test_malformed_budget_strategy_only_loses_itself(self):
        result = decode(WaiverWireAnalysis, {"weeklyOutlook": "Busy week", "budgetStrategy": "n/a"})

        assert result.weekly_outlook == "Busy week"
        assert result.budget_strategy is None

    def test_backend_remaining_budget_is_kept(self):
        result = decode(WaiverWireAnalysis, {"budgetStrategy": {"remainingBudget": 40}}, budget=85)

        assert result.budget_strategy.remaining_budget == 40

    def test_fallback_carries_budget(self):
        result = sanitize("", WaiverWireAnalysis, budget=100)

        assert result.budget_strategy.remaining_budget == 100
        assert result.top_pickups == []

    def test_quick_pickup_defaults_from_request(self):
        result = decode(WaiverPickupResult, {"pickup": {"priority": 2}}, player_id="p5", week=9)

        assert result.pickup.player_id == "p5"
        assert result.pickup.target_weeks == [9]
        assert result.pickup.priority == 2

    def test_quick_pickup_fallback(self):
        result = sanitize("nope", WaiverPickupResult, player_id="p5", week=9)

        assert result.pickup.player_id == "p5"
        assert result.pickup.projected_impact.depth_upgrade is True
        assert result.pickup.target_weeks == [9]

    @pytest.mark.parametrize("position", list(StreamingPosition))
    def test_streaming_picks_default_to_requested_position(self, position):
        result = decode(
            StreamingOptions,
            {"streamingOptions": [{"playerId": "x"}, {"playerId": "y", "position": "WR"}]},
            position=position,
        )

        assert [pick.position for pick in result.streaming_options] == [str(position), "WR"]

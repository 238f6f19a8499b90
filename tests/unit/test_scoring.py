"""
Tests for visibility scoring and result compilation.
"""

from agents.scorer_analyzer_agent import (
    analyze_why_not_mentioned,
    calculate_visibility_score,
    compile_competitor_results,
    compile_source_result,
    determine_overall_status
)
from agents.scorer_analyzer_agent.scoring import get_points
from models.schemas import CompetitorResult, EnrichmentContext, MentionAnalysis, QueryDimension, Signal, TaggedQuery
from tests.helpers import analysis
from utils.helpers import percent, round_half_up


def _queries(*dimensions):
    return [TaggedQuery(query=f"q{i}", dimension=d) for i, d in enumerate(dimensions)]


def test_rank_one_everywhere_scores_100():
    queries = _queries(QueryDimension.PRICE, QueryDimension.QUALITY, QueryDimension.GENERAL)
    top = [analysis(rank=1) for _ in queries]
    score = calculate_visibility_score(top, top, queries)
    assert score.overall == 100
    assert score.by_model == {"chatgpt": 100, "claude": 100}
    assert score.breakdown.mention_rate == 100
    assert score.breakdown.top_three_rate == 100
    assert score.breakdown.avg_position == 1.0
    assert score.breakdown.model_consistency == 100


def test_never_mentioned_scores_zero():
    queries = _queries(QueryDimension.PRICE, QueryDimension.PRICE)
    missing = [analysis(mentioned=False) for _ in queries]
    score = calculate_visibility_score(missing, missing, queries)
    assert score.overall == 0
    assert score.breakdown.avg_position is None
    assert score.by_dimension[0].score == 0
    assert determine_overall_status(missing, missing) == "not_mentioned"


def test_scores_stay_in_bounds():
    mixes = [
        [analysis(rank=r) for r in (1, 4, 8, 20, None)],
        [analysis(mentioned=False), MentionAnalysis.empty(), analysis(rank=2)],
        [MentionAnalysis.empty()],
        [],
    ]
    for chatgpt in mixes:
        for claude in mixes:
            queries = _queries(*[QueryDimension.QUALITY] * max(len(chatgpt), len(claude)))
            score = calculate_visibility_score(chatgpt, claude, queries)
            assert 0 <= score.overall <= 100
            assert all(0 <= value <= 100 for value in score.by_model.values())
            assert all(0 <= d.score <= 100 for d in score.by_dimension)


def test_points_by_rank():
    assert [get_points(analysis(rank=r)) for r in (1, 2, 3, 4, 5, 6, 10, 11)] == [100, 90, 80, 60, 60, 40, 40, 30]
    assert get_points(analysis(rank=None, position="top_3")) == 80
    assert get_points(analysis(rank=None, position="mentioned")) == 30
    assert get_points(analysis(mentioned=False)) == 0


def test_unanswered_provider_does_not_dilute_the_score():
    queries = _queries(*[QueryDimension.QUALITY] * 4)
    answered = [analysis(rank=1) for _ in queries]
    silent = [MentionAnalysis.empty() for _ in queries]
    score = calculate_visibility_score(answered, silent, queries)
    assert score.overall == 100
    assert score.by_model == {"chatgpt": 100, "claude": 0}
    assert score.breakdown.model_consistency == 0
    assert score.by_dimension[0].score == 100


def test_dimension_breakdown_skips_general_in_first_seen_order():
    queries = _queries(QueryDimension.GENERAL, QueryDimension.PRICE, QueryDimension.QUALITY, QueryDimension.PRICE)
    chatgpt = [analysis(rank=1), analysis(rank=2), analysis(mentioned=False), analysis(mentioned=False)]
    claude = [analysis(mentioned=False)] * 4
    dimensions = calculate_visibility_score(chatgpt, claude, queries).by_dimension
    assert [d.dimension for d in dimensions] == [QueryDimension.PRICE, QueryDimension.QUALITY]
    pricing = dimensions[0]
    assert pricing.queries_count == 2
    assert pricing.mention_count == 1
    assert pricing.score == 23  # 90 of 400 points
    assert pricing.label == "Price"


def test_status_thresholds():
    top = analysis(rank=2)
    late = analysis(rank=8, sentiment="neutral")
    missing = analysis(mentioned=False)
    assert determine_overall_status([top, missing], [missing, missing]) == "low_visibility"
    assert determine_overall_status([top, top], [missing, missing]) == "recommended"
    assert determine_overall_status([late, late], [late, missing]) == "low_visibility"
    assert determine_overall_status(
        [analysis(rank=8, sentiment="recommended")] * 2, [missing, missing]
    ) == "recommended"


def test_source_result_rollup():
    analyses = [
        analysis(rank=1, sentiment="neutral", description="Short"),
        analysis(rank=7, sentiment="recommended", description="A much longer description"),
        analysis(mentioned=False),
        MentionAnalysis.empty(),
    ]
    source = compile_source_result("claude", analyses)
    assert source.mentioned
    assert source.position == "top_3"
    assert source.mention_count == 2
    assert source.top_three_count == 1
    assert source.sentiment == "recommended"
    assert source.description == "A much longer description"
    assert source.total_queries == 4

    empty = compile_source_result("chatgpt", [MentionAnalysis.empty()] * 3)
    assert not empty.mentioned
    assert empty.position == "not_found"


def test_competitor_results_include_discovered_brands():
    chatgpt = [
        analysis(rank=4, competitors_mentioned=["Asana"], competitors_in_top_3=["Asana"],
                 other_brands_mentioned=["trello", "Jira"]),
        analysis(mentioned=False, competitors_mentioned=["Asana"], competitors_in_top_3=["Asana"],
                 other_brands_mentioned=["Trello"]),
    ]
    claude = [analysis(mentioned=False, other_brands_mentioned=["asana", "Monday"])] * 2
    results = compile_competitor_results(chatgpt, claude, ["Asana", "Linear"], False, ["Asana"])

    names = [r.name for r in results]
    assert names == ["Asana", "Linear", "Trello", "Monday"]
    asana = results[0]
    assert asana.mention_count == 2
    assert asana.top_three_count == 2
    assert asana.visibility_level == "recommended"
    assert asana.outranks_user
    assert not asana.is_discovered
    assert results[1].is_discovered
    assert not results[1].mentioned
    assert results[2].is_discovered and results[2].mention_count == 2


def test_competitor_totals_count_only_answered_queries():
    chatgpt = [
        analysis(mentioned=False, competitors_mentioned=["Asana"], competitors_in_top_3=["Asana"]),
        analysis(mentioned=False),
    ]
    claude = [MentionAnalysis.empty() for _ in range(3)]

    asana = compile_competitor_results(chatgpt, claude, ["Asana"], False, ["Asana"])[0]

    assert asana.total_queries == 2
    assert asana.mention_count == 1
    assert asana.visibility_level == "recommended"


def test_why_not_mentioned_uses_signals_competitors_and_enrichment():
    signals = [
        Signal(id="competitive-position", name="x", status="error", explanation="x"),
        Signal(id="category-association", name="x", status="error", explanation="x"),
        Signal(id="sentiment", name="x", status="success", explanation="x"),
    ]
    competitors = [CompetitorResult(name="Asana", outranks_user=True, top_three_count=3)]
    enrichment = EnrichmentContext(confidence=0.3)

    result = analyze_why_not_mentioned("not_mentioned", signals, competitors, enrichment, "Zylo", "project management")
    assert result.reasons[0] == "AI models don't seem to know about Zylo in the project management space"
    assert "No comparison content found on your website" in result.reasons
    assert len(result.reasons) == 4
    assert len(result.suggestions) == 4


def test_why_not_mentioned_pads_suggestions():
    result = analyze_why_not_mentioned("low_visibility", [], [], None, "Zylo", "")
    assert result.reasons == ["Zylo is known but not recommended as a top choice"]
    assert len(result.suggestions) == 3


def test_rounding_helpers():
    assert round_half_up(2.5) == 3
    assert round_half_up(1.25, 1) == 1.3
    assert percent(1, 8) == 13
    assert percent(5, 0) == 0

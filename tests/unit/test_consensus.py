"""
Tests for merging repeated scan runs.
"""

import pytest

from agents.visibility_orchestrator import average_scan_results
from models.schemas import (
    Action,
    CompetitorResult,
    DimensionScore,
    QueryDimension,
    QueryTestRecord,
    ScanResult,
    ScoreBreakdown,
    SourceResult,
    VisibilityScore
)


def _result(status="recommended", overall=80, chatgpt_mentions=(True, True), competitors=None, **overrides):
    data = dict(
        brand_name="Zylo",
        category="project management",
        status=status,
        visibility_score=VisibilityScore(
            overall=overall,
            breakdown=ScoreBreakdown(mention_rate=75, avg_position=1.5, top_three_rate=100, model_consistency=50),
            by_model={"chatgpt": overall, "claude": overall},
            by_dimension=[DimensionScore(dimension=QueryDimension.QUALITY, label="Quality", score=overall,
                                         queries_count=2, mention_count=2)]
        ),
        sources={
            "chatgpt": SourceResult(source="chatgpt", mentioned=True, position="top_3",
                                    mention_count=2, top_three_count=1, total_queries=2),
            "claude": SourceResult(source="claude", total_queries=2),
        },
        queries_tested=[
            QueryTestRecord(query="q1", chatgpt=chatgpt_mentions[0], chatgpt_position=1 if chatgpt_mentions[0] else None),
            QueryTestRecord(query="q2", chatgpt=chatgpt_mentions[1], chatgpt_position=3 if chatgpt_mentions[1] else None),
        ],
        competitor_results=competitors if competitors is not None else [
            CompetitorResult(name="Asana", mentioned=True, mention_count=2, total_queries=4,
                             visibility_level="low_visibility")
        ],
        actions=[Action(id=f"a-{i}", priority=i, title="t", why="w", what="x", category="content") for i in (1, 2, 3)],
    )
    data.update(overrides)
    return ScanResult(**data)


def test_identical_runs_merge_to_the_same_result():
    result = _result()
    merged = average_scan_results([result, result.model_copy(deep=True), result.model_copy(deep=True)])
    assert merged == result


def test_status_is_a_majority_vote():
    runs = [_result("recommended"), _result("recommended"), _result("not_mentioned")]
    assert average_scan_results(runs).status == "recommended"


def test_status_tie_goes_to_first_run():
    runs = [_result("low_visibility"), _result("recommended")]
    assert average_scan_results(runs).status == "low_visibility"


def test_numbers_are_averaged_and_rounded():
    runs = [_result(overall=80), _result(overall=70), _result(overall=71)]
    merged = average_scan_results(runs)
    assert merged.visibility_score.overall == 74
    assert merged.visibility_score.by_model == {"chatgpt": 74, "claude": 74}
    assert merged.visibility_score.by_dimension[0].score == 74


def test_query_mentions_need_two_of_three():
    runs = [
        _result(chatgpt_mentions=(True, False)),
        _result(chatgpt_mentions=(True, True)),
        _result(chatgpt_mentions=(False, False)),
    ]
    queries = average_scan_results(runs).queries_tested
    assert queries[0].chatgpt and queries[0].chatgpt_position == 1
    assert not queries[1].chatgpt and queries[1].chatgpt_position is None


def test_competitors_are_unioned_case_insensitively():
    runs = [
        _result(competitors=[CompetitorResult(name="Asana", mentioned=True, mention_count=3)]),
        _result(competitors=[CompetitorResult(name="asana", mentioned=True, mention_count=1),
                             CompetitorResult(name="Trello", mentioned=True, mention_count=2, is_discovered=True)]),
        _result(competitors=[]),
    ]
    merged = average_scan_results(runs).competitor_results
    assert [c.name for c in merged] == ["Asana", "Trello"]
    assert merged[0].mention_count == 2
    assert merged[1].mention_count == 2
    assert merged[1].is_discovered


def test_source_without_average_mentions_is_not_found():
    quiet = _result(sources={"chatgpt": SourceResult(source="chatgpt", total_queries=2)})
    runs = [_result(), quiet, quiet.model_copy(deep=True)]
    source = average_scan_results(runs).sources["chatgpt"]
    assert source.mention_count == 1
    assert source.mentioned

    runs = [quiet, quiet.model_copy(deep=True), _result()]
    assert average_scan_results(runs).sources["chatgpt"].mention_count == 1

    silent = average_scan_results([quiet, quiet.model_copy(deep=True)]).sources["chatgpt"]
    assert not silent.mentioned
    assert silent.position == "not_found"


def test_failed_run_is_left_out_of_the_merge_and_errors_are_unioned():
    failed = ScanResult(
        brand_name="Zylo",
        scan_state="failed",
        errors=["claude: 2/2 queries unanswered", "Response analysis failed: boom"],
    )
    runs = [
        failed,
        _result(overall=80, errors=["claude: 2/2 queries unanswered"]),
        _result(overall=70),
    ]
    merged = average_scan_results(runs)
    assert merged.scan_state == "complete"
    assert merged.status == "recommended"
    assert merged.visibility_score.overall == 75
    assert [q.query for q in merged.queries_tested] == ["q1", "q2"]
    assert merged.sources["chatgpt"].mention_count == 2
    assert [a.id for a in merged.actions] == ["a-1", "a-2", "a-3"]
    assert merged.errors == ["claude: 2/2 queries unanswered", "Response analysis failed: boom"]


def test_all_runs_failed_keeps_the_merge_failed():
    runs = [
        _result(scan_state="failed", errors=["chatgpt: timed out"]),
        _result(scan_state="failed", errors=["Response analysis failed: boom"]),
    ]
    merged = average_scan_results(runs)
    assert merged.scan_state == "failed"
    assert merged.errors == ["chatgpt: timed out", "Response analysis failed: boom"]


def test_first_run_keeps_actions_and_single_run_is_unchanged():
    first = _result()
    other = _result(actions=[Action(id=f"b-{i}", priority=i, title="t", why="w", what="x", category="content")
                             for i in (1, 2, 3)])
    assert [a.id for a in average_scan_results([first, other]).actions] == ["a-1", "a-2", "a-3"]
    assert average_scan_results([other]) is other


def test_nothing_to_merge():
    with pytest.raises(ValueError):
        average_scan_results([])

"""
Tests for action plan generation.
"""

from agents.scorer_analyzer_agent import generate_actions
from agents.scorer_analyzer_agent.actions import default_action_plan
from models.schemas import CompetitorResult, Signal, SourceResult


def _signal(id, status):
    return Signal(id=id, name=id, status=status, explanation=f"{id} is {status}")


def _assert_plan_shape(actions):
    assert len(actions) == 3
    assert sorted(action.priority for action in actions) == [1, 2, 3]
    assert len({action.id for action in actions}) == 3


def test_every_status_and_signal_mix_gives_three_unique_actions():
    signal_sets = [
        [],
        [_signal("category-association", "error"), _signal("source-consistency", "error")],
        [_signal("description-accuracy", "success")],
        [_signal("description-accuracy", "error"), _signal("source-consistency", "warning")],
    ]
    competitor_sets = [
        [],
        [CompetitorResult(name="Asana", visibility_level="recommended")],
        [CompetitorResult(name="Asana", visibility_level="low_visibility")],
    ]
    source_sets = [
        None,
        {"chatgpt": SourceResult(source="chatgpt", position="top_3", description_accuracy="inaccurate")},
        {"claude": SourceResult(source="claude", position="mentioned", description_accuracy="partially_accurate")},
    ]
    for status in ("not_mentioned", "low_visibility", "recommended"):
        for signals in signal_sets:
            for competitors in competitor_sets:
                for sources in source_sets:
                    for names in ([], ["Asana", "Linear", "Jira"]):
                        actions = generate_actions(
                            signals, status, competitors, "A planner", "Zylo", names,
                            user_description="Sprint planning", sources=sources
                        )
                        _assert_plan_shape(actions)


def test_not_mentioned_family():
    actions = generate_actions(
        [_signal("category-association", "error")], "not_mentioned", [], None, "Zylo", []
    )
    assert [a.id for a in actions] == ["get-visibility-1", "comparison-page-2", "clarify-category-3"]
    assert "established players" in actions[0].what


def test_not_mentioned_comparison_targets_leading_competitor():
    competitors = [CompetitorResult(name="Asana", visibility_level="recommended")]
    actions = generate_actions([], "not_mentioned", competitors, None, "Zylo", ["Asana"])
    assert actions[1].title == 'Create a "Zylo vs Asana" comparison page'
    assert actions[2].id == "default-clarify-messaging-3"


def test_low_visibility_fixes_description_mismatch():
    sources = {"chatgpt": SourceResult(source="chatgpt", position="mentioned", description_accuracy="inaccurate")}
    competitors = [CompetitorResult(name="Asana", visibility_level="recommended")]
    actions = generate_actions(
        [_signal("source-consistency", "error")], "low_visibility", competitors,
        "A chat app", "Zylo", ["Asana"], user_description="Sprint planning for remote teams", sources=sources
    )
    assert [a.id for a in actions] == ["outrank-competitors-1", "fix-description-2", "improve-consistency-3"]
    assert '"A chat app"' in actions[1].why
    assert actions[2].why == "source-consistency is error"


def test_recommended_without_description_signal_refines_positioning():
    actions = generate_actions([], "recommended", [], None, "Zylo", ["Asana"])
    assert [a.id for a in actions] == ["maintain-position-1", "refine-positioning-2", "expand-categories-3"]

    accurate = generate_actions([_signal("description-accuracy", "success")], "recommended", [], None, "Zylo", ["Asana"])
    assert accurate[1].id == "monitor-competitors-2"
    assert "Asana" in accurate[1].what


def test_default_plan_names_competitors_or_falls_back():
    plan = default_action_plan("not_mentioned", "Zylo", ["Asana", "Trello", "Monday"])
    _assert_plan_shape(plan)
    assert [action.id for action in plan] == [
        "default-create-comparison-1", "default-build-presence-2", "default-clarify-messaging-3"
    ]
    assert any("Asana and Trello" in action.title + action.why + action.what for action in plan)

    fallback = default_action_plan("not_mentioned", "Zylo", [])
    _assert_plan_shape(fallback)
    assert any("established players" in action.title + action.why + action.what for action in fallback)

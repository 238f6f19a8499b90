"""
Tests for visibility signal detection.
"""

from agents.scorer_analyzer_agent.signals import (
    build_context,
    detect_brand_recognition,
    detect_sentiment,
    detect_signals,
    detect_source_consistency,
    detect_third_party_credibility
)
from models.schemas import CompetitorResult, MentionAnalysis
from tests.helpers import analysis


def _by_id(signals):
    return {signal.id: signal for signal in signals}


def test_unknown_brand_without_competitors():
    missing = [analysis(mentioned=False) for _ in range(3)]
    signals = _by_id(detect_signals(missing, missing, [], "Zylo", "", []))

    assert "description-accuracy" not in signals
    assert len(signals) == 6
    assert signals["category-association"].status == "error"
    assert signals["competitive-position"].status == "warning"
    assert signals["competitive-position"].confidence == "likely"
    assert signals["brand-recognition"].status == "error"
    assert signals["third-party-credibility"].explanation.startswith("Can't determine")


def test_top_pick_everywhere():
    described = "Zylo is a sprint planning tool for remote engineering teams"
    top = [analysis(rank=1, sentiment="recommended", description=described) for _ in range(3)]
    competitors = [CompetitorResult(name="Asana", mentioned=True, mention_count=1, visibility_level="low_visibility")]
    signals = _by_id(detect_signals(
        top, top, competitors, "Zylo", "Sprint planning for remote engineering teams", ["Asana"]
    ))

    assert len(signals) == 7
    assert signals["category-association"].status == "success"
    assert signals["competitive-position"].status == "success"
    assert "Asana" in signals["competitive-position"].details
    assert signals["source-consistency"].status == "success"
    assert signals["brand-recognition"].status == "success"
    assert signals["description-accuracy"].status == "success"
    assert signals["sentiment"].status == "success"
    assert signals["third-party-credibility"].status == "success"


def test_competitors_dominating_an_absent_brand():
    missing = [analysis(mentioned=False) for _ in range(2)]
    competitors = [CompetitorResult(name="Asana", mentioned=True, mention_count=4, visibility_level="recommended")]
    signals = _by_id(detect_signals(missing, missing, competitors, "Zylo", "", ["Asana"]))
    position = signals["competitive-position"]
    assert position.status == "error"
    assert "Asana" in position.details


def test_context_falls_back_to_top_three_lists_without_competitor_results():
    chatgpt = [analysis(rank=6, competitors_in_top_3=["Asana"])]
    claude = [analysis(mentioned=False)]
    context = build_context(chatgpt, claude, None, ["Asana", "Linear"])
    assert context.outranking_user == ["Asana"]
    assert context.mentioned_in_one
    assert not context.user_is_top_three


def test_source_consistency_gap():
    strong = [analysis(rank=1) for _ in range(4)]
    absent = [analysis(mentioned=False) for _ in range(4)]
    signal = detect_source_consistency(strong, absent)
    assert signal.status == "error"
    assert signal.explanation.startswith("ChatGPT mentions you")


def test_source_consistency_ignores_a_skipped_provider():
    strong = [analysis(rank=1) for _ in range(4)]
    skipped = [MentionAnalysis.empty() for _ in range(4)]
    signal = detect_source_consistency(strong, skipped)
    assert signal.status == "warning"
    assert signal.confidence == "likely"
    assert signal.explanation.startswith("Only ChatGPT answered")

    partly = [analysis(rank=2), analysis(rank=1), MentionAnalysis.empty(), MentionAnalysis.empty()]
    assert detect_source_consistency(strong, partly).status == "success"


def test_brand_recognition_levels():
    one = [analysis(description="Zylo plans sprints for remote teams"), analysis(description=None)]
    assert detect_brand_recognition(one, "Zylo").status == "warning"
    assert detect_brand_recognition([analysis(description=None)], "Zylo").explanation == (
        "AI mentions Zylo but can't describe it well"
    )


def test_negative_sentiment_wins():
    analyses = [analysis(sentiment="recommended"), analysis(sentiment="negative")]
    assert detect_sentiment(analyses).status == "error"
    assert detect_sentiment([analysis(mentioned=False)]).confidence == "likely"


def test_third_party_credibility_ignores_unanswered_queries():
    analyses = [MentionAnalysis.empty(), analysis(confidence=0.5, description="A")]
    assert detect_third_party_credibility(analyses).status == "warning"

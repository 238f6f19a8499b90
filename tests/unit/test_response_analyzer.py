"""
Tests for response analysis, with and without a generative verifier.
"""

import asyncio
import json

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from agents.scorer_analyzer_agent import analyze, check_description_accuracy, score_response_quality
from agents.scorer_analyzer_agent.analyzer import ask_verifier
from agents.scorer_analyzer_agent.utils import parse_json_response, strip_markdown
from models.schemas import AccuracyVerdict, MentionVerdict
from tests.helpers import ScriptedChatModel, StructuredChatModel, ranked_answer
from utils.exceptions import ParseFailure


def _verifier(payload):
    return FakeListChatModel(responses=[json.dumps(payload)])


def test_missing_answer_is_an_empty_analysis():
    result = asyncio.run(analyze(None, "Zylo", ["Asana"]))
    assert not result.mentioned
    assert result.confidence == 0
    assert not result.is_valid


def test_answer_without_brand_or_competitors_skips_verifier():
    verifier = ScriptedChatModel(["{}"])
    result = asyncio.run(analyze("Try Trello or Jira for this.", "Zylo", ["Asana"], verifier=verifier))
    assert not result.mentioned
    assert result.confidence == 0.9
    assert result.quality is not None
    assert verifier.calls == 0


def test_heuristic_analysis_ranks_by_offset():
    answer = ranked_answer("Zylo", "Asana")
    result = asyncio.run(analyze(answer, "Zylo", ["Asana", "Linear"]))
    assert result.mentioned
    assert result.exact_position == 1
    assert result.position == "top_3"
    assert result.competitors_mentioned == ["Asana"]
    assert result.competitors_in_top_3 == ["Asana"]
    assert result.confidence == 0.5


def test_verifier_verdict_is_reconciled_with_competitor_names():
    verifier = _verifier({
        "brand_mentioned": True,
        "brand_position": "top_3",
        "brand_exact_position": 2,
        "brand_sentiment": "recommended",
        "brand_description": "Zylo is a lightweight planner for remote teams",
        "competitors_mentioned": ["asana"],
        "competitors_in_top_3": ["Asana"],
        "other_brands_mentioned": ["Trello", "Zylo", "Asana"],
        "response_type": "list_recommendations",
    })
    answer = ranked_answer("Asana", "Zylo", "Trello")
    result = asyncio.run(analyze(answer, "Zylo", ["Asana", "Linear"], "Best planners?", verifier=verifier))

    assert result.mentioned
    assert result.exact_position == 2
    assert result.position == "top_3"
    assert result.sentiment == "recommended"
    assert result.competitors_mentioned == ["Asana"]
    assert result.competitors_in_top_3 == ["Asana"]
    assert result.other_brands_mentioned == ["Trello"]
    assert result.response_type == "direct_recommendation"
    assert result.confidence == 0.95


def test_exact_rank_decides_position_bucket():
    verifier = _verifier({
        "brand_mentioned": True,
        "brand_position": "top_3",
        "brand_exact_position": 5,
        "brand_sentiment": "glowing",
    })
    answer = ranked_answer("Asana", "Linear", "Trello", "Jira", "Zylo")
    result = asyncio.run(analyze(answer, "Zylo", ["Asana"], verifier=verifier))
    assert result.exact_position == 5
    assert result.position == "mentioned"
    assert result.sentiment == "neutral"


def test_unsupported_verifier_claim_is_rejected():
    verifier = _verifier({"brand_mentioned": True, "brand_description": "short"})
    result = asyncio.run(analyze("Asana is the clear leader here.", "Zylo", ["Asana"], verifier=verifier))
    assert not result.mentioned
    assert result.description is None
    assert result.competitors_mentioned == ["Asana"]
    assert result.confidence == 0.9


def test_mention_missed_by_verifier_still_counts():
    verifier = _verifier({"brand_mentioned": False, "brand_position": "not_mentioned"})
    result = asyncio.run(analyze("Zylo and Asana both work well.", "Zylo", ["Asana"], verifier=verifier))
    assert result.mentioned
    assert result.position == "mentioned"
    assert result.exact_position is None


def test_unparseable_verifier_output_falls_back_to_heuristics():
    verifier = FakeListChatModel(responses=["I think the brand is mentioned."])
    result = asyncio.run(analyze(ranked_answer("Zylo"), "Zylo", [], verifier=verifier))
    assert result.mentioned
    assert result.confidence == 0.5


def test_failing_verifier_falls_back_to_heuristics():
    verifier = ScriptedChatModel([RuntimeError("connection refused")])
    result = asyncio.run(analyze(ranked_answer("Zylo"), "Zylo", [], verifier=verifier))
    assert result.mentioned
    assert result.confidence == 0.5


def test_structured_verdict_is_used_without_a_json_round_trip():
    verifier = StructuredChatModel([MentionVerdict(
        brand_mentioned=True,
        brand_position="top_3",
        brand_exact_position=1,
        brand_sentiment="recommended",
        brand_description="Zylo is a sprint planner for remote teams",
        competitors_mentioned=["Asana"],
    )])
    result = asyncio.run(analyze(ranked_answer("Zylo", "Asana"), "Zylo", ["Asana"], verifier=verifier))

    assert verifier.schemas == [MentionVerdict]
    assert verifier.calls == 0
    assert result.exact_position == 1
    assert result.sentiment == "recommended"
    assert result.confidence == 0.95


def test_structured_dict_output_is_validated():
    verifier = StructuredChatModel([{"accuracy": "accurate", "issue": "  "}])
    assert asyncio.run(check_description_accuracy("A chat app", "Sprint planning", verifier=verifier)) == (
        "accurate", None
    )


def test_verdict_that_does_not_fit_the_schema_is_a_parse_failure():
    with pytest.raises(ParseFailure):
        asyncio.run(ask_verifier(
            FakeListChatModel(responses=[json.dumps({"brand_exact_position": "first"})]), "prompt", MentionVerdict
        ))
    with pytest.raises(ParseFailure):
        asyncio.run(ask_verifier(StructuredChatModel([{"accuracy": "spot on"}]), "prompt", AccuracyVerdict))

    verifier = _verifier({"brand_mentioned": "maybe"})
    result = asyncio.run(analyze(ranked_answer("Zylo"), "Zylo", [], verifier=verifier))
    assert result.mentioned
    assert result.confidence == 0.5

    user = "Sprint planning software for remote engineering teams"
    verifier = _verifier({"accuracy": "spot on"})
    assert asyncio.run(check_description_accuracy("A recipe website", user, verifier=verifier))[0] == "inaccurate"

def test_quality_flags_deflection():
    quality = score_response_quality(
        "I cannot provide specific recommendations. Please consult a professional.",
        "What are the best project management tools?"
    )
    assert quality.is_deflection
    assert quality.issue_type == "deflection"
    assert quality.score <= 60


def test_quality_rewards_specific_lists():
    answer = ranked_answer("Asana", "Linear", "Trello") + "\nAll three are solid project management tools."
    quality = score_response_quality(answer, "Best project management tools?")
    assert quality.has_specific_brands
    assert not quality.is_deflection
    assert quality.score >= 90


def test_description_accuracy_checks():
    user = "Sprint planning software for remote engineering teams"
    assert asyncio.run(check_description_accuracy(None, user)) == ("not_mentioned", None)
    assert asyncio.run(check_description_accuracy(
        "Sprint planning software built for remote engineering teams", user
    )) == ("accurate", None)
    assert asyncio.run(check_description_accuracy("A recipe website", user))[0] == "inaccurate"
    assert asyncio.run(check_description_accuracy("A recipe website", "")) == (
        "partially_accurate", "No product description to compare against"
    )

    verifier = _verifier({"accuracy": "inaccurate", "issue": "Misses sprint planning"})
    assert asyncio.run(check_description_accuracy("A chat app", user, verifier=verifier)) == (
        "inaccurate", "Misses sprint planning"
    )


def test_parse_json_response_variants():
    assert parse_json_response('{"a": 1}') == {"a": 1}
    assert parse_json_response('```json\n{"a": 2}\n```') == {"a": 2}
    assert parse_json_response('Sure! {"a": 3} Hope that helps.') == {"a": 3}
    with pytest.raises(ParseFailure):
        parse_json_response("no json here")
    with pytest.raises(ParseFailure):
        parse_json_response("[1, 2]")


def test_strip_markdown():
    assert strip_markdown("**Zylo** is [great](https://zylo.example)") == "Zylo is great"
    assert strip_markdown("## Options\n1. Asana\n- Linear") == "Options\nAsana\nLinear"

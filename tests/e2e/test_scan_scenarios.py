"""
End-to-end scans through the orchestration graph with in-process providers.
"""

import asyncio

import pytest

from agents.scorer_analyzer_agent import run_scorer_analysis_workflow
from agents.visibility_orchestrator import ScanOrchestrator, parse_scan_input, run_scan
from tests.helpers import FakeQueryClient, ranked_answer
from utils.brand_matcher import is_match
from utils.exceptions import InvalidScanInput, ScanAborted

NOT_MENTIONED_FAMILY = {
    "get-visibility", "comparison-page", "clarify-category",
    "default-create-comparison", "default-build-presence", "default-clarify-messaging",
}


def _clients(chatgpt, claude):
    return {"chatgpt": chatgpt, "claude": claude}


def _base_id(action):
    return action.id.rsplit("-", 1)[0]


def test_unknown_brand_is_not_mentioned():
    answer = "The best project management tools are Asana, Trello and Monday.com."
    clients = _clients(FakeQueryClient("chatgpt", answer), FakeQueryClient("claude", answer))

    result = asyncio.run(run_scan(
        {"brand_name": "Zylo", "category": "project management"},
        clients=clients
    ))

    assert result.scan_state == "complete"
    assert result.status == "not_mentioned"
    assert result.visibility_score.overall == 0
    assert len(result.actions) == 3
    assert all(_base_id(action) in NOT_MENTIONED_FAMILY for action in result.actions)
    signals = {signal.id: signal for signal in result.signals}
    assert signals["competitive-position"].status == "warning"
    assert result.why_not_mentioned is not None
    assert len(result.queries_tested) == 12
    assert len(result.raw_responses) == 12
    assert result.runs == 1
    assert len(clients["chatgpt"].calls) == 12


def test_domain_brand_is_not_matched_inside_competitor_name():
    answer = "Calendly is the most popular scheduling tool. Calendar apps from Google also help."
    assert not is_match(answer, "Cal.com")
    clients = _clients(FakeQueryClient("chatgpt", answer), FakeQueryClient("claude", answer))

    result = asyncio.run(run_scan(
        {
            "brand_name": "Cal.com",
            "category": "scheduling software",
            "description": "Open-source scheduling infrastructure, an alternative to Calendly",
            "competitors": ["Calendly"],
        },
        clients=clients
    ))

    assert result.sources["chatgpt"].mention_count == 0
    assert result.sources["claude"].mention_count == 0
    assert result.status == "not_mentioned"
    calendly = result.competitor_results[0]
    assert calendly.name == "Calendly"
    assert calendly.mentioned
    assert calendly.mention_count == 24
    assert not calendly.is_discovered
    assert calendly.outranks_user


def test_silent_provider_does_not_dilute_the_score():
    clients = _clients(
        FakeQueryClient("chatgpt", "too slow", delay=5.0, overall_timeout=0.05),
        FakeQueryClient("claude", ranked_answer("Zylo", "Asana"))
    )

    result = asyncio.run(run_scan(
        {"brand_name": "Zylo", "category": "project management", "query_count": 10},
        clients=clients
    ))

    assert result.scan_state == "complete"
    assert result.sources["chatgpt"].mention_count == 0
    assert result.sources["claude"].mention_count == 10
    assert result.visibility_score.overall == 100
    assert result.visibility_score.by_model == {"chatgpt": 0, "claude": 100}
    assert result.status == "recommended"
    assert "chatgpt: 10/10 queries unanswered" in result.errors
    assert all(raw.chatgpt_response is None for raw in result.raw_responses)
    assert clients["chatgpt"].cancelled == 10


def test_silent_provider_analyses_have_zero_confidence():
    from agents.query_generator_agent import build_query_profile, generate_tagged_queries

    scan_input = parse_scan_input({"brand_name": "Zylo", "category": "project management", "query_count": 10})
    queries = generate_tagged_queries(build_query_profile(scan_input), 10)
    analysis = asyncio.run(run_scorer_analysis_workflow(
        brand_name="Zylo",
        tagged_queries=queries,
        model_responses={"chatgpt": [None] * 10, "claude": [ranked_answer("Zylo")] * 10}
    ))

    assert all(a.confidence == 0 for a in analysis["analyses"]["chatgpt"])
    assert analysis["sources"]["chatgpt"].mention_count == 0
    assert analysis["visibility_score"].overall == 100


def test_unconfigured_provider_is_skipped():
    clients = _clients(
        FakeQueryClient("chatgpt", ranked_answer("Asana", "Zylo")),
        FakeQueryClient("claude", configured=False)
    )

    result = asyncio.run(run_scan({"brand_name": "Zylo", "category": "project management"}, clients=clients))

    assert result.scan_state == "complete"
    assert "claude: API key not configured, provider skipped" in result.errors
    assert clients["claude"].calls == []
    assert result.sources["claude"].mention_count == 0
    assert result.sources["chatgpt"].mention_count == 12
    assert result.visibility_score.by_model["claude"] == 0


def test_enhanced_scan_merges_three_runs():
    clients = _clients(
        FakeQueryClient("chatgpt", ranked_answer("Zylo", "Asana")),
        FakeQueryClient("claude", ranked_answer("Asana", "Zylo"))
    )

    result = asyncio.run(run_scan(
        {"brand_name": "Zylo", "category": "project management", "competitors": ["Asana"], "query_count": 16},
        clients=clients
    ))

    assert result.runs == 3
    assert result.scan_state == "complete"
    assert len(result.queries_tested) == 16
    assert len(clients["chatgpt"].calls) == 48
    assert result.status == "recommended"
    assert result.visibility_score.overall == 100


def test_abort_cancels_in_flight_provider_calls():
    async def scenario():
        abort_event = asyncio.Event()
        clients = _clients(
            FakeQueryClient("chatgpt", "never", delay=5.0),
            FakeQueryClient("claude", "never", delay=5.0)
        )
        task = asyncio.create_task(run_scan(
            {"brand_name": "Zylo", "category": "project management"},
            clients=clients,
            abort_event=abort_event
        ))
        while not all(client.calls for client in clients.values()):
            await asyncio.sleep(0.01)
        abort_event.set()

        with pytest.raises(ScanAborted):
            await task
        await asyncio.sleep(0.05)
        return clients

    clients = asyncio.run(scenario())
    for client in clients.values():
        assert client.calls
        assert client.cancelled == len(client.calls)


def test_abort_before_start():
    abort_event = asyncio.Event()
    abort_event.set()
    with pytest.raises(ScanAborted):
        asyncio.run(run_scan({"brand_name": "Zylo"}, clients={}, abort_event=abort_event))


def test_invalid_input_is_rejected():
    for data in (
        {"brand_name": "   "},
        {"brand_name": "Zylo", "query_count": 51},
        {"brand_name": "Zylo", "query_count": 0},
        {"brand_name": "Zylo", "competitors": ["A", "B", "C", "D"]},
        {"brand_name": "Zylo", "custom_queries": ["one?", "two?", "three?"]},
    ):
        with pytest.raises(InvalidScanInput):
            asyncio.run(run_scan(data, clients={}))


def test_stage_failure_returns_partial_result(monkeypatch):
    async def broken_analysis(**kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("agents.scorer_analyzer_agent.run_scorer_analysis_workflow", broken_analysis)
    clients = _clients(FakeQueryClient("chatgpt", "Asana"), FakeQueryClient("claude", "Asana"))

    result = asyncio.run(run_scan({"brand_name": "Zylo", "query_count": 4}, clients=clients))

    assert result.scan_state == "failed"
    assert "Response analysis failed: boom" in result.errors
    assert len(result.raw_responses) == 4
    assert result.raw_responses[0].chatgpt_response == "Asana"
    assert result.sources == {}
    assert len(result.actions) == 3
    assert [action.priority for action in result.actions] == [1, 2, 3]
    assert {_base_id(action) for action in result.actions} <= NOT_MENTIONED_FAMILY


def test_orchestrator_reports_progress_and_custom_queries():
    steps = []
    orchestrator = ScanOrchestrator(
        clients=_clients(FakeQueryClient("chatgpt", ranked_answer("Zylo")), FakeQueryClient("claude", "Asana")),
        progress_callback=lambda step, status, message, data: steps.append((step, status))
    )

    result = asyncio.run(orchestrator.scan({
        "brand_name": "Zylo",
        "category": "project management",
        "query_count": 3,
        "custom_queries": ["Is Zylo good for agencies?"],
    }))

    assert len(result.queries_tested) == 4
    assert result.queries_tested[-1].is_custom
    assert steps[0] == ("initializing", "completed")
    assert steps[-1] == ("complete", "completed")
    assert ("scoring", "completed") in steps


def test_progress_reports_error_when_result_assembly_fails(monkeypatch):
    from agents.visibility_orchestrator import nodes

    assemble = nodes.assemble_result

    def assemble_partial_only(state, scan_state):
        if scan_state == "complete":
            raise RuntimeError("bad score")
        return assemble(state, scan_state)

    monkeypatch.setattr(nodes, "assemble_result", assemble_partial_only)
    steps = []
    orchestrator = ScanOrchestrator(
        clients=_clients(FakeQueryClient("chatgpt", "Asana"), FakeQueryClient("claude", "Asana")),
        progress_callback=lambda step, status, message, data: steps.append((step, status, data))
    )

    result = asyncio.run(orchestrator.scan({"brand_name": "Zylo", "query_count": 3}))

    assert result.scan_state == "failed"
    assert "Result assembly failed: bad score" in result.errors
    assert ("scoring", "error", None) in steps
    final_step, final_status, final_data = steps[-1]
    assert (final_step, final_status) == ("failed", "error")
    assert final_data["scan_state"] == "failed"

"""
Tests for the query generator workflow.
"""

import re

import pytest

from agents.query_generator_agent import (
    build_query_profile,
    generate_tagged_queries,
    run_query_generation_workflow
)
from agents.query_generator_agent.utils import (
    build_enhanced_description,
    clean_query,
    deduplicate_queries,
    detect_country,
    get_brand_with_context,
    infer_category,
    is_location_bound_category
)
from models.schemas import EnrichmentContext, QueryDimension, ScanInput, TaggedQuery


def _profile(**overrides):
    data = {
        "brand_name": "Zylo",
        "category": "project management",
        "description": "Zylo helps remote teams plan sprints and track tasks",
        "competitors": ["Asana", "Linear"],
    }
    data.update(overrides)
    return build_query_profile(ScanInput(**data))


def test_generates_exactly_the_budget():
    profile = _profile()
    for budget in (1, 5, 12, 16, 30, 50):
        queries = generate_tagged_queries(profile, budget)
        assert len(queries) == budget, budget


def test_generation_is_deterministic():
    profile = _profile()
    first = [(q.query, q.dimension) for q in generate_tagged_queries(profile, 20)]
    second = [(q.query, q.dimension) for q in generate_tagged_queries(profile, 20)]
    assert first == second


def test_queries_are_unique_and_tagged():
    for profile in (_profile(), _profile(competitors=[]), _profile(category="", description="")):
        queries = generate_tagged_queries(profile, 25)
        texts = [q.query.lower() for q in queries]
        assert len(texts) == len(set(texts))
        dimensions = {q.dimension for q in queries}
        assert dimensions
        assert all(isinstance(d, QueryDimension) for d in dimensions)
        assert all(q.query for q in queries)


def test_brand_is_asked_about_directly():
    queries = generate_tagged_queries(_profile(), 12)
    assert any("Zylo" in q.query for q in queries)


def test_enhanced_budget_adds_variation_groups():
    small = generate_tagged_queries(_profile(), 12)
    large = generate_tagged_queries(_profile(), 20)
    assert not any(q.variation_group for q in small)
    assert any(q.variation_group for q in large)


def test_custom_queries_are_appended_once():
    profile = _profile()
    result = run_query_generation_workflow(
        profile,
        8,
        custom_queries=["Is Zylo good for agencies?", "is zylo good for agencies?", "  "]
    )
    queries = result["queries"]
    assert len(queries) == 9
    assert queries[-1].is_custom
    assert queries[-1].dimension == QueryDimension.GENERAL
    assert not any(q.is_custom for q in queries[:-1])


def test_workflow_reports_resolved_category():
    result = run_query_generation_workflow(_profile(), 6)
    assert result["category"]
    assert result["product_type"] in ("software", "service", "physical")
    assert result["errors"] == []


def test_zero_budget_is_rejected():
    with pytest.raises(ValueError):
        run_query_generation_workflow(_profile(), 0)


def test_profile_merges_user_and_discovered_competitors():
    enrichment = EnrichmentContext(discovered_competitors=["linear", "Monday.com", "Zylo"])
    profile = build_query_profile(
        ScanInput(brand_name="Zylo", category="project management", competitors=["Asana", "Linear"]),
        enrichment
    )
    assert profile.competitors == ["Asana", "Linear", "Monday.com"]
    assert profile.category == "project management"


def test_clean_query():
    assert clean_query("what is the the best tool") == "What is the best tool?"
    assert clean_query("Which tools are best for?") == "Which tools are best?"
    assert clean_query("  best   tools tools  ") == "Best tools"


def test_deduplicate_queries_is_case_insensitive():
    queries = [TaggedQuery(query="Best tools?"), TaggedQuery(query="best tools?"), TaggedQuery(query="Other?")]
    assert [q.query for q in deduplicate_queries(queries)] == ["Best tools?", "Other?"]


def test_infer_category_from_description():
    assert infer_category("We sell health insurance plans for young families") == "health insurance"
    assert infer_category("") == "business services"


def test_country_and_location_bound_categories():
    assert detect_country("Best banks in Cape Town") == ("South Africa", "ZA")
    assert detect_country("A bakery for UK high streets") == ("United Kingdom", "UK")
    assert detect_country("Remote-first planning tool") is None
    assert is_location_bound_category("health insurance")
    assert not is_location_bound_category("project management")


def test_enhanced_description_adds_only_new_details():
    enrichment = EnrichmentContext(
        target_audience="engineering managers",
        extracted_features=["Gantt charts", "Sprint planning"],
        use_cases=["release tracking"]
    )
    description = build_enhanced_description("Sprint planning for remote teams.", enrichment)
    assert description == (
        "Sprint planning for remote teams. Target audience: engineering managers. "
        "Key features: Gantt charts. Use cases: release tracking"
    )
    assert build_enhanced_description("Sprint planning.", None) == "Sprint planning"


def test_ambiguous_brand_is_always_qualified_by_category():
    assert get_brand_with_context("Budget", "car rental") == "Budget car rental"
    profile = _profile(
        brand_name="Budget",
        category="car rental",
        description="Rental cars at airports and city locations for travellers",
        competitors=["Hertz"],
    )

    for budget in (12, 30):
        queries = [q.query for q in generate_tagged_queries(profile, budget)]
        assert any("Budget car rental" in query for query in queries)
        assert not [query for query in queries if re.search(r"\bBudget\b(?! car rental)", query)]

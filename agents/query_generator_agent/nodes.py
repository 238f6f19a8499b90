"""
Node functions for the query generator LangGraph workflow.

Queries are produced in tiers (priority, location, category, variations,
contextual, enhanced, backup) and assembled in that order until the budget
is met.
"""

import logging
from typing import Dict, List, Optional

from agents.query_generator_agent.models import QueryGeneratorState
from agents.query_generator_agent.templates import (
    BACKUP_PHYSICAL,
    BACKUP_SERVICE_EXTRAS,
    BACKUP_SOFTWARE,
    BEST_IN_CATEGORY,
    BRAND_FIT,
    BRAND_KNOWLEDGE,
    CATEGORY_TIER,
    COMPETITOR_TEMPLATE_FIELD,
    CONTEXTUAL,
    CORE_DIMENSIONS,
    DECISION_MAKING,
    ENHANCED_DEFAULT,
    ENHANCED_PHYSICAL,
    FILL_FRAMES,
    FILL_QUALIFIERS,
    HEAD_TO_HEAD,
    INDUSTRY_DIMENSIONS,
    LOCATION_TIER,
    VARIATIONS_COMPARISON,
    VARIATIONS_DEFAULT,
    VARIATIONS_PHYSICAL,
    Template,
)
from agents.query_generator_agent.utils import (
    clean_query,
    deduplicate_queries,
    detect_industry,
    detect_product_type,
    extract_features,
    extract_industry,
    extract_problem,
    extract_target_audience,
    extract_use_case,
    fill_template,
    get_brand_with_context,
    get_product_terminology,
    resolve_specific_category,
)
from models.schemas import DIMENSION_LABELS, QueryDimension, TaggedQuery
from utils.helpers import dedupe_names

logger = logging.getLogger(__name__)

MIN_USE_CASE_LENGTH = 5
MIN_FEATURE_TERM_LENGTH = 2
MAX_CONTEXT_COMPETITORS = 3

# Tier caps: (standard, elevated)
LOCATION_CAP = (3, 4)
CATEGORY_CAP = (4, 5)
MAX_VARIATIONS = 9
MAX_CONTEXTUAL = 5


def _tagged(template: Template, fields: Dict[str, str], variation_group: Optional[str] = None) -> TaggedQuery:
    text, dimension = template
    return TaggedQuery(
        query=fill_template(text, fields),
        dimension=QueryDimension(dimension),
        variation_group=variation_group
    )


def _pick(templates: Dict[str, Template], product_type: str) -> Template:
    return templates.get(product_type) or templates["default"]


def _core_dimensions(product_type: str, industry: str) -> List[str]:
    if product_type == "service":
        return [dimension for dimension, _ in INDUSTRY_DIMENSIONS[industry]]
    return CORE_DIMENSIONS.get(product_type, CORE_DIMENSIONS["default"])


def resolve_profile(state: QueryGeneratorState) -> QueryGeneratorState:
    """Node: Resolve product type, industry, terminology and template fields."""
    logger.info("🚀 Resolving query profile...")

    profile = state["profile"]
    description = profile.description or ""

    product_type = profile.product_type or detect_product_type(profile.category, description)
    industry_term = extract_industry(description)
    category = resolve_specific_category(profile.category, product_type, industry_term)

    if profile.industry_type or product_type == "service":
        industry = detect_industry(category, description, profile.industry_type)
    elif product_type == "physical":
        industry = "generic_physical"
    else:
        industry = "generic_software"

    terms = get_product_terminology(product_type, industry, profile.terminology)
    place = profile.detected_country if profile.is_location_bound and profile.detected_country else ""

    features = [f for f in dedupe_names(profile.features) if len(f) > MIN_FEATURE_TERM_LENGTH]
    if not features:
        features = extract_features(description)

    competitors = profile.competitors
    state["product_type"] = product_type
    state["industry"] = industry
    state["category"] = category
    state["fields"] = {
        "category": category,
        "singular": terms["singular"],
        "plural": terms["plural"],
        "options": terms["options"],
        "use_verb": terms["use_verb"],
        "brand_ctx": get_brand_with_context(profile.brand_name, category),
        "place": place,
        "loc": f" in {place}" if place else "",
        "competitor": competitors[0] if competitors else "",
        "competitors": ", ".join(competitors[:MAX_CONTEXT_COMPETITORS]),
        "industry": industry_term or "",
    }
    state["context"] = {
        "use_case": extract_use_case(description) or (profile.use_cases[0] if profile.use_cases else None),
        "audience": profile.target_audience or extract_target_audience(description),
        "problem": extract_problem(description),
        "features": features,
        "search_categories": profile.user_categories or [profile.category or category],
        "competitor_count": len(competitors),
    }
    state["tiers"] = {}

    logger.info(f"✓ Profile resolved: {product_type} / {industry} / '{category}'")
    return state


def _priority_tier(state: QueryGeneratorState) -> List[TaggedQuery]:
    product_type = state["product_type"]
    fields = state["fields"]
    family = "physical" if product_type == "physical" else "default"
    local = "_local" if fields["place"] else ""

    queries = [
        _tagged(_pick(BRAND_KNOWLEDGE, product_type), fields),
        _tagged(BEST_IN_CATEGORY[family + local], fields),
    ]
    if fields["competitor"]:
        queries.append(_tagged(_pick(HEAD_TO_HEAD, product_type), fields))
    else:
        queries.append(_tagged(HEAD_TO_HEAD["alternatives"], fields))
    return queries


def _category_tier(state: QueryGeneratorState) -> List[TaggedQuery]:
    product_type = state["product_type"]
    category = state["category"].lower()
    queries = []
    for search_category in state["context"]["search_categories"]:
        lowered = search_category.lower()
        if lowered == category or lowered in category or category in lowered:
            continue
        fields = dict(state["fields"], search_category=search_category)
        for template in CATEGORY_TIER.get(product_type, CATEGORY_TIER["default"]):
            queries.append(_tagged(template, fields))
        queries.append(_tagged(BRAND_FIT, fields))
    return queries


def _contextual_tier(state: QueryGeneratorState) -> List[TaggedQuery]:
    product_type = state["product_type"]
    context = state["context"]
    fields = state["fields"]
    queries = []

    use_case = context.get("use_case")
    if use_case and len(use_case) > MIN_USE_CASE_LENGTH:
        queries.append(_tagged(_pick(CONTEXTUAL["use_case"], product_type), dict(fields, use_case=use_case)))

    audience = context.get("audience")
    if audience:
        templates = CONTEXTUAL["audience"]
        queries.append(_tagged(templates.get(product_type, templates["software"]), dict(fields, audience=audience)))

    if fields["industry"]:
        queries.append(_tagged(_pick(CONTEXTUAL["industry"], product_type), fields))

    features = context.get("features") or []
    if len(features) >= 2:
        queries.append(_tagged(
            _pick(CONTEXTUAL["two_features"], product_type),
            dict(fields, feature=features[0], feature2=features[1])
        ))
    elif features:
        queries.append(_tagged(_pick(CONTEXTUAL["one_feature"], product_type), dict(fields, feature=features[0])))

    if context.get("competitor_count", 0) >= 2:
        queries.append(_tagged(CONTEXTUAL["multi_competitor"]["default"], fields))

    problem = context.get("problem")
    if problem:
        templates = CONTEXTUAL["problem"]
        queries.append(_tagged(templates.get(product_type, templates["software"]), dict(fields, problem=problem)))

    return queries


def build_core_tiers(state: QueryGeneratorState) -> QueryGeneratorState:
    """Node: Build the priority, location, category and contextual tiers."""
    logger.info("🎯 Building core query tiers...")

    fields = state["fields"]
    tiers = state["tiers"]
    tiers["priority"] = _priority_tier(state)
    tiers["location"] = [_tagged(template, fields) for template in LOCATION_TIER] if fields["place"] else []
    tiers["category"] = _category_tier(state)
    tiers["contextual"] = _contextual_tier(state)

    sizes = ", ".join(f"{name}={len(queries)}" for name, queries in tiers.items())
    logger.info(f"✓ Core tiers: {sizes}")
    return state


def build_elevated_tiers(state: QueryGeneratorState) -> QueryGeneratorState:
    """Node: Build paraphrase variations and enhanced queries for elevated scans."""
    logger.info("🎯 Building elevated query tiers...")

    product_type = state["product_type"]
    fields = state["fields"]

    variation_sets = list(VARIATIONS_PHYSICAL if product_type == "physical" else VARIATIONS_DEFAULT)
    if product_type != "physical" and fields["competitor"]:
        variation_sets.append(VARIATIONS_COMPARISON)

    variations = []
    for group_id, dimension, paraphrases in variation_sets:
        for index, text in enumerate(paraphrases):
            variations.append(_tagged((text, dimension), fields, variation_group=f"{group_id}_v{index + 1}"))

    enhanced = ENHANCED_PHYSICAL if product_type == "physical" else ENHANCED_DEFAULT
    state["tiers"]["variations"] = variations
    state["tiers"]["enhanced"] = [_tagged(template, fields) for template in list(enhanced) + DECISION_MAKING]

    logger.info(f"✓ Elevated tiers: {len(variations)} variations, {len(state['tiers']['enhanced'])} enhanced")
    return state


def build_backup_tier(state: QueryGeneratorState) -> QueryGeneratorState:
    """Node: Build the backup queries used to reach the budget."""
    product_type = state["product_type"]
    fields = state["fields"]

    if product_type == "physical":
        templates = list(BACKUP_PHYSICAL)
    elif product_type == "service":
        templates = [
            (f"Which {{category}} {{plural}}{{loc}} {phrase}", dimension)
            for dimension, phrase in INDUSTRY_DIMENSIONS[state["industry"]]
        ] + list(BACKUP_SERVICE_EXTRAS)
    else:
        templates = list(BACKUP_SOFTWARE)

    if not fields["competitor"]:
        templates = [t for t in templates if COMPETITOR_TEMPLATE_FIELD not in t[0]]

    state["tiers"]["backup"] = [_tagged(template, fields) for template in templates]
    logger.info(f"✓ Backup tier: {len(state['tiers']['backup'])} queries")
    return state


def _fill_queries(state: QueryGeneratorState):
    """Yield dimension-phrased queries; enough distinct strings to reach any allowed budget."""
    fields = state["fields"]
    dimensions = _core_dimensions(state["product_type"], state["industry"])
    for qualifier in FILL_QUALIFIERS:
        for frame in FILL_FRAMES:
            for dimension in dimensions:
                label = DIMENSION_LABELS[dimension].lower().replace("&", "and")
                text = frame.format_map(dict(fields, label=label))
                if qualifier:
                    text = f"{text[:-1]}{qualifier}?" if text.endswith("?") else f"{text}{qualifier}"
                yield TaggedQuery(query=clean_query(text), dimension=QueryDimension(dimension))


def assemble_queries(state: QueryGeneratorState) -> QueryGeneratorState:
    """Node: Merge tiers in priority order, fill to the exact budget and append custom queries."""
    logger.info("📊 Assembling queries...")

    budget = state["budget"]
    tiers = state["tiers"]
    elevated = "variations" in tiers
    index = 1 if elevated else 0

    queries: List[TaggedQuery] = []
    seen = set()

    def add(candidates: List[TaggedQuery], limit: Optional[int] = None) -> None:
        added = 0
        for candidate in candidates:
            if len(queries) >= budget or (limit is not None and added >= limit):
                return
            key = candidate.query.lower().strip()
            if key and key not in seen:
                seen.add(key)
                queries.append(candidate)
                added += 1

    add(tiers["priority"])
    add(tiers["location"], LOCATION_CAP[index])
    add(tiers["category"], CATEGORY_CAP[index])
    if elevated:
        add(tiers["variations"], MAX_VARIATIONS)
    add(tiers["contextual"], MAX_CONTEXTUAL)
    if elevated:
        add(tiers["enhanced"])

    # Backup queries covering dimensions not yet asked about go first
    covered = {q.dimension.value for q in queries}
    core = _core_dimensions(state["product_type"], state["industry"])
    backup = tiers.get("backup", [])
    missing = [q for q in backup if q.dimension.value in core and q.dimension.value not in covered]
    add(missing + [q for q in backup if q not in missing])

    if len(queries) < budget:
        logger.info(f"⚠️ Tiers produced {len(queries)}/{budget} queries, adding fill queries")
        add(list(_fill_queries(state)))

    custom = [
        TaggedQuery(query=text.strip(), dimension=QueryDimension.GENERAL, is_custom=True)
        for text in state.get("custom_queries") or []
        if text and text.strip()
    ]
    state["queries"] = deduplicate_queries(queries + custom)

    logger.info(f"✓ Assembled {len(queries)} generated + {len(state['queries']) - len(queries)} custom queries")
    return state


def finalize(state: QueryGeneratorState) -> QueryGeneratorState:
    """Node: Finalize and mark as completed."""
    logger.info("✅ Query generation workflow complete")
    state["completed"] = True
    return state

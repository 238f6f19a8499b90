"""
Response analysis: decides whether one LLM answer mentions the brand,
where it ranks, and how useful the answer was.

A generative verifier (any LangChain chat model) is consulted when one is
supplied; its verdict is cross-checked against the exact brand matcher.
Without a verifier, or when it fails, a deterministic heuristic applies.
"""

import asyncio
import logging
from typing import List, Optional, Tuple, Type, TypeVar

from langchain_core.messages import HumanMessage
from pydantic import BaseModel, ValidationError

from agents.ai_model_tester_agent.utils import response_text
from agents.scorer_analyzer_agent.utils import (
    CAPITALIZED_PHRASE_PATTERN,
    DEFLECTION_PHRASES,
    GENERIC_PHRASES,
    KNOWLEDGE_CUTOFF_PHRASES,
    NON_BRAND_WORDS,
    NUMBERED_ITEM_PATTERN,
    REFUSAL_PHRASES,
    RESPONSE_TYPE_MAP,
    build_accuracy_prompt,
    build_mention_prompt,
    description_terms,
    markdown_brand_mention,
    parse_json_response,
    possible_brand_mention,
    strip_markdown,
    term_overlap
)
from config.settings import settings
from models.schemas import AccuracyVerdict, DescriptionAccuracy, MentionAnalysis, MentionVerdict, ResponseQuality
from utils.brand_matcher import find_competitors, find_position, is_match, is_same_brand
from utils.exceptions import ParseFailure

logger = logging.getLogger(__name__)

# Character offsets used to estimate rank when no verifier is available
TOP_RANK_OFFSETS = (100, 200, 300)
FALLBACK_RANK = 5

VALID_SENTIMENTS = ("recommended", "neutral", "negative")

Verdict = TypeVar("Verdict", bound=BaseModel)


def score_response_quality(response: str, query: str = "") -> ResponseQuality:
    """
    Rate how useful an answer is, independent of the brand.

    Starts at 100 and deducts for deflection (40), knowledge-cutoff hedging
    (30), refusal (35), generic advice (10 per phrase, at most 30), no named
    brands (20) and drifting off the question (25). Long answers naming
    brands and numbered lists earn small bonuses.
    """
    lower = response.lower()
    score = 100
    is_deflection = False
    is_generic = False
    is_off_topic = False
    issue_type = "none"
    issue_detail = None

    if any(phrase in lower for phrase in DEFLECTION_PHRASES):
        is_deflection = True
        issue_type = "deflection"
        issue_detail = "AI deflected instead of giving specific recommendations"
        score -= 40
    elif any(phrase in lower for phrase in KNOWLEDGE_CUTOFF_PHRASES):
        issue_type = "knowledge_cutoff"
        issue_detail = "AI mentioned knowledge cutoff limitations"
        score -= 30

    if issue_type == "none" and any(phrase in lower for phrase in REFUSAL_PHRASES):
        is_deflection = True
        issue_type = "refusal"
        issue_detail = "AI refused to make specific recommendations"
        score -= 35

    generic_count = sum(1 for phrase in GENERIC_PHRASES if phrase in lower)
    if generic_count >= 2:
        is_generic = True
        if issue_type == "none":
            issue_type = "generic"
            issue_detail = "Response is too generic without specific recommendations"
        score -= min(generic_count * 10, 30)

    brands = [
        phrase for phrase in CAPITALIZED_PHRASE_PATTERN.findall(response)
        if phrase not in NON_BRAND_WORDS
    ]
    has_specific_brands = len(brands) >= 2
    if not has_specific_brands and not is_deflection:
        is_generic = True
        if issue_type == "none":
            issue_type = "generic"
            issue_detail = "Response doesn't mention specific brands"
        score -= 20

    topics = [
        word for word in query.lower().replace("?", "").replace(".", "").replace(",", "").replace("!", "").split()
        if len(word) > 4
    ][:5]
    topic_matches = sum(1 for topic in topics if topic in lower)
    if topic_matches < min(2, len(topics)) and len(response) > 100:
        is_off_topic = True
        if issue_type == "none":
            issue_type = "off_topic"
            issue_detail = "Response may not directly answer the query"
        score -= 25

    if len(response) > 500 and has_specific_brands:
        score += 10
    if NUMBERED_ITEM_PATTERN.search(response):
        score += 5

    score = max(0, min(100, score))
    if score < 50 and issue_type == "none":
        issue_type = "generic"
        issue_detail = "Response quality is below threshold"

    return ResponseQuality(
        score=score,
        is_deflection=is_deflection,
        is_generic=is_generic,
        is_off_topic=is_off_topic,
        has_specific_brands=has_specific_brands,
        issue_type=issue_type,
        issue_detail=issue_detail
    )


def estimate_rank(offset: int) -> int:
    """Rough rank from where the brand first appears in the answer."""
    for rank, limit in enumerate(TOP_RANK_OFFSETS, start=1):
        if offset < limit:
            return rank
    return FALLBACK_RANK


def basic_analysis(
    text: str,
    brand_name: str,
    competitors: List[str],
    quality: Optional[ResponseQuality] = None
) -> MentionAnalysis:
    """Deterministic analysis from brand matcher offsets alone (confidence 0.5)."""
    offset = find_position(text, brand_name)
    mentioned = offset is not None

    top_competitors = []
    for competitor in competitors:
        competitor_offset = find_position(text, competitor)
        if competitor_offset is not None and competitor_offset < TOP_RANK_OFFSETS[-1]:
            top_competitors.append(competitor)

    exact_position = estimate_rank(offset) if mentioned else None
    return MentionAnalysis(
        mentioned=mentioned,
        position=("top_3" if exact_position <= 3 else "mentioned") if mentioned else "not_found",
        exact_position=exact_position,
        sentiment="neutral" if mentioned else None,
        competitors_mentioned=find_competitors(text, competitors),
        competitors_in_top_3=top_competitors,
        response_type="deflection" if quality and quality.is_deflection else "unclear",
        confidence=0.5,
        quality=quality
    )


def _canonical_names(names: List[str], known: List[str]) -> List[str]:
    """Map verifier spellings onto the supplied competitor names."""
    canonical = []
    for name in names:
        match = next((candidate for candidate in known if is_same_brand(name, candidate)), None)
        resolved = match or name
        if resolved.lower() not in (item.lower() for item in canonical):
            canonical.append(resolved)
    return canonical


def reconcile_analysis(
    verdict: MentionVerdict,
    raw_text: str,
    cleaned_text: str,
    brand_name: str,
    competitors: List[str],
    quality: Optional[ResponseQuality] = None
) -> MentionAnalysis:
    """
    Combine the verifier's verdict with exact matching.

    The brand counts as mentioned when the verifier says so and either the
    matcher confirms it or the verifier could describe it, or when the
    verifier missed a mention the matcher finds. A known rank decides the
    position bucket so rank 1..3 and top_3 always agree.
    """
    in_text = (
        is_match(cleaned_text, brand_name)
        or is_match(raw_text, brand_name)
        or markdown_brand_mention(raw_text, brand_name)
    )
    verifier_says = verdict.brand_mentioned
    description = verdict.brand_description
    if description is not None and description.strip().lower() in ("", "null", "none"):
        description = None

    mentioned = (
        (verifier_says and in_text)
        or (verifier_says and description is not None and len(description) > 10)
        or (not verifier_says and in_text)
    )

    position = "not_found"
    exact_position = None
    sentiment = None
    if mentioned:
        position = "top_3" if verdict.brand_position == "top_3" else "mentioned"
        rank = verdict.brand_exact_position
        if rank is not None and rank >= 1:
            exact_position = rank
            position = "top_3" if rank <= 3 else "mentioned"
        sentiment = verdict.brand_sentiment if verdict.brand_sentiment in VALID_SENTIMENTS else "neutral"
    else:
        description = None

    known = list(competitors)
    competitors_mentioned = _canonical_names(
        verdict.competitors_mentioned + find_competitors(raw_text, known),
        known
    )
    competitors_in_top_3 = _canonical_names(verdict.competitors_in_top_3, known)

    other_brands = []
    for name in verdict.other_brands_mentioned:
        if is_same_brand(name, brand_name) or any(is_same_brand(name, c) for c in known):
            continue
        if name.lower() not in (item.lower() for item in other_brands):
            other_brands.append(name)

    return MentionAnalysis(
        mentioned=mentioned,
        position=position,
        exact_position=exact_position,
        sentiment=sentiment,
        description=description,
        competitors_mentioned=competitors_mentioned,
        competitors_in_top_3=competitors_in_top_3,
        other_brands_mentioned=other_brands,
        response_type=RESPONSE_TYPE_MAP.get(str(verdict.response_type), "unclear"),
        confidence=0.95 if mentioned else 0.9,
        quality=quality
    )


async def ask_verifier(verifier, prompt: str, schema: Type[Verdict]) -> Verdict:
    """
    Ask the verifier for a verdict shaped like `schema`.

    Structured output is tried first. Models that cannot produce it are
    asked again for plain JSON, which is validated against the same schema.

    Raises:
        ParseFailure: the verdict does not fit the schema
        asyncio.TimeoutError: no answer within ANALYSIS_TIMEOUT
    """
    messages = [HumanMessage(content=prompt)]

    try:
        structured_llm = verifier.with_structured_output(schema)
        verdict = await asyncio.wait_for(structured_llm.ainvoke(messages), timeout=settings.ANALYSIS_TIMEOUT)
        return verdict if isinstance(verdict, schema) else schema.model_validate(verdict)
    except asyncio.TimeoutError:
        raise
    except ValidationError as e:
        raise ParseFailure(f"Verifier verdict does not fit {schema.__name__}: {e}") from e
    except Exception as e:
        logger.warning(f"Structured output failed, falling back to JSON: {e}")

    response = await asyncio.wait_for(verifier.ainvoke(messages), timeout=settings.ANALYSIS_TIMEOUT)
    parsed = parse_json_response(response_text(response.content))
    try:
        return schema.model_validate(parsed)
    except ValidationError as e:
        raise ParseFailure(f"Verifier JSON does not fit {schema.__name__}: {e}") from e


async def analyze(
    answer_text: Optional[str],
    brand_name: str,
    competitor_names: Optional[List[str]] = None,
    original_query: str = "",
    verifier=None
) -> MentionAnalysis:
    """
    Analyze one provider answer for the brand and its competitors.

    Args:
        answer_text: Provider answer, None when the provider never answered
        brand_name: Scanned brand
        competitor_names: Competitors to look for
        original_query: The question that produced the answer
        verifier: Optional LangChain chat model used for the structured verdict

    Returns:
        MentionAnalysis (the empty, confidence 0 analysis for missing answers)
    """
    if not answer_text or not answer_text.strip():
        return MentionAnalysis.empty()

    competitors = list(competitor_names or [])
    quality = score_response_quality(answer_text, original_query)
    cleaned = strip_markdown(answer_text)

    possibly_mentioned = is_match(cleaned, brand_name) or possible_brand_mention(cleaned, brand_name)
    if not possibly_mentioned and not find_competitors(answer_text, competitors):
        return MentionAnalysis(
            response_type="deflection" if quality.is_deflection else "unclear",
            confidence=0.9,
            quality=quality
        )

    if verifier is None:
        return basic_analysis(cleaned, brand_name, competitors, quality)

    try:
        verdict = await ask_verifier(verifier, build_mention_prompt(cleaned, brand_name, competitors), MentionVerdict)
    except ParseFailure as e:
        logger.warning(f"⚠️ Verifier output unusable, using heuristic analysis: {e}")
        return basic_analysis(cleaned, brand_name, competitors, quality)
    except asyncio.TimeoutError:
        logger.warning(f"⚠️ Verifier timed out after {settings.ANALYSIS_TIMEOUT}s, using heuristic analysis")
        return basic_analysis(cleaned, brand_name, competitors, quality)
    except Exception as e:
        logger.error(f"❌ Verifier call failed, using heuristic analysis: {e}")
        return basic_analysis(cleaned, brand_name, competitors, quality)

    return reconcile_analysis(verdict, answer_text, cleaned, brand_name, competitors, quality)


def basic_accuracy_check(ai_description: str, user_description: str) -> Tuple[DescriptionAccuracy, Optional[str]]:
    """Term-overlap comparison: half the key terms is accurate, a quarter is partial."""
    terms = description_terms(user_description)
    if not terms:
        return "partially_accurate", "No product description to compare against"

    ratio = term_overlap(ai_description, terms)
    if ratio >= 0.5:
        return "accurate", None
    if ratio >= 0.25:
        return "partially_accurate", "AI description captures some but not all key aspects"
    return "inaccurate", "AI's description doesn't match product positioning"


async def check_description_accuracy(
    ai_description: Optional[str],
    user_description: str,
    verifier=None
) -> Tuple[DescriptionAccuracy, Optional[str]]:
    """
    Judge how well an AI description of the brand matches the brand's own.

    Returns:
        (accuracy, issue) where issue explains any mismatch
    """
    if not ai_description:
        return "not_mentioned", None

    if verifier is None:
        return basic_accuracy_check(ai_description, user_description)

    try:
        verdict = await ask_verifier(
            verifier, build_accuracy_prompt(ai_description, user_description), AccuracyVerdict
        )
    except (ParseFailure, asyncio.TimeoutError) as e:
        logger.warning(f"⚠️ Accuracy check fell back to term overlap: {e or 'timeout'}")
        return basic_accuracy_check(ai_description, user_description)
    except Exception as e:
        logger.error(f"❌ Accuracy check failed: {e}")
        return basic_accuracy_check(ai_description, user_description)

    issue = verdict.issue.strip() if verdict.issue else None
    return verdict.accuracy, issue or None

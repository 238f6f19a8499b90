"""
Visibility scoring and result compilation.

Scoring is position weighted: every answer earns points by the rank the
brand got in it (100 for first place down to 30 for a late mention) and a
score is the share of the maximum points, counting only answers that were
actually received and analysed.
"""

import logging
from typing import Dict, List, Optional

from models.schemas import (
    DIMENSION_LABELS,
    CompetitorResult,
    DimensionScore,
    EnrichmentContext,
    MentionAnalysis,
    NotMentionedAnalysis,
    QueryDimension,
    ScoreBreakdown,
    Signal,
    SourceResult,
    TaggedQuery,
    VisibilityScore,
    VisibilityStatus
)
from utils.brand_matcher import is_same_brand
from utils.helpers import percent, round_half_up, title_case

logger = logging.getLogger(__name__)

MAX_POINTS_PER_QUERY = 100

RANK_POINTS = {1: 100, 2: 90, 3: 80}
TOP_THREE_POINTS = 80
LOW_MENTION_POINTS = 30

MAX_DISCOVERED_COMPETITORS = 5
MIN_DISCOVERED_MENTIONS = 2
MAX_EXPLANATIONS = 4


def get_points(analysis: MentionAnalysis) -> int:
    """Points one analysis contributes to a score."""
    if not analysis.mentioned:
        return 0

    rank = analysis.exact_position
    if rank is None:
        return TOP_THREE_POINTS if analysis.position == "top_3" else LOW_MENTION_POINTS
    if rank in RANK_POINTS:
        return RANK_POINTS[rank]
    if rank <= 5:
        return 60
    if rank <= 10:
        return 40
    return LOW_MENTION_POINTS


def _valid(analyses: List[MentionAnalysis]) -> List[MentionAnalysis]:
    return [analysis for analysis in analyses if analysis.is_valid]


def _model_score(analyses: List[MentionAnalysis]) -> int:
    valid = _valid(analyses)
    return percent(sum(get_points(a) for a in valid), len(valid) * MAX_POINTS_PER_QUERY)


def calculate_dimension_scores(
    chatgpt_analyses: List[MentionAnalysis],
    claude_analyses: List[MentionAnalysis],
    tagged_queries: List[TaggedQuery]
) -> List[DimensionScore]:
    """
    Score each dimension the queries cover, in first-seen order.

    "general" is excluded. A dimension's maximum counts only the answers
    that were received for its queries.
    """
    indices_by_dimension: Dict[QueryDimension, List[int]] = {}
    for index, tagged in enumerate(tagged_queries):
        if tagged.dimension == QueryDimension.GENERAL:
            continue
        indices_by_dimension.setdefault(tagged.dimension, []).append(index)

    scores = []
    for dimension, indices in indices_by_dimension.items():
        points = 0
        answered = 0
        mentions = 0
        for index in indices:
            for analyses in (chatgpt_analyses, claude_analyses):
                if index >= len(analyses) or not analyses[index].is_valid:
                    continue
                analysis = analyses[index]
                answered += 1
                points += get_points(analysis)
                if analysis.mentioned:
                    mentions += 1

        scores.append(DimensionScore(
            dimension=dimension,
            label=DIMENSION_LABELS.get(dimension.value, dimension.value),
            score=percent(points, answered * MAX_POINTS_PER_QUERY),
            queries_count=len(indices),
            mention_count=mentions
        ))
    return scores


def calculate_visibility_score(
    chatgpt_analyses: List[MentionAnalysis],
    claude_analyses: List[MentionAnalysis],
    tagged_queries: List[TaggedQuery]
) -> VisibilityScore:
    """
    Calculate the visibility score (0-100) for one scan run.

    Points per answer:
        rank 1: 100, rank 2: 90, rank 3: 80, rank 4-5: 60, rank 6-10: 40,
        later or unranked mention: 30 (80 when only "top 3" is known),
        not mentioned: 0

    Args:
        chatgpt_analyses: One analysis per query, in query order
        claude_analyses: One analysis per query, in query order
        tagged_queries: The queries, for the per-dimension breakdown

    Returns:
        VisibilityScore with overall, per-model and per-dimension scores
    """
    valid = _valid(chatgpt_analyses) + _valid(claude_analyses)
    total_points = sum(get_points(a) for a in valid)
    overall = percent(total_points, len(valid) * MAX_POINTS_PER_QUERY)

    mentioned = [a for a in valid if a.mentioned]
    top_three = [a for a in mentioned if a.position == "top_3"]
    ranks = [a.exact_position for a in mentioned if a.exact_position is not None]
    avg_position = round_half_up(sum(ranks) / len(ranks), 1) if ranks else None

    both_answered = 0
    consistent = 0
    for chatgpt, claude in zip(chatgpt_analyses, claude_analyses):
        if not (chatgpt.is_valid and claude.is_valid):
            continue
        both_answered += 1
        if chatgpt.mentioned == claude.mentioned:
            consistent += 1

    score = VisibilityScore(
        overall=overall,
        breakdown=ScoreBreakdown(
            mention_rate=percent(len(mentioned), len(valid)),
            avg_position=avg_position,
            top_three_rate=percent(len(top_three), len(mentioned)),
            model_consistency=percent(consistent, both_answered)
        ),
        by_model={
            "chatgpt": _model_score(chatgpt_analyses),
            "claude": _model_score(claude_analyses)
        },
        by_dimension=calculate_dimension_scores(chatgpt_analyses, claude_analyses, tagged_queries)
    )
    logger.info(f"✓ Visibility score: {score.overall} ({len(valid)} analysed answers)")
    return score


def determine_overall_status(
    chatgpt_analyses: List[MentionAnalysis],
    claude_analyses: List[MentionAnalysis]
) -> VisibilityStatus:
    """
    Classify the scan.

    recommended: mentioned in at least 40% of answers with a top-3 placement
    or a recommending tone. low_visibility: mentioned at all.
    """
    valid = _valid(chatgpt_analyses) + _valid(claude_analyses)
    if not valid:
        return "not_mentioned"

    mentioned = [a for a in valid if a.mentioned]
    mention_ratio = len(mentioned) / len(valid)
    has_top_three = any(a.position == "top_3" for a in mentioned)
    is_recommended = any(a.sentiment == "recommended" for a in mentioned)

    if mention_ratio >= 0.4 and (has_top_three or is_recommended):
        return "recommended"
    if mentioned:
        return "low_visibility"
    return "not_mentioned"


def compile_source_result(
    source: str,
    analyses: List[MentionAnalysis],
    total_queries: Optional[int] = None
) -> SourceResult:
    """Roll one provider's analyses up into a SourceResult (description accuracy is filled later)."""
    valid = _valid(analyses)
    mention_count = sum(1 for a in valid if a.mentioned)
    top_three_count = sum(1 for a in valid if a.position == "top_3")

    position = "not_found"
    if mention_count:
        position = "top_3" if top_three_count else "mentioned"

    descriptions = sorted((a.description for a in valid if a.description), key=len, reverse=True)
    sentiments = {a.sentiment for a in valid if a.mentioned and a.sentiment}
    sentiment = next((s for s in ("recommended", "neutral", "negative") if s in sentiments), None)

    return SourceResult(
        source=source,
        mentioned=mention_count > 0,
        position=position,
        sentiment=sentiment,
        description=descriptions[0] if descriptions else None,
        mention_count=mention_count,
        top_three_count=top_three_count,
        total_queries=total_queries or len(analyses)
    )


def _visibility_level(mentions: int, top_three: int, total_queries: int) -> VisibilityStatus:
    mention_ratio = mentions / max(total_queries, 1)
    top_three_ratio = top_three / max(mentions, 1)
    if mention_ratio >= 0.4 and top_three_ratio >= 0.3:
        return "recommended"
    if mention_ratio >= 0.2:
        return "low_visibility"
    return "not_mentioned"


def _names_contain(names: List[str], target: str) -> bool:
    target = target.lower()
    return any(name.lower() == target for name in names)


def compile_competitor_results(
    chatgpt_analyses: List[MentionAnalysis],
    claude_analyses: List[MentionAnalysis],
    all_competitors: List[str],
    user_is_top_three: bool,
    user_provided: Optional[List[str]] = None
) -> List[CompetitorResult]:
    """
    Visibility of every known competitor plus brands discovered in the answers.

    Known competitors (user-supplied first, then enrichment-discovered) are
    always listed. Other brands the answers name are added when they appear
    at least twice, at most five of them, title-cased.
    """
    analyses = _valid(list(chatgpt_analyses) + list(claude_analyses))
    total_queries = len(analyses)
    provided = [name.lower() for name in (user_provided or [])]

    results = []
    for competitor in all_competitors:
        mentions = sum(1 for a in analyses if _names_contain(a.competitors_mentioned, competitor))
        top_three = sum(1 for a in analyses if _names_contain(a.competitors_in_top_3, competitor))
        level = _visibility_level(mentions, top_three, total_queries)
        results.append(CompetitorResult(
            name=competitor,
            mentioned=mentions > 0,
            mention_count=mentions,
            top_three_count=top_three,
            total_queries=total_queries,
            visibility_level=level,
            outranks_user=level == "recommended" and not user_is_top_three,
            is_discovered=competitor.lower() not in provided
        ))

    def is_known(name: str) -> bool:
        return any(is_same_brand(name, competitor) for competitor in all_competitors)

    discovered: Dict[str, Dict[str, int]] = {}
    for analysis in analyses:
        for brand in analysis.other_brands_mentioned:
            if is_known(brand):
                continue
            counts = discovered.setdefault(brand.lower(), {"mentions": 0, "top_three": 0})
            counts["mentions"] += 1
        for brand in analysis.competitors_in_top_3:
            if is_known(brand):
                continue
            counts = discovered.setdefault(brand.lower(), {"mentions": 0, "top_three": 0})
            counts["top_three"] += 1
            counts["mentions"] = max(counts["mentions"], 1)

    ranked = sorted(discovered.items(), key=lambda item: item[1]["mentions"], reverse=True)
    for name, counts in ranked[:MAX_DISCOVERED_COMPETITORS]:
        if counts["mentions"] < MIN_DISCOVERED_MENTIONS:
            continue
        level = _visibility_level(counts["mentions"], counts["top_three"], total_queries)
        results.append(CompetitorResult(
            name=title_case(name),
            mentioned=True,
            mention_count=counts["mentions"],
            top_three_count=counts["top_three"],
            total_queries=total_queries,
            visibility_level=level,
            outranks_user=level == "recommended" and not user_is_top_three,
            is_discovered=True
        ))

    return results


def analyze_why_not_mentioned(
    status: VisibilityStatus,
    signals: List[Signal],
    competitor_results: List[CompetitorResult],
    enrichment: Optional[EnrichmentContext],
    brand_name: str,
    category: str
) -> NotMentionedAnalysis:
    """
    Explain a weak result: likely reasons and matching suggestions, four of each at most.
    """
    reasons: List[str] = []
    suggestions: List[str] = []

    if status == "not_mentioned":
        reasons.append(f"AI models don't seem to know about {brand_name} in the {category or 'your'} space")
        suggestions.append("Build more online presence through content marketing and PR")
    elif status == "low_visibility":
        reasons.append(f"{brand_name} is known but not recommended as a top choice")
        suggestions.append("Focus on differentiation and clear positioning")

    for signal in signals:
        if signal.status == "success":
            continue
        if signal.id == "competitive-position":
            reasons.append("No comparison content found on your website")
            suggestions.append("Create comparison pages vs. top competitors")
        elif signal.id in ("category-association", "description-accuracy"):
            reasons.append("Your product positioning may be unclear to AI models")
            suggestions.append("Clarify your unique value proposition on your homepage")
        elif signal.id == "brand-recognition":
            reasons.append("Limited content about your product's capabilities online")
            suggestions.append("Publish detailed feature pages and use case documentation")

    dominant = [c for c in competitor_results if c.outranks_user and c.top_three_count > 0]
    if dominant:
        names = ", ".join(c.name for c in dominant[:3])
        reasons.append(f"Strong competitors ({names}) dominate the AI recommendations")
        suggestions.append(f"Study what {dominant[0].name} does well and differentiate")

    if enrichment is not None:
        if enrichment.confidence < 0.5:
            reasons.append("Your website may not clearly communicate what your product does")
            suggestions.append("Improve your homepage messaging with clear headlines and descriptions")
        if len(enrichment.extracted_features) < 3:
            reasons.append("Few distinct features were found on your website")
            suggestions.append("Create a dedicated features page highlighting your capabilities")
        if not enrichment.extracted_description:
            reasons.append("No clear product description found in your website metadata")
            suggestions.append("Add a clear meta description and OG tags to your homepage")

    if len(suggestions) < 2:
        suggestions.append("Build credibility through customer testimonials and case studies")
        suggestions.append("Get mentioned in industry publications and review sites")

    return NotMentionedAnalysis(
        reasons=list(dict.fromkeys(reasons))[:MAX_EXPLANATIONS],
        suggestions=list(dict.fromkeys(suggestions))[:MAX_EXPLANATIONS]
    )

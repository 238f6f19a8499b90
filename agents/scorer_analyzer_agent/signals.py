"""
Signal detection over the per-query analyses of both providers.

Each detector returns one Signal; detect_signals runs them in display order.
"""

from typing import List, Optional

from pydantic import BaseModel

from agents.scorer_analyzer_agent.utils import description_terms, term_overlap
from models.schemas import CompetitorResult, MentionAnalysis, Signal


class SignalContext(BaseModel):
    """Cross-source facts shared by several detectors."""
    mentioned_in_both: bool
    mentioned_in_one: bool
    top_three_in_both: bool
    top_three_in_one: bool
    outranking_user: List[str]
    lower_visibility: List[str]
    ai_descriptions: List[str]

    @property
    def user_is_top_three(self) -> bool:
        return self.top_three_in_both or self.top_three_in_one

    @property
    def user_is_mentioned(self) -> bool:
        return self.mentioned_in_both or self.mentioned_in_one


def build_context(
    chatgpt_analyses: List[MentionAnalysis],
    claude_analyses: List[MentionAnalysis],
    competitor_results: Optional[List[CompetitorResult]],
    competitors: List[str]
) -> SignalContext:
    chatgpt_mentioned = any(a.mentioned for a in chatgpt_analyses)
    claude_mentioned = any(a.mentioned for a in claude_analyses)
    chatgpt_top = any(a.position == "top_3" for a in chatgpt_analyses)
    claude_top = any(a.position == "top_3" for a in claude_analyses)
    user_is_top = chatgpt_top or claude_top

    outranking = []
    lower = []
    if competitor_results is not None:
        for result in competitor_results:
            if result.visibility_level == "recommended" and not user_is_top:
                outranking.append(result.name)
            elif result.visibility_level != "recommended" and user_is_top:
                lower.append(result.name)
    else:
        top_competitors = {
            name for analysis in list(chatgpt_analyses) + list(claude_analyses)
            for name in analysis.competitors_in_top_3
        }
        for name in competitors:
            if name in top_competitors and not user_is_top:
                outranking.append(name)
            elif name not in top_competitors and user_is_top:
                lower.append(name)

    return SignalContext(
        mentioned_in_both=chatgpt_mentioned and claude_mentioned,
        mentioned_in_one=chatgpt_mentioned != claude_mentioned,
        top_three_in_both=chatgpt_top and claude_top,
        top_three_in_one=chatgpt_top != claude_top,
        outranking_user=outranking,
        lower_visibility=lower,
        ai_descriptions=[a.description for a in list(chatgpt_analyses) + list(claude_analyses) if a.description]
    )


def detect_category_association(context: SignalContext) -> Signal:
    """Is the brand named at all when users ask about its category?"""
    def signal(status, explanation, details):
        return Signal(id="category-association", name="Category association",
                      status=status, explanation=explanation, details=details)

    if context.mentioned_in_both:
        if context.top_three_in_both:
            return signal("success",
                          "Both ChatGPT and Claude recommend you as a top choice in this category",
                          "You're consistently recommended across AI platforms")
        if context.top_three_in_one:
            return signal("success",
                          "AI tools mention you, with one ranking you as a top choice",
                          "Good visibility, but there's room to improve on one platform")
        return signal("warning",
                      "AI tools know about you but don't rank you as a top recommendation",
                      "You're in the conversation but not the first suggestion")

    if context.mentioned_in_one:
        details = (
            "You're a top pick on one platform but unknown on the other"
            if context.top_three_in_one
            else "Limited visibility on one platform, absent from the other"
        )
        return signal("warning", "Only one AI tool mentions you, so your visibility is inconsistent", details)

    return signal("error",
                  "AI tools don't mention your product when users ask about this category",
                  "You need to build presence in this space")


def detect_competitive_position(context: SignalContext, competitors: List[str]) -> Signal:
    """How the brand ranks against the competitors the user named."""
    if not competitors:
        return Signal(
            id="competitive-position",
            name="Competitive position",
            status="warning",
            explanation="No competitors specified. Add some to see how you compare",
            confidence="likely"
        )

    def signal(status, explanation, details=None):
        return Signal(id="competitive-position", name="Competitive position",
                      status=status, explanation=explanation, details=details)

    if context.user_is_top_three and not context.outranking_user:
        if context.lower_visibility:
            return signal("success", "You're recommended ahead of your competitors",
                          f"{', '.join(context.lower_visibility)} rank lower than you")
        return signal("success", "You're a top recommendation in your category")

    if context.outranking_user and context.user_is_mentioned:
        return signal("warning",
                      f"{' and '.join(context.outranking_user)} are recommended more prominently than you",
                      "You're in the conversation but not the top choice")

    if context.outranking_user:
        return signal("error", "Competitors dominate, you're not in the conversation",
                      f"{', '.join(context.outranking_user)} are being recommended while you're not mentioned")

    return signal("warning", "Neither you nor competitors are prominently featured",
                  "The category may be new or AI doesn't have strong opinions yet")


def detect_source_consistency(
    chatgpt_analyses: List[MentionAnalysis],
    claude_analyses: List[MentionAnalysis]
) -> Signal:
    """Do both providers agree about the brand? Unanswered queries are left out."""
    chatgpt_analyses = [a for a in chatgpt_analyses if a.is_valid]
    claude_analyses = [a for a in claude_analyses if a.is_valid]
    if not (chatgpt_analyses and claude_analyses):
        answered = "ChatGPT" if chatgpt_analyses else "Claude" if claude_analyses else "neither source"
        return Signal(
            id="source-consistency", name="Source consistency", status="warning", confidence="likely",
            explanation=f"Only {answered} answered, so sources can't be compared"
        )

    chatgpt_ratio = sum(1 for a in chatgpt_analyses if a.mentioned) / len(chatgpt_analyses)
    claude_ratio = sum(1 for a in claude_analyses if a.mentioned) / len(claude_analyses)
    difference = abs(chatgpt_ratio - claude_ratio)
    position_consistent = (
        any(a.position == "top_3" for a in chatgpt_analyses)
        == any(a.position == "top_3" for a in claude_analyses)
    )
    better, worse = ("ChatGPT", "Claude") if chatgpt_ratio > claude_ratio else ("Claude", "ChatGPT")

    if difference < 0.2 and position_consistent:
        status = "success"
        explanation = "Your visibility is consistent across ChatGPT and Claude"
    elif difference < 0.4 or position_consistent:
        status = "warning"
        explanation = f"Your visibility varies between AI sources, stronger on {better}"
    else:
        status = "error"
        explanation = f"{better} mentions you, but {worse} rarely does"

    return Signal(id="source-consistency", name="Source consistency", status=status, explanation=explanation)


def detect_brand_recognition(analyses: List[MentionAnalysis], brand_name: str) -> Signal:
    """Can the providers say what the brand actually does?"""
    described = sum(1 for a in analyses if a.mentioned and a.description and len(a.description) > 20)
    mentioned = sum(1 for a in analyses if a.mentioned)

    if described >= 2:
        status, explanation, details = "success", f"AI tools know {brand_name} and can describe what it does", None
    elif described == 1:
        status, explanation, details = (
            "warning", f"AI has limited knowledge about {brand_name}",
            "Only one source can describe your product in detail"
        )
    elif mentioned:
        status, explanation, details = (
            "warning", f"AI mentions {brand_name} but can't describe it well",
            "Your product is known but not well understood"
        )
    else:
        status, explanation, details = (
            "error", f"AI doesn't recognize {brand_name}",
            "Build more online presence so AI can learn about you"
        )

    return Signal(id="brand-recognition", name="Brand recognition",
                  status=status, explanation=explanation, details=details)


def detect_description_accuracy(context: SignalContext, user_description: str) -> Optional[Signal]:
    """Compare AI descriptions with the brand's own. None when no description exists."""
    if not context.ai_descriptions:
        return None

    terms = description_terms(user_description)
    accurate = 0
    inaccurate = 0
    for description in context.ai_descriptions:
        ratio = term_overlap(description, terms)
        if ratio >= 0.4:
            accurate += 1
        elif ratio < 0.2:
            inaccurate += 1

    if accurate and not inaccurate:
        return Signal(id="description-accuracy", name="Description accuracy", status="success",
                      explanation="AI accurately describes what your product does")
    if inaccurate:
        return Signal(id="description-accuracy", name="Description accuracy", status="error",
                      explanation="AI describes your product differently than your actual positioning",
                      details="This mismatch can hurt your visibility for the right use cases")
    return Signal(id="description-accuracy", name="Description accuracy", status="warning",
                  explanation="AI's description partially matches your positioning")


def detect_sentiment(analyses: List[MentionAnalysis]) -> Signal:
    with_sentiment = [a for a in analyses if a.mentioned and a.sentiment]
    if not with_sentiment:
        return Signal(id="sentiment", name="AI sentiment", status="warning",
                      explanation="Not enough data to determine how AI feels about your product",
                      confidence="likely")

    if any(a.sentiment == "negative" for a in with_sentiment):
        return Signal(id="sentiment", name="AI sentiment", status="error",
                      explanation="Some AI responses express concerns about your product",
                      details="Review what AI is saying and address any misconceptions")

    recommended = sum(1 for a in with_sentiment if a.sentiment == "recommended")
    if recommended / len(with_sentiment) >= 0.5:
        return Signal(id="sentiment", name="AI sentiment", status="success",
                      explanation="AI actively recommends your product")
    return Signal(id="sentiment", name="AI sentiment", status="warning",
                  explanation="AI mentions you neutrally without strong endorsement")


def detect_third_party_credibility(analyses: List[MentionAnalysis]) -> Signal:
    """
    Infer third-party coverage from how confidently and consistently the
    providers talk about the brand. Only answers that mention the brand count.
    """
    relevant = [a for a in analyses if a.is_valid and a.mentioned]
    if not relevant:
        return Signal(id="third-party-credibility", name="Third-party coverage", status="warning",
                      explanation="Can't determine third-party coverage from available data",
                      confidence="likely")

    average_confidence = sum(a.confidence for a in relevant) / len(relevant)
    distinct_descriptions = {a.description[:50] for a in relevant if a.description}

    if average_confidence >= 0.8 and len(distinct_descriptions) <= 2:
        return Signal(id="third-party-credibility", name="Third-party coverage", status="success",
                      explanation="AI is confident about your product, likely covered by multiple sources",
                      confidence="likely")
    if average_confidence >= 0.5:
        return Signal(id="third-party-credibility", name="Third-party coverage", status="warning",
                      explanation="You may have limited third-party coverage in this category",
                      confidence="likely",
                      details="Get listed in industry roundups and comparison articles")
    return Signal(id="third-party-credibility", name="Third-party coverage", status="error",
                  explanation="Few third-party sources seem to mention you in this category",
                  confidence="likely",
                  details="AI relies on external sources, build more online presence")


def detect_signals(
    chatgpt_analyses: List[MentionAnalysis],
    claude_analyses: List[MentionAnalysis],
    competitor_results: Optional[List[CompetitorResult]],
    brand_name: str,
    user_description: str,
    competitors: List[str]
) -> List[Signal]:
    """
    Derive the visibility signals for a scan.

    Returns seven signals, or six when no provider described the brand
    (description-accuracy is then omitted).
    """
    context = build_context(chatgpt_analyses, claude_analyses, competitor_results, competitors)
    all_analyses = list(chatgpt_analyses) + list(claude_analyses)

    signals = [
        detect_category_association(context),
        detect_competitive_position(context, competitors),
        detect_source_consistency(chatgpt_analyses, claude_analyses),
        detect_brand_recognition(all_analyses, brand_name),
        detect_description_accuracy(context, user_description),
        detect_sentiment(all_analyses),
        detect_third_party_credibility(all_analyses),
    ]
    return [signal for signal in signals if signal is not None]

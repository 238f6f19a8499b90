"""
Action plan generation.

Every scan gets exactly three prioritised actions. The status picks a family
of templates; signals and competitor results decide which templates apply,
and status defaults pad the list when fewer than three apply.
"""

import logging
from typing import Dict, List, Optional

from models.schemas import Action, CompetitorResult, Signal, SourceResult, VisibilityStatus
from utils.helpers import truncate_text

logger = logging.getLogger(__name__)

ACTION_COUNT = 3


def _action(id: str, title: str, why: str, what: str, category: str) -> Dict[str, str]:
    # Priorities are assigned once the final order is known
    return {"id": id, "title": title, "why": why, "what": what, "category": category}


def _not_mentioned_actions(
    brand_name: str,
    competitor_list: str,
    top_competitors: List[str],
    signals: Dict[str, Signal]
) -> List[Dict[str, str]]:
    actions = [_action(
        "get-visibility",
        "Get into the conversation",
        "AI tools don't know about you yet. You need to build presence in your category.",
        "Focus on three things: (1) Create comparison content mentioning "
        f"{competitor_list}, (2) Get listed on relevant \"best of\" roundups and directories, "
        "(3) Make sure your site clearly states your category. Use the exact language users search with.",
        "visibility"
    )]

    if top_competitors:
        leader = top_competitors[0]
        actions.append(_action(
            "comparison-page",
            f"Create a \"{brand_name} vs {leader}\" comparison page",
            f"{leader} is being recommended while you're not. Comparison content helps AI "
            "understand where you fit.",
            "Create a dedicated comparison page with: specific use cases for each tool, "
            "feature-by-feature comparison, pricing breakdown, honest pros and cons for both, "
            "and clear guidance on who should choose which.",
            "content"
        ))
    else:
        actions.append(_action(
            "comparison-page",
            f"Create comparison pages against {competitor_list}",
            "Comparison content is the #1 factor in AI recommendations. Without it, you're invisible.",
            "Create dedicated comparison pages for your main competitors. Include feature matrices, "
            "use case recommendations, and honest trade-offs. AI trusts balanced, helpful content.",
            "content"
        ))

    category_signal = signals.get("category-association")
    if category_signal and category_signal.status == "error":
        actions.append(_action(
            "clarify-category",
            "Make your category crystal clear",
            "AI doesn't associate you with this category yet. You need to establish that connection.",
            "Update your homepage, meta descriptions, and about page to explicitly mention your "
            "category. If you're a \"project management tool\", say it clearly. Don't just say "
            "\"productivity solution\".",
            "positioning"
        ))

    return actions


def _low_visibility_actions(
    brand_name: str,
    competitor_list: str,
    top_competitors: List[str],
    user_in_top_three: bool,
    description_accuracy: Optional[str],
    ai_description: Optional[str],
    user_description: Optional[str],
    signals: Dict[str, Signal]
) -> List[Dict[str, str]]:
    actions = []

    if top_competitors and not user_in_top_three:
        leader = top_competitors[0]
        actions.append(_action(
            "outrank-competitors",
            f"Create a \"{brand_name} vs {leader}\" comparison page",
            f"{leader} is being recommended over you. Comparison content helps AI understand "
            "your differentiators.",
            f"Create a dedicated page comparing {brand_name} to {leader}. Be specific about: who "
            "each tool is best for, key feature differences, pricing comparison, and migration "
            "path. Be honest, don't just say you're better at everything.",
            "competitive"
        ))

    if description_accuracy in ("inaccurate", "partially_accurate"):
        if ai_description and user_description:
            why = (
                f"AI describes you as \"{truncate_text(ai_description, 60)}\" but you're actually "
                f"\"{truncate_text(user_description, 60)}\". This mismatch hurts your visibility."
            )
        else:
            why = "AI's description doesn't match your actual positioning. This costs you recommendations."
        actions.append(_action(
            "fix-description",
            "Fix how AI understands your product",
            why,
            "Update your homepage and meta descriptions to clearly state what you do. Use the exact "
            "language your customers use. Make sure your tagline, hero section, and about page all "
            "tell the same story.",
            "positioning"
        ))

    consistency = signals.get("source-consistency")
    if consistency and consistency.status == "error":
        actions.append(_action(
            "improve-consistency",
            "Fix your visibility gap between AI sources",
            consistency.explanation,
            "Check which AI source mentions you less and investigate why. It could be different "
            "training data cutoffs or content sources. Ensure your brand is mentioned consistently "
            "across review sites, directories, and comparison articles.",
            "visibility"
        ))

    if len(actions) < 2:
        actions.append(_action(
            "expand-faq",
            "Add FAQ content that mirrors user questions",
            "Users ask AI questions your site doesn't answer. An FAQ helps AI recommend you for the "
            "right queries.",
            f"Add an FAQ page covering: \"What is {brand_name}?\", \"How does {brand_name} compare "
            f"to {competitor_list}?\", \"{brand_name} pricing\", and use-case specific questions "
            f"like \"Is {brand_name} good for small teams?\"",
            "content"
        ))

    return actions


def _recommended_actions(
    brand_name: str,
    competitor_list: str,
    signals: Dict[str, Signal]
) -> List[Dict[str, str]]:
    actions = [_action(
        "maintain-position",
        "Keep your comparison content fresh",
        "Great news, AI tools recommend you! Keep your content updated to maintain this position.",
        "Review your comparison pages quarterly. Update feature lists, add new use cases, ensure "
        "pricing is current, and mention any new competitors entering your space.",
        "content"
    )]

    description_signal = signals.get("description-accuracy")
    if description_signal is None or description_signal.status != "success":
        actions.append(_action(
            "refine-positioning",
            "Refine how AI describes you",
            "You're recommended, but AI's description could be more accurate. Better descriptions "
            "mean better-qualified leads.",
            f"Review how AI describes {brand_name} and tweak your website copy to align. Small "
            "improvements in how AI presents you can significantly impact click-through rates.",
            "positioning"
        ))
    else:
        actions.append(_action(
            "monitor-competitors",
            "Monitor competitor movements",
            "Your competitors will try to improve their AI visibility. Stay ahead by tracking changes.",
            f"Run monthly scans to track how {competitor_list} appear in AI recommendations. If they "
            "gain ground, update your comparison content to maintain your advantage.",
            "competitive"
        ))

    actions.append(_action(
        "expand-categories",
        "Expand to related categories",
        "You've won your main category. Capture more recommendations by expanding into adjacent searches.",
        f"Identify related categories where {brand_name} could compete. Create content targeting "
        "queries like \"best [adjacent category] tools\" or \"[use case] software\" to capture more traffic.",
        "visibility"
    ))
    return actions


def default_actions(status: VisibilityStatus, brand_name: str, competitor_list: str) -> List[Dict[str, str]]:
    """Three generic actions per status, used to pad the plan."""
    if status == "not_mentioned":
        return [
            _action("default-create-comparison", "Create comparison content",
                    "Comparison content is the #1 factor in AI recommendations.",
                    f"Create a page comparing {brand_name} to {competitor_list} with honest, detailed analysis.",
                    "content"),
            _action("default-build-presence", "Build category presence",
                    "AI needs to see you mentioned in your category across multiple sources.",
                    "Get listed in industry directories, roundup posts, and review sites. Each mention "
                    "helps AI learn about you.",
                    "visibility"),
            _action("default-clarify-messaging", "Clarify your messaging",
                    "Clear messaging helps AI understand and recommend you.",
                    f"Make your homepage clearly state what {brand_name} is, who it's for, and how it "
                    "compares to alternatives.",
                    "positioning"),
        ]
    if status == "low_visibility":
        return [
            _action("default-improve-positioning", "Improve positioning clarity",
                    "AI knows you but doesn't strongly recommend you.",
                    "Clarify your unique value proposition and create more comparison content to stand out.",
                    "positioning"),
            _action("default-add-comparisons", "Add more comparison content",
                    "Detailed comparisons help AI recommend you over alternatives.",
                    "Create comparison pages for each major competitor with feature matrices and use case guidance.",
                    "content"),
            _action("default-expand-faq", "Expand your FAQ section",
                    "FAQs answer the questions users ask AI.",
                    "Add FAQ content covering comparisons, pricing, and use-case specific questions.",
                    "content"),
        ]
    return [
        _action("default-maintain-content", "Keep content updated",
                "You're doing great! Maintain your position with fresh content.",
                "Review and update your comparison and FAQ content quarterly.",
                "content"),
        _action("default-track-competitors", "Track competitor changes",
                "Stay ahead of competitors improving their AI visibility.",
                "Monitor monthly how competitors appear in AI recommendations.",
                "competitive"),
        _action("default-expand-reach", "Expand to new categories",
                "Capture more recommendations in adjacent searches.",
                f"Identify and target related categories where {brand_name} could compete.",
                "visibility"),
    ]


def number_actions(actions: List[Dict[str, str]]) -> List[Action]:
    """Turn action templates into the plan: ids "<template>-<n>", priorities 1..3."""
    return [
        Action(**{**action, "id": f"{action['id']}-{index}", "priority": index})
        for index, action in enumerate(actions[:ACTION_COUNT], start=1)
    ]


def default_action_plan(status: VisibilityStatus, brand_name: str, competitors: List[str]) -> List[Action]:
    """Generic three-step plan for scans that produced no signals to act on."""
    competitor_list = " and ".join(competitors[:2]) or (
        "established players" if status == "not_mentioned" else "competitors"
    )
    return number_actions(default_actions(status, brand_name, competitor_list))


def generate_actions(
    signals: List[Signal],
    status: VisibilityStatus,
    competitor_results: Optional[List[CompetitorResult]],
    ai_description: Optional[str],
    brand_name: str,
    competitors: List[str],
    user_description: str = "",
    sources: Optional[Dict[str, SourceResult]] = None
) -> List[Action]:
    """
    Build the three-step action plan for a scan.

    Args:
        signals: Output of detect_signals
        status: Overall visibility status
        competitor_results: Competitor visibility (recommended ones count as top competitors)
        ai_description: Best AI description of the brand, if any
        brand_name: Scanned brand
        competitors: User-supplied competitor names
        user_description: The brand's own description
        sources: Per-provider results (top-3 position and description accuracy)

    Returns:
        Exactly three actions with priorities 1, 2, 3 and ids "<template>-<n>"
    """
    signal_map = {signal.id: signal for signal in signals}
    sources = sources or {}
    top_competitors = [c.name for c in (competitor_results or []) if c.visibility_level == "recommended"]
    user_in_top_three = any(source.position == "top_3" for source in sources.values())

    description_accuracy = None
    for source in sources.values():
        if source.description_accuracy != "not_mentioned":
            description_accuracy = source.description_accuracy
            break

    competitor_list = " and ".join(competitors[:2]) or (
        "established players" if status == "not_mentioned" else "competitors"
    )
    if status == "not_mentioned":
        actions = _not_mentioned_actions(brand_name, competitor_list, top_competitors, signal_map)
    elif status == "low_visibility":
        actions = _low_visibility_actions(
            brand_name, competitor_list, top_competitors, user_in_top_three,
            description_accuracy, ai_description, user_description, signal_map
        )
    else:
        actions = _recommended_actions(brand_name, competitor_list, signal_map)

    defaults = default_actions(status, brand_name, competitor_list)
    while len(actions) < ACTION_COUNT:
        actions.append(defaults[min(len(actions), ACTION_COUNT - 1)])

    plan = number_actions(actions)
    logger.info(f"✓ Generated {len(plan)} actions for status '{status}'")
    return plan

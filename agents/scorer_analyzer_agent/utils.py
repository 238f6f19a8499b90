"""
Utility functions for scorer analyzer.

Phrase lexicons for response quality, markdown stripping, verifier prompts
and the JSON fallback for verifier output.
"""

import json
import logging
import re
from typing import Any, Dict, List

from config.settings import settings
from utils.exceptions import ParseFailure

logger = logging.getLogger(__name__)


DEFLECTION_PHRASES = [
    "i don't have access to current",
    "i cannot provide specific",
    "i'm not able to recommend",
    "i can't recommend specific",
    "my knowledge cutoff",
    "as of my knowledge cutoff",
    "as of my last update",
    "i don't have real-time",
    "i cannot access real-time",
    "i'm unable to provide",
    "i cannot give specific recommendations",
    "i don't have information about",
    "consult with a professional",
    "consult a professional",
    "speak to an expert",
    "contact a specialist",
    "i cannot make specific recommendations",
    "it's best to do your own research",
    "i recommend doing your own research",
    "i suggest doing your own research",
    "without knowing your specific",
    "depends on your specific needs",
    "there are many factors to consider",
    "i can provide general guidance",
    "here's some general advice",
    "in general terms",
]

KNOWLEDGE_CUTOFF_PHRASES = [
    "my knowledge cutoff",
    "as of my last training",
    "my training data only goes",
    "i was trained on data up to",
    "i don't have information after",
    "as of 2023",
    "as of 2024",
    "as of 2025",
    "i cannot access information after",
    "my information may be outdated",
]

REFUSAL_PHRASES = [
    "i cannot endorse",
    "i'm not able to endorse",
    "i cannot recommend one over another",
    "i don't make recommendations",
    "it would be inappropriate for me",
    "i must remain neutral",
    "i cannot take sides",
    "i'm not in a position to",
]

GENERIC_PHRASES = [
    "there are many options",
    "it depends on your needs",
    "consider your requirements",
    "do your research",
    "read reviews",
    "compare options",
    "look at user reviews",
    "check online reviews",
    "each has its own strengths",
    "all have their pros and cons",
    "the best choice depends",
    "it really depends on",
    "there's no one-size-fits-all",
    "personal preference plays a role",
]

# Capitalised words that start sentences rather than name brands
NON_BRAND_WORDS = {
    "The", "This", "That", "These", "Those", "Here", "There", "When", "Where", "What", "Which",
    "However", "Although", "Because", "Therefore", "Additionally", "Furthermore", "Moreover",
    "First", "Second", "Third", "Finally", "Overall", "Generally", "Typically", "Usually",
    "Consider", "Remember", "Important", "Note", "Please", "Thank", "Thanks",
}

CAPITALIZED_PHRASE_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?\b")
NUMBERED_ITEM_PATTERN = re.compile(r"\d+\.\s+[A-Z]")

# First words of multi-word brand names too common to count as a mention on their own
COMMON_NAME_WORDS = {
    "best", "good", "great", "free", "easy", "fast", "safe", "smart", "quick", "simple",
    "online", "digital", "global", "local", "first", "direct", "instant", "express",
    "payment", "gateway", "service", "system", "platform", "solution", "made", "open", "cloud",
}

# Verifier response_type values -> ResponseType
RESPONSE_TYPE_MAP = {
    "list_recommendations": "direct_recommendation",
    "single_recommendation": "direct_recommendation",
    "direct_recommendation": "direct_recommendation",
    "comparison": "comparison",
    "general_advice": "informational",
    "informational": "informational",
    "deflection": "deflection",
    "unclear": "unclear",
}

_MARKDOWN_RULES = [
    (re.compile(r"\*\*\*([^*]+)\*\*\*"), r"\1"),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"___([^_]+)___"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"^#{1,6}\s*", re.MULTILINE), ""),
    (re.compile(r"^[ \t]*[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^[ \t]*\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"`([^`]+)`"), r"\1"),
    (re.compile(r"\*+"), " "),
]


def strip_markdown(text: str) -> str:
    """Remove emphasis, links, headers and list markers so brand names read as plain words."""
    if not text:
        return ""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


def possible_brand_mention(text: str, brand_name: str) -> bool:
    """
    Loose pre-check used to skip the verifier for answers that clearly
    never name the brand.

    Multi-word names also match on their first word when that word is
    distinctive enough ("Discovery" for "Discovery Health").
    """
    lower = text.lower()
    parts = brand_name.lower().split()
    if not parts:
        return False

    if len(parts) > 1:
        first = parts[0]
        if len(first) >= 4 and first not in COMMON_NAME_WORDS:
            if re.search(rf"\b{re.escape(first)}\b", lower):
                return True
        return False

    if len(parts[0]) >= 3:
        return re.search(rf"\b{re.escape(parts[0])}\b", lower) is not None
    return False


def markdown_brand_mention(text: str, brand_name: str) -> bool:
    """True when the raw answer highlights the brand as **Brand** or as a ## heading."""
    brand = re.escape(brand_name.lower().strip())
    return re.search(rf"(?:\*\*|##\s*\*{{0,2}}){brand}(?:\*\*)?", text.lower()) is not None


def description_terms(description: str, limit: int = 10) -> List[str]:
    """Distinctive words (longer than 4 letters) of a product description."""
    terms = []
    for word in description.lower().split():
        word = re.sub(r"[^a-z]", "", word)
        if len(word) > 4:
            terms.append(word)
    return terms[:limit]


def term_overlap(description: str, reference_terms: List[str]) -> float:
    """Share of reference terms that appear in the description."""
    if not reference_terms:
        return 0.0
    lower = description.lower()
    return sum(1 for term in reference_terms if term in lower) / len(reference_terms)


def parse_json_response(text: str) -> Dict[str, Any]:
    """
    Parse a JSON object out of a verifier answer.

    Accepts bare JSON, JSON inside a ```json fence, or JSON surrounded by
    prose.

    Raises:
        ParseFailure: when no JSON object can be recovered
    """
    result_text = (text or "").strip()
    if "```json" in result_text:
        result_text = result_text.split("```json")[1].split("```")[0].strip()
    elif "```" in result_text:
        result_text = result_text.split("```")[1].split("```")[0].strip()

    try:
        parsed = json.loads(result_text)
    except json.JSONDecodeError:
        match = re.search(r"\{[\s\S]*\}", result_text)
        if not match:
            raise ParseFailure(f"No JSON object in verifier output: {result_text[:80]!r}")
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ParseFailure(f"Malformed verifier JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ParseFailure("Verifier output is not a JSON object")
    return parsed


def build_mention_prompt(response: str, brand_name: str, competitors: List[str]) -> str:
    """Prompt asking the verifier to describe how an answer treats the brand."""
    competitor_list = ", ".join(competitors) if competitors else "none specified"
    return f"""You are analyzing an AI assistant's response to a recommendation question.

The brand/company we're checking for: "{brand_name}"
The competitors to check for: {competitor_list}

Here is the AI response to analyze:
\"\"\"
{response}
\"\"\"

Analyze carefully and respond ONLY with this JSON (no markdown, no other text):

{{
  "brand_mentioned": boolean,
  "brand_position": "top_3" | "mentioned_not_top" | "not_mentioned",
  "brand_exact_position": number or null,
  "brand_sentiment": "recommended" | "neutral" | "negative" | null,
  "brand_description": "one sentence describing how the AI portrayed the brand/company, or null if not mentioned",
  "competitors_mentioned": ["competitor names found"],
  "competitors_in_top_3": ["competitors that were top recommendations"],
  "other_brands_mentioned": ["other brands, companies or products mentioned"],
  "response_type": "list_recommendations" | "single_recommendation" | "comparison" | "general_advice" | "unclear"
}}

Rules:
- Brand matching is CASE-INSENSITIVE. "OUTsurance" matches "Outsurance" matches "outsurance".
- "brand_mentioned" is true if the brand name appears ANYWHERE in the response, regardless of capitalization.
- "brand_exact_position": the number in a numbered list (1-10), otherwise the order of appearance (1 = first mentioned). null if not mentioned.
- "top_3" means the brand was one of the first 3 specific recommendations or was explicitly called a top choice or best option.
- "mentioned_not_top" means it was named but not as a primary recommendation ("also consider", passing mention).
- Check for variations of the brand name ("Notion" vs "notion.so").
- "recommended" sentiment means the AI actively suggested using it, "neutral" means mentioned without endorsement, "negative" means the AI advised against it.
- For competitors_in_top_3, only include competitors explicitly recommended as top choices.
- For other_brands_mentioned, list ALL other brands that are NOT the brand or the competitors."""


def build_accuracy_prompt(ai_description: str, user_description: str) -> str:
    """Prompt asking the verifier how well an AI description matches the brand's own."""
    return f"""The user describes their product as: "{user_description}"

The AI described it as: "{ai_description}"

How accurate is the AI's description? Consider whether the AI captured the core value proposition and use case. Respond with JSON only:

{{
  "accuracy": "accurate" | "partially_accurate" | "inaccurate",
  "issue": "brief explanation of any mismatch, or null if accurate"
}}

Rules:
- "accurate": AI's description captures the main purpose and target audience
- "partially_accurate": AI got some aspects right but missed key points or added incorrect info
- "inaccurate": AI's description doesn't match what the product actually does"""


def build_verifier_model():
    """
    Get the chat model used to verify mentions and description accuracy.

    Returns:
        ChatOpenAI at temperature 0, or None when no OpenAI key is configured
    """
    if not settings.OPENAI_API_KEY:
        logger.info("⚠️ No OpenAI key configured, response analysis will use heuristics")
        return None

    from langchain_openai import ChatOpenAI
    return ChatOpenAI(
        model=settings.ANALYSIS_MODEL,
        openai_api_key=settings.OPENAI_API_KEY,
        temperature=0,
        max_tokens=settings.ANALYSIS_MAX_TOKENS,
        max_retries=0
    )

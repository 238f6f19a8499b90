"""
Utility functions for query generator.

Keyword classifiers, free-text extractors and the query cleanup rules. All
functions are pure and deterministic.
"""

import logging
import re
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from agents.query_generator_agent.models import QueryProfile
from agents.query_generator_agent.templates import (
    ACTION_VERBS,
    AMBIGUOUS_BRAND_WORDS,
    AUDIENCE_GROUPS,
    CATEGORY_COUNTRY_NAMES,
    CATEGORY_FALLBACKS,
    CATEGORY_PATTERNS,
    COUNTRY_PATTERNS,
    DEFAULT_CATEGORY,
    DESCRIPTION_INDUSTRIES,
    GENERIC_CATEGORIES,
    GENERIC_TERMINOLOGY,
    INDUSTRY_KEYWORDS,
    INDUSTRY_TERMINOLOGY,
    LOCATION_BOUND_CATEGORIES,
    NON_SOFTWARE_INDICATORS,
    PHYSICAL_PRODUCT_KEYWORDS,
    SERVICE_CATEGORY_SANITIZATIONS,
    SERVICE_KEYWORDS,
    SOFTWARE_CATEGORY_LABELS,
    SOFTWARE_KEYWORDS,
    VALID_INDUSTRIES,
    WEAK_CATEGORIES,
)
from models.schemas import EnrichmentContext, IndustryTerminology, ScanInput, TaggedQuery
from utils.helpers import dedupe_names

logger = logging.getLogger(__name__)

MIN_FEATURE_LENGTH = 3
MAX_FEATURE_LENGTH = 60
MAX_FEATURES = 8
DESCRIPTION_OVERLAP_LIMIT = 0.5
MAX_ENRICHED_FEATURES = 3
MAX_ENRICHED_USE_CASES = 2
FALLBACK_CATEGORIES = {"physical": "products", "service": "service providers", "software": "business software"}

INTERROGATIVE_PATTERN = re.compile(
    r"^(what|which|who|where|when|why|how|is|are|can|do|does|should|would|could)\b",
    re.IGNORECASE
)


# Keyword matching

@lru_cache(maxsize=256)
def _keyword_pattern(keywords: Tuple[str, ...]) -> Pattern:
    """
    Compile a whole-word alternation for a keyword list.

    A keyword may take a plural suffix ("nail" matches "nails") but never
    matches inside a longer word ("cat" stays out of "education").
    """
    ordered = sorted(keywords, key=len, reverse=True)
    body = "|".join(re.escape(keyword) for keyword in ordered)
    return re.compile(rf"(?<![a-z0-9])(?:{body})(?:s|es)?(?![a-z0-9])", re.IGNORECASE)


def matches_any(text: str, keywords: Iterable[str]) -> bool:
    """True when any keyword occurs in `text` as a whole word."""
    if not text:
        return False
    return _keyword_pattern(tuple(keywords)).search(text) is not None


def first_matching_key(text: str, table: List[Tuple[str, List[str]]]) -> Optional[str]:
    """Return the key of the first (key, keywords) row matching `text`."""
    for key, keywords in table:
        if matches_any(text, keywords):
            return key
    return None


# Classification

def detect_product_type(category: str, description: str = "") -> str:
    """Classify a brand as physical, software or service. Physical wins over software."""
    combined = f"{category} {description}".lower()
    if matches_any(combined, PHYSICAL_PRODUCT_KEYWORDS):
        return "physical"
    if matches_any(combined, SOFTWARE_KEYWORDS):
        return "software"
    if matches_any(combined, SERVICE_KEYWORDS):
        return "service"
    return "service"


def detect_industry(category: str, description: str = "", industry_type: Optional[str] = None) -> str:
    """
    Map a brand onto one of the industry buckets.

    Args:
        category: Resolved category
        description: Brand description
        industry_type: Industry supplied by enrichment; used when it names a known bucket

    Returns:
        Industry key, "generic_service" when nothing matches
    """
    if industry_type and industry_type in VALID_INDUSTRIES:
        return industry_type

    combined = f"{category} {description}".lower()
    return first_matching_key(combined, INDUSTRY_KEYWORDS) or "generic_service"


def get_product_terminology(
    product_type: str,
    industry: str,
    terminology: Optional[IndustryTerminology] = None
) -> Dict[str, str]:
    """Resolve singular/plural/options/use_verb. External terminology overrides the tables."""
    base = INDUSTRY_TERMINOLOGY.get(industry) or GENERIC_TERMINOLOGY.get(product_type) or GENERIC_TERMINOLOGY["service"]
    terms = dict(base)
    if terminology:
        if terminology.singular:
            terms["singular"] = terminology.singular
        if terminology.plural:
            terms["plural"] = terminology.plural
        if terminology.verb_phrase:
            terms["use_verb"] = terminology.verb_phrase
    return terms


def brand_needs_context(brand_name: str) -> bool:
    """Common-word brands and very short names are ambiguous without a category."""
    name = brand_name.strip()
    return name.lower() in AMBIGUOUS_BRAND_WORDS or len(name) <= 3


def get_brand_with_context(brand_name: str, category: str) -> str:
    """
    Return "<brand> <category>" for ambiguous brand names, else the brand.

    Example:
        >>> get_brand_with_context("Discovery", "insurance companies")
        'Discovery insurance'
    """
    if not brand_needs_context(brand_name):
        return brand_name
    context = re.sub(r"\s*\b(services?|companies|company|brands?)\s*$", "", category.strip(), flags=re.IGNORECASE)
    return f"{brand_name} {context}".strip() if context else brand_name


# Free-text extraction

def extract_industry(description: str) -> Optional[str]:
    """First industry word found in the description."""
    lowered = (description or "").lower()
    for industry in DESCRIPTION_INDUSTRIES:
        if matches_any(lowered, [industry]):
            return industry
    return None


def extract_features(description: str) -> List[str]:
    """Pull feature phrases that follow "with", "including", "offers" and similar verbs."""
    if not description:
        return []

    patterns = [
        r"\bwith\s+([^,.!?]+(?:,\s*[^,.!?]+)*)",
        r"\bincluding\s+([^,.!?]+(?:,\s*[^,.!?]+)*)",
        r"\bfeatures?\s+(?:like\s+)?([^,.!?]+)",
        r"\bprovides?\s+([^,.!?]+)",
        r"\boffers?\s+([^,.!?]+)",
        r"\benables?\s+([^,.!?]+)",
        r"\bsupports?\s+([^,.!?]+)",
    ]
    features = []
    for pattern in patterns:
        for match in re.finditer(pattern, description, re.IGNORECASE):
            for item in re.split(r",\s*|\s+and\s+", match.group(1)):
                item = re.sub(r"^and\s+", "", item.strip(), flags=re.IGNORECASE)
                if MIN_FEATURE_LENGTH < len(item) < MAX_FEATURE_LENGTH:
                    features.append(item)
    return dedupe_names(features)[:MAX_FEATURES]


def extract_use_case(description: str) -> Optional[str]:
    """What the product is for: "for <x>", "helps <x> to", or "<verb> your <x>"."""
    if not description:
        return None

    match = re.search(r"\bfor\s+([^,.!?]+)", description, re.IGNORECASE)
    if match:
        use_case = re.sub(r"^(the|a|an)\s+", "", match.group(1).strip(), flags=re.IGNORECASE)
        use_case = re.sub(r"\s+(that|which|who)\s+.*$", "", use_case, flags=re.IGNORECASE).strip()
        if use_case:
            return use_case

    match = re.search(r"\bhelps?\s+(.+?)\s+(?:to|with|by)\s", description, re.IGNORECASE)
    if match:
        return match.group(1).strip()

    match = re.search(rf"\b({ACTION_VERBS})\s+(your\s+)?([^,.!?]+)", description, re.IGNORECASE)
    if match:
        return match.group(3).strip()
    return None


def extract_target_audience(description: str) -> Optional[str]:
    """Known audience groups, or whatever follows "designed for" / "trusted by"."""
    if not description:
        return None

    for pattern in (rf"\bfor\s+({AUDIENCE_GROUPS})\b", rf"\bhelps?\s+({AUDIENCE_GROUPS})\b"):
        match = re.search(pattern, description, re.IGNORECASE)
        if match:
            return match.group(1).strip()

    match = re.search(
        r"\b(?:designed for|built for|perfect for|ideal for|trusted by)\s+([^,.!?]+)",
        description,
        re.IGNORECASE
    )
    return match.group(1).strip() if match else None


def extract_problem(description: str) -> Optional[str]:
    """The problem the product solves as "<verb> <object>"."""
    if not description:
        return None

    match = re.search(
        r"\bhelps?\s+.+?\s+(manage|organize|track|improve|streamline|simplify|collaborate|"
        r"communicate|automate|monitor|analyze|ensure|maintain)\s+([^,.!?]+)",
        description,
        re.IGNORECASE
    )
    if match:
        return f"{match.group(1)} {match.group(2).strip()}".lower()

    match = re.search(rf"\b({ACTION_VERBS})\s+(?:your\s+)?([^,.!?]+)", description, re.IGNORECASE)
    if match:
        return f"{match.group(1)} {match.group(2).strip()}".lower()

    match = re.search(r"\b(solve[sd]?|eliminates?|reduces?)\s+([^,.!?]+)", description, re.IGNORECASE)
    if match:
        return f"{match.group(1)} {match.group(2).strip()}".lower()
    return None


# Category resolution

def resolve_specific_category(category: str, product_type: str, industry_term: Optional[str]) -> str:
    """
    Turn the raw category into the phrase used inside queries.

    Generic labels are replaced from the description's industry, country
    names are stripped and service categories are rewritten into the way a
    customer would ask ("evac" becomes "emergency medical services").
    """
    specific = (category or "").strip()

    if specific.lower() in GENERIC_CATEGORIES:
        if product_type == "physical":
            specific = f"{industry_term} products" if industry_term else "products"
        elif product_type == "service":
            specific = f"{industry_term} services" if industry_term else "services"
        else:
            specific = f"{industry_term} tools" if industry_term else "business software"

    countries = "|".join(re.escape(name) for name in CATEGORY_COUNTRY_NAMES)
    specific = re.sub(rf"\b(?:{countries})\b", "", specific, flags=re.IGNORECASE)
    specific = re.sub(r"\s+", " ", specific).strip(" -,")

    if product_type == "service":
        lowered = specific.lower()
        for pattern, replacement in SERVICE_CATEGORY_SANITIZATIONS:
            if re.search(rf"\b{re.escape(pattern)}\b", lowered):
                specific = replacement
                break

    if len(specific) < 3 or specific.lower() in WEAK_CATEGORIES:
        if industry_term:
            specific = f"{industry_term} services" if product_type == "service" else f"{industry_term} products"
        elif not specific or specific.lower() in WEAK_CATEGORIES:
            specific = FALLBACK_CATEGORIES.get(product_type, "service providers")

    return specific


def _clean_category_phrase(phrase: str) -> Optional[str]:
    phrase = re.sub(r"^(?:a|an|the|our|your|we|is|are|offers?|provides?)\s+", "", phrase.strip(), flags=re.IGNORECASE)
    phrase = re.sub(r"^(?:a|an|the)\s+", "", phrase, flags=re.IGNORECASE)
    return phrase if len(phrase) >= 3 else None


def infer_category(description: str) -> str:
    """
    Infer a category from a free-text description.

    Explicit patterns first, then "<x> tool/platform/service" and
    "<x> brand/company" phrases, then broad keyword fallbacks.
    """
    text = (description or "").lower()
    if not text.strip():
        return DEFAULT_CATEGORY

    category = first_matching_key(text, CATEGORY_PATTERNS)
    if category:
        return category

    for pattern in (
        r"(\w+(?:\s+\w+)?)\s+(?:tool|software|platform|app|solution|service)s?\b",
        r"(\w+(?:\s+\w+)?)\s+(?:brand|products|company|clothing|apparel|wear)\b",
    ):
        match = re.search(pattern, text)
        if match:
            phrase = _clean_category_phrase(match.group(1))
            if phrase:
                return phrase

    category = first_matching_key(text, CATEGORY_FALLBACKS)
    if category:
        return category

    match = re.search(r"\b(?:a|an|the)\s+(\w+(?:\s+\w+)?)\s+(?:company|provider|brand|business|firm|service)\b", text)
    if match:
        return match.group(1).strip()
    return DEFAULT_CATEGORY


def resolve_primary_category(scan_input: ScanInput, enrichment: Optional[EnrichmentContext]) -> str:
    """Pick the scan category: user categories, then enrichment, then input, then inference."""
    extracted = enrichment.extracted_category if enrichment else None
    category = (
        (scan_input.categories[0] if scan_input.categories else None)
        or extracted
        or scan_input.category
        or infer_category(scan_input.description)
    ).strip()

    # A "software" label on a brand that is clearly not software came from a bad crawl
    if category.lower() in SOFTWARE_CATEGORY_LABELS:
        if matches_any(f"{scan_input.description} {scan_input.brand_name}".lower(), NON_SOFTWARE_INDICATORS):
            inferred = infer_category(scan_input.description)
            logger.info(f"⚠️ Replacing category '{category}' with inferred '{inferred}'")
            category = inferred
    return category


# Location

def detect_country(text: str) -> Optional[Tuple[str, str]]:
    """Return (country, code) for the first country mentioned in `text`."""
    if not text:
        return None
    for country, code, pattern in COUNTRY_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            return country, code
    return None


def is_location_bound_category(text: str) -> bool:
    """Regulated or physically local categories where answers depend on the country."""
    return matches_any((text or "").lower(), LOCATION_BOUND_CATEGORIES)


# Profile preparation

def calculate_overlap(first: str, second: str) -> float:
    """Share of significant words (longer than 3 chars) common to both texts."""
    first_words = {word for word in re.findall(r"\w+", (first or "").lower()) if len(word) > 3}
    second_words = {word for word in re.findall(r"\w+", (second or "").lower()) if len(word) > 3}
    if not first_words or not second_words:
        return 0.0
    return len(first_words & second_words) / min(len(first_words), len(second_words))


def build_enhanced_description(description: str, enrichment: Optional[EnrichmentContext]) -> str:
    """
    Merge the user description with enrichment details it does not already contain.

    Returns:
        Sentences joined with ". "
    """
    parts = [description.strip().rstrip(".")] if description and description.strip() else []
    if not enrichment:
        return ". ".join(parts)

    extracted = (enrichment.extracted_description or "").strip()
    if extracted and extracted.rstrip(".") not in parts:
        if not parts or calculate_overlap(description, extracted) < DESCRIPTION_OVERLAP_LIMIT:
            parts.append(extracted.rstrip("."))

    def known(text: str) -> bool:
        return text.lower() in ". ".join(parts).lower()

    if enrichment.target_audience and not known(enrichment.target_audience):
        parts.append(f"Target audience: {enrichment.target_audience}")

    features = [f for f in enrichment.extracted_features if f and not known(f)][:MAX_ENRICHED_FEATURES]
    if features:
        parts.append(f"Key features: {', '.join(features)}")

    use_cases = [u for u in enrichment.use_cases if u and not known(u)][:MAX_ENRICHED_USE_CASES]
    if use_cases:
        parts.append(f"Use cases: {', '.join(use_cases)}")

    return ". ".join(parts)


def build_query_profile(scan_input: ScanInput, enrichment: Optional[EnrichmentContext] = None) -> QueryProfile:
    """
    Assemble the query generator profile from a scan input and its enrichment.

    Args:
        scan_input: Validated scan input
        enrichment: Optional website-analysis context

    Returns:
        QueryProfile ready for generate_tagged_queries()
    """
    enrichment = enrichment or EnrichmentContext()
    category = resolve_primary_category(scan_input, enrichment)
    description = build_enhanced_description(scan_input.description, enrichment)

    country = enrichment.detected_country
    country_code = enrichment.detected_country_code
    if not country:
        detected = detect_country(f"{description} {scan_input.brand_name} {category}")
        if detected:
            country, country_code = detected

    is_location_bound = enrichment.is_location_bound
    if country and not is_location_bound:
        is_location_bound = is_location_bound_category(f"{category} {description}")

    competitors = dedupe_names(
        list(scan_input.competitors) + list(enrichment.discovered_competitors),
        exclude=scan_input.brand_name
    )

    return QueryProfile(
        brand_name=scan_input.brand_name,
        category=category,
        description=description,
        competitors=competitors,
        user_categories=list(scan_input.categories),
        features=list(enrichment.extracted_features) + list(enrichment.extracted_keywords),
        use_cases=list(enrichment.use_cases),
        target_audience=enrichment.target_audience,
        detected_country=country,
        detected_country_code=country_code,
        is_location_bound=bool(country) and is_location_bound,
        industry_type=enrichment.industry_type,
        product_type=enrichment.product_type,
        terminology=enrichment.industry_terminology,
    )


# Query text

def clean_query(query: str) -> str:
    """
    Normalise a generated query.

    Collapses whitespace, drops repeated words and dangling prepositions,
    ensures interrogatives end with "?" and capitalises the first letter.
    """
    text = re.sub(r"\s+", " ", query or "").strip()
    text = re.sub(r"\b(the|a|an|and|or|in|for|to|of|with)\s+\1\b", r"\1", text, flags=re.IGNORECASE)
    text = re.sub(r"\b(\w+)\s+\1\b", r"\1", text, flags=re.IGNORECASE)
    text = re.sub(r"\s+(in|for|to|of|with|from)\s*([?.!])$", r"\2", text)
    text = re.sub(r"\s+in\s*[?.!]?$", "?", text)

    if INTERROGATIVE_PATTERN.match(text) and not re.search(r"[?.!]$", text):
        text += "?"

    text = re.sub(r"\bbest\s+best\b", "best", text, flags=re.IGNORECASE)
    text = re.sub(
        r"\b(services|products|tools|platforms|brands|companies|providers|agencies)\s+\1\b",
        r"\1",
        text,
        flags=re.IGNORECASE
    )
    text = re.sub(r"\s+in\s*\?$", "?", text)
    text = re.sub(r"\s+in\s*$", "", text)

    return text[:1].upper() + text[1:] if text else text


def fill_template(template: str, fields: Dict[str, str]) -> str:
    """Render a template with the profile fields and clean the result."""
    return clean_query(template.format_map(fields))


def deduplicate_queries(queries: List[TaggedQuery]) -> List[TaggedQuery]:
    """Remove duplicate queries (case-insensitive) while preserving order."""
    seen = set()
    unique = []
    for q in queries:
        q_lower = q.query.lower().strip()
        if q_lower and q_lower not in seen:
            seen.add(q_lower)
            unique.append(q)
    return unique

"""
Tests for exact brand matching.
"""

from utils.brand_matcher import (
    count_matches,
    find_competitors,
    find_position,
    get_brand_variations,
    is_match,
    is_same_brand
)


def test_short_domain_brand_never_matches_inside_longer_words():
    assert not is_match("Calendar apps like Calendly are popular", "Cal.com")
    assert is_match("Try Cal.com for open-source scheduling", "Cal.com")
    assert is_match("Cal is a solid open-source option", "Cal.com")


def test_substring_of_longer_word_is_not_a_match():
    cases = [
        ("Zylo", "Zylophone makers and Zylon fibers"),
        ("Notion", "Notional value and notionally speaking"),
        ("Asana", "Asanas are yoga poses"),
        ("Linear", "Nonlinear editing in Linearity Curve"),
    ]
    for brand, text in cases:
        assert not is_match(text, brand), brand


def test_standalone_word_matches_regardless_of_case():
    for text in ("I recommend notion.", "NOTION is great", "Try Notion, then Asana"):
        assert is_match(text, "Notion")


def test_camel_case_brand_matches_split_spellings():
    assert is_match("Pay Fast is a payment gateway", "PayFast")
    assert is_match("pay-fast handles checkout", "PayFast")
    assert is_match("Use payfast for payments", "PayFast")


def test_separator_free_match_for_multi_word_names():
    assert is_match("HelloFresh delivers meal kits", "Hello Fresh")
    assert not is_match("HelloFreshness is not a brand", "Hello Fresh")


def test_find_position_returns_earliest_offset():
    text = "Options: Asana, then Notion, then Asana again"
    assert find_position(text, "Asana") == text.index("Asana")
    assert find_position(text, "Trello") is None
    assert find_position("", "Asana") is None
    assert find_position(text, "   ") is None


def test_count_matches_counts_each_mention_once():
    assert count_matches("Asana vs asana vs ASANA", "Asana") == 3
    assert count_matches("Pay Fast and PayFast", "PayFast") == 2
    assert count_matches("nothing here", "Asana") == 0


def test_count_matches_agrees_with_is_match_on_separators():
    text = "Try hub spot or HubSpot"
    assert is_match("Try hub spot", "HubSpot")
    assert count_matches(text, "HubSpot") == 2
    assert count_matches("hello-fresh beats HelloFresh", "Hello Fresh") == 2
    assert count_matches("Book on cal.com today", "cal.com") == 1


def test_find_competitors_keeps_input_order():
    text = "Calendly and Acuity Scheduling are well known; Doodle too."
    assert find_competitors(text, ["Doodle", "SavvyCal", "Calendly"]) == ["Doodle", "Calendly"]


def test_brand_variations():
    variations = get_brand_variations("PayFast")
    assert variations[:3] == ["PayFast", "payfast", "PAYFAST"]
    assert "Pay Fast" in variations
    assert "Pay-Fast" in variations
    assert "cal" in get_brand_variations("Cal.com")
    assert get_brand_variations("  ") == []


def test_is_same_brand():
    assert is_same_brand("Cal.com", "cal")
    assert is_same_brand("PayFast", "Pay Fast")
    assert is_same_brand("Hello-Fresh", "hellofresh")
    assert not is_same_brand("Calendly", "Cal.com")
    assert not is_same_brand("", "Asana")

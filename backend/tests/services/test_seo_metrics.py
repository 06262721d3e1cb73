"""Unit tests for on-page SEO metric evaluators.

Tests cover:
- Keyword density calculation and its scoring curve
- Keyword in H1, slug and first 10% of the text
- Heading counts and structure scoring
- Meta description checks and length boundaries
- Paragraph length distribution and short-paragraph check
- Minimum length and number-in-title checks
- Image alt coverage
- Link classification and internal-link scoring
- FAQ schema / FAQ wording detection
- Syllable counting and Flesch readability
- Worst-value results for None and empty content
"""

import logging

import pytest

from app.services.scoring import calculate_seo_score
from app.services.seo_metrics import (
    HeadingCount,
    calculate_keyword_density,
    calculate_readability,
    check_image_alts,
    check_keyword_early,
    check_keyword_in_slug,
    check_min_length,
    check_short_paragraphs,
    count_headings,
    count_links,
    count_syllables,
    evaluate_heading_structure,
    evaluate_paragraphs,
    has_faq_schema,
    has_keyword_in_h1,
    keyword_density_score,
    title_has_number,
    validate_meta_description,
)
logger = logging.getLogger(__name__)


def words(count: int, word: str = "word") -> str:
    """Space-separated filler text with exactly ``count`` words."""
    return " ".join([word] * count)


def paragraph(count: int) -> str:
    return f"<p>{words(count)}</p>"


# ---------------------------------------------------------------------------
# Test: Empty input
# ---------------------------------------------------------------------------


class TestEmptyContent:
    """Every evaluator returns its worst value for missing content."""

    @pytest.mark.parametrize("content", [None, ""])
    def test_worst_values(self, content: str | None) -> None:
        assert calculate_keyword_density(content, "coffee") == 0.0
        assert has_keyword_in_h1(content, "coffee") is False
        assert check_keyword_early(content, "coffee") is False
        assert count_headings(content) == HeadingCount()
        assert evaluate_paragraphs(content).score == 0
        assert check_short_paragraphs(content) is False
        assert check_min_length(content) is False
        assert title_has_number(content) is False
        assert check_image_alts(content, "coffee").score == 0
        assert count_links(content).score == 0
        assert has_faq_schema(content) is False
        assert calculate_readability(content) == 0

    def test_empty_keyword(self) -> None:
        """Keyword-dependent evaluators return False/0 without a keyword."""
        content = "<h1>Coffee</h1><p>coffee everywhere</p>"
        assert calculate_keyword_density(content, "") == 0.0
        assert has_keyword_in_h1(content, "") is False
        assert has_keyword_in_h1(content, "   ") is False
        assert check_keyword_in_slug("coffee", "") is False
        assert check_keyword_early(content, None) is False


# ---------------------------------------------------------------------------
# Test: Keyword density
# ---------------------------------------------------------------------------


class TestKeywordDensity:
    """Tests for keyword density and its score."""

    def test_density_is_percentage_of_words(self) -> None:
        content = f"<p>coffee {words(99)}</p>"
        assert calculate_keyword_density(content, "coffee") == pytest.approx(1.0)

    def test_density_is_case_insensitive(self) -> None:
        content = f"<p>COFFEE Coffee {words(98)}</p>"
        assert calculate_keyword_density(content, "coffee") == pytest.approx(2.0)

    def test_density_counts_substrings(self) -> None:
        """'coffees' contains 'coffee' and is counted."""
        content = f"<p>coffees {words(9)}</p>"
        assert calculate_keyword_density(content, "coffee") == pytest.approx(10.0)

    def test_multi_word_keyword_counts_phrases(self) -> None:
        content = f"<p>cold brew {words(48)}</p>"
        assert calculate_keyword_density(content, "Cold Brew") == pytest.approx(2.0)

    @pytest.mark.parametrize("density", [1.0, 1.5, 2.0])
    def test_window_scores_100(self, density: float) -> None:
        """Exactly 1.0% and 2.0% are inside the window."""
        assert keyword_density_score(density) == 100

    @pytest.mark.parametrize(
        ("density", "expected"),
        [(0.0, 0), (0.25, 25), (0.5, 50), (0.999, 100)],
    )
    def test_below_window_scales_linearly(self, density: float, expected: int) -> None:
        assert keyword_density_score(density) == expected

    @pytest.mark.parametrize(
        ("density", "expected"),
        [(2.5, 88), (3.0, 75), (4.0, 50), (6.0, 0), (15.0, 0)],
    )
    def test_above_window_loses_25_per_point(self, density: float, expected: int) -> None:
        assert keyword_density_score(density) == expected

    def test_boundary_documents_score_100(self) -> None:
        one_percent = f"<p>coffee {words(99)}</p>"
        two_percent = f"<p>coffee coffee {words(98)}</p>"
        for content in (one_percent, two_percent):
            density = calculate_keyword_density(content, "coffee")
            assert keyword_density_score(density) == 100


# ---------------------------------------------------------------------------
# Test: Keyword placement
# ---------------------------------------------------------------------------


class TestKeywordPlacement:
    """Tests for keyword in H1, slug and opening text."""

    def test_keyword_in_h1(self) -> None:
        assert has_keyword_in_h1("<h1>Keyword test</h1>", "keyword") is True

    def test_keyword_in_h1_case_insensitive(self) -> None:
        assert has_keyword_in_h1("<h1>Best coffee</h1>", "COFFEE") is True

    def test_keyword_not_in_h1(self) -> None:
        assert has_keyword_in_h1("<h1>Tea</h1><p>coffee</p>", "coffee") is False

    def test_only_first_h1_counts(self) -> None:
        assert has_keyword_in_h1("<h1>Tea</h1><h1>Coffee</h1>", "coffee") is False

    def test_no_h1(self) -> None:
        assert has_keyword_in_h1("<h2>Coffee</h2>", "coffee") is False

    def test_slug_with_hyphenated_keyword(self) -> None:
        assert check_keyword_in_slug("best-Cold-Brew-guide", "cold brew") is True

    def test_slug_requires_hyphens(self) -> None:
        assert check_keyword_in_slug("cold_brew", "cold brew") is False

    def test_slug_missing(self) -> None:
        assert check_keyword_in_slug(None, "coffee") is False

    def test_keyword_early_inside_window(self) -> None:
        """20 words give a 2-word window."""
        content = f"<p>alpha coffee {words(18)}</p>"
        assert check_keyword_early(content, "coffee") is True

    def test_keyword_early_outside_window(self) -> None:
        content = f"<p>alpha beta coffee {words(17)}</p>"
        assert check_keyword_early(content, "coffee") is False

    def test_keyword_early_window_rounds_up(self) -> None:
        """21 words give ceil(2.1) = 3 words."""
        content = f"<p>alpha beta coffee {words(18)}</p>"
        assert check_keyword_early(content, "coffee") is True

    def test_keyword_early_single_word(self) -> None:
        assert check_keyword_early("<p>Coffee</p>", "coffee") is True


# ---------------------------------------------------------------------------
# Test: Structure
# ---------------------------------------------------------------------------


class TestHeadingStructure:
    """Tests for heading counts and scoring."""

    def test_count_headings(self) -> None:
        counts = count_headings("<h1>a</h1><h2>b</h2><h2>c</h2><h3>d</h3>")
        assert counts == HeadingCount(h1=1, h2=2, h3=1, h4=0, h5=0)
        assert counts.to_dict() == {"h1": 1, "h2": 2, "h3": 1, "h4": 0, "h5": 0}

    def test_ideal_structure_scores_100(self) -> None:
        result = evaluate_heading_structure(
            count_headings("<h1>a</h1><h2>b</h2><h2>c</h2><h3>d</h3>")
        )
        assert result.has_unique_h1 is True
        assert result.has_good_distribution is True
        assert result.score == 100

    def test_unique_h1_only(self) -> None:
        result = evaluate_heading_structure(HeadingCount(h1=1, h2=1, h3=1))
        assert result.score == 50
        assert result.has_good_distribution is False

    def test_distribution_only(self) -> None:
        result = evaluate_heading_structure(HeadingCount(h1=2, h2=3, h3=1))
        assert result.has_unique_h1 is False
        assert result.score == 50

    def test_no_headings(self) -> None:
        assert evaluate_heading_structure(HeadingCount()).score == 0


class TestMetaDescription:
    """Tests for meta description validation."""

    def test_perfect_description(self) -> None:
        desc = "coffee " + "x" * 143
        assert len(desc) == 150
        result = validate_meta_description(desc, "Coffee")
        assert result.has_desc is True
        assert result.has_keyword is True
        assert result.length_ok is True
        assert result.length == 150
        assert result.score == 100

    @pytest.mark.parametrize("length", [150, 160])
    def test_length_boundaries_inclusive(self, length: int) -> None:
        assert validate_meta_description("x" * length, "coffee").length_ok is True

    @pytest.mark.parametrize("length", [149, 161])
    def test_length_outside_range(self, length: int) -> None:
        result = validate_meta_description("coffee" + "x" * (length - 6), "coffee")
        assert result.length_ok is False
        assert result.score == 66

    def test_without_keyword(self) -> None:
        result = validate_meta_description("x" * 155, "coffee")
        assert result.has_keyword is False
        assert result.score == 67

    def test_missing_description(self) -> None:
        result = validate_meta_description(None, "coffee")
        assert result.has_desc is False
        assert result.score == 0

    def test_blank_keyword_never_matches(self) -> None:
        assert validate_meta_description("anything", "").has_keyword is False


class TestParagraphs:
    """Tests for paragraph length evaluation."""

    def test_boundary_lengths_are_good(self) -> None:
        result = evaluate_paragraphs(paragraph(40) + paragraph(60))
        assert result.total_paragraphs == 2
        assert result.good_paragraphs == 2
        assert result.score == 100
        assert result.avg_words == 50

    def test_outside_range_is_not_good(self) -> None:
        result = evaluate_paragraphs(paragraph(39) + paragraph(61))
        assert result.good_paragraphs == 0
        assert result.score == 0

    def test_mixed_paragraphs(self) -> None:
        result = evaluate_paragraphs(paragraph(45) + paragraph(10))
        assert result.score == 50
        assert result.avg_words == 28

    def test_no_paragraphs_scores_zero_over_zero(self) -> None:
        """No data is distinguishable from all-good."""
        content = "<h1>Title</h1><div>Some text</div>"
        result = evaluate_paragraphs(content)
        assert result.total_paragraphs == 0
        assert result.score == 0

    def test_short_paragraphs_vacuously_true(self) -> None:
        assert check_short_paragraphs("<h1>Title</h1><div>text</div>", 80) is True

    def test_short_paragraphs_limit_inclusive(self) -> None:
        assert check_short_paragraphs(paragraph(80), 80) is True
        assert check_short_paragraphs(paragraph(10) + paragraph(81), 80) is False

    def test_short_paragraphs_custom_limit(self) -> None:
        assert check_short_paragraphs(paragraph(50), 40) is False


class TestLengthAndTitle:
    """Tests for minimum length and number in title."""

    def test_min_length_boundary(self) -> None:
        assert check_min_length(paragraph(300)) is True
        assert check_min_length(paragraph(299)) is False

    def test_min_length_custom(self) -> None:
        assert check_min_length(paragraph(10), min_words=10) is True

    def test_title_has_number(self) -> None:
        assert title_has_number("<h1>10 Coisas</h1>") is True
        assert title_has_number("<h1>Coisas</h1>") is False

    def test_number_outside_h1_ignored(self) -> None:
        assert title_has_number("<h1>Tips</h1><p>10 tips</p>") is False


# ---------------------------------------------------------------------------
# Test: Media, links, schema
# ---------------------------------------------------------------------------


class TestImageAlts:
    """Tests for image alt coverage."""

    def test_single_image_with_keyword(self) -> None:
        result = check_image_alts('<img alt="keyword"/>', "keyword")
        assert result.to_dict() == {
            "total": 1,
            "with_alt": 1,
            "with_keyword": 1,
            "score": 100,
        }

    def test_blank_alt_does_not_count(self) -> None:
        result = check_image_alts('<img alt="coffee"><img alt="  "><img src="x">', "tea")
        assert result.total == 3
        assert result.with_alt == 1
        assert result.with_keyword == 0
        assert result.score == 33

    def test_no_images(self) -> None:
        assert check_image_alts("<p>No images</p>", "coffee").score == 0


class TestLinks:
    """Tests for link counting."""

    def test_relative_link_is_internal(self) -> None:
        result = count_links('<a href="/test">a</a>')
        assert result.internal == 1
        assert result.score == 33

    def test_three_internal_links_score_100(self) -> None:
        html = '<a href="/a">a</a><a href="#b">b</a><a href="https://blog.example.com/c">c</a>'
        result = count_links(html, ["blog.example.com"])
        assert result.internal == 3
        assert result.score == 100

    def test_host_link_external_without_configured_hosts(self) -> None:
        html = '<a href="/a">a</a><a href="https://blog.example.com/c">c</a>'
        result = count_links(html)
        assert result.internal == 1
        assert result.external_follow == 1

    def test_nofollow_external_not_counted_as_follow(self) -> None:
        html = (
            '<a href="https://a.org">a</a>'
            '<a href="https://b.org" rel="nofollow noopener">b</a>'
            '<a href="/x">x</a><a href="/y">y</a>'
        )
        result = count_links(html)
        assert result.total == 4
        assert result.external_follow == 1
        assert result.internal == 2
        assert result.score == 67


class TestFaqSchema:
    """Tests for FAQ schema detection."""

    def test_faq_page_json_ld(self) -> None:
        html = '<script type="application/ld+json">{"@type":"FAQPage"}</script>'
        assert has_faq_schema(html) is True

    def test_faq_page_in_type_list(self) -> None:
        html = '<script type="application/ld+json">[{"@type":["WebPage","FAQPage"]}]</script>'
        assert has_faq_schema(html) is True

    def test_indicator_words(self) -> None:
        assert has_faq_schema("<h2>FAQ</h2><p>Common questions</p>") is True
        assert has_faq_schema("<h2>Perguntas frequentes</h2>") is True

    def test_other_schema_with_indicator_text(self) -> None:
        """Indicator words count even next to a non-FAQ schema."""
        html = (
            '<script type="application/ld+json">{"@type":"Article"}</script>'
            "<p>Resposta curta</p>"
        )
        assert has_faq_schema(html) is True

    def test_absent(self) -> None:
        html = '<script type="application/ld+json">{"@type":"Article"}</script><p>Brewing</p>'
        assert has_faq_schema(html) is False

    def test_malformed_json_falls_back_to_text(self) -> None:
        assert has_faq_schema('<script type="application/ld+json">{bad</script>') is False

    def test_deeply_nested_json_does_not_raise(self) -> None:
        html = (
            '<script type="application/ld+json">'
            + "[" * 100000
            + "]" * 100000
            + "</script>"
        )
        assert has_faq_schema(html) is False
        breakdown = calculate_seo_score(html, "kw", "", "")
        assert len(breakdown.breakdown) == 14


# ---------------------------------------------------------------------------
# Test: Readability
# ---------------------------------------------------------------------------


class TestReadability:
    """Tests for syllable counting and Flesch reading ease."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("the", 1),
            ("a", 1),
            ("over", 2),
            ("lazy", 2),
            ("make", 1),
            ("beautiful", 3),
            ("rhythm", 1),
            ("dog.", 1),
            ("123", 0),
        ],
    )
    def test_count_syllables(self, word: str, expected: int) -> None:
        assert count_syllables(word) == expected

    def test_known_sentence(self) -> None:
        """9 words, 1 sentence, 11 syllables -> 94.3."""
        content = "<p>The quick brown fox jumps over the lazy dog.</p>"
        assert calculate_readability(content) == 94

    def test_simple_text_clamped_to_100(self) -> None:
        assert calculate_readability("<p>The cat sat. The dog ran.</p>") == 100

    def test_dense_text_clamped_to_0(self) -> None:
        content = (
            "<p>Approximately numerous organizations collaborate internationally "
            "regarding multidisciplinary telecommunications infrastructure.</p>"
        )
        assert calculate_readability(content) == 0

    def test_only_markup(self) -> None:
        assert calculate_readability("<p></p><div> </div>") == 0

    def test_idempotent(self) -> None:
        content = "<p>Brew slowly. Taste often!</p>"
        assert calculate_readability(content) == calculate_readability(content)

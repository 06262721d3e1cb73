"""On-page SEO metric evaluators.

Each evaluator is a pure function over the article HTML (plus keyword,
meta description or slug where relevant) and returns either a bool or a
small result object carrying a 0-100 ``score``. The aggregate SEO score in
app.services.scoring runs them all in a fixed order.

Evaluators never raise: None, empty or malformed input yields the worst
value (0, False or an all-zero result).
"""

import math
import re
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from app.utils.html_text import (
    count_heading_tags,
    extract_alt,
    extract_img_tags,
    extract_json_ld,
    extract_links,
    first_h1_text,
    json_ld_types,
    paragraph_texts,
    strip_tags,
    tokenize_words,
)
from app.utils.score_math import clamp_score, percentage, round_half_up

# Keyword density window (percent of total words)
KEYWORD_DENSITY_MIN = 1.0
KEYWORD_DENSITY_MAX = 2.0
KEYWORD_DENSITY_PENALTY_PER_POINT = 25

# Paragraphs
GOOD_PARAGRAPH_MIN_WORDS = 40
GOOD_PARAGRAPH_MAX_WORDS = 60
DEFAULT_MAX_PARAGRAPH_WORDS = 80

# Meta description
META_DESCRIPTION_MIN_LENGTH = 150
META_DESCRIPTION_MAX_LENGTH = 160

# Links
MIN_INTERNAL_LINKS = 3

# Length and placement
DEFAULT_MIN_WORDS = 300
EARLY_KEYWORD_WINDOW_PERCENT = 10

FAQ_SCHEMA_TYPE = "FAQPage"
FAQ_INDICATOR_PATTERN = re.compile(
    r"pergunta|resposta|faq|questão|dúvida", re.IGNORECASE
)

_SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
_NON_LETTER_PATTERN = re.compile(r"[^a-zA-Z]")
_VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]+")
_DIGIT_PATTERN = re.compile(r"\d")
_SPACES_PATTERN = re.compile(r"\s+")


def _normalize_keyword(keyword: str | None) -> str:
    """Lowercased keyword, or "" when unset or blank."""
    if not keyword or not keyword.strip():
        return ""
    return keyword.strip().lower()


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class HeadingCount:
    """Number of opening heading tags per level."""

    h1: int = 0
    h2: int = 0
    h3: int = 0
    h4: int = 0
    h5: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class HeadingEvaluation:
    """Heading structure verdict.

    Attributes:
        has_unique_h1: Exactly one H1
        has_good_distribution: At least two H2 and one H3
        score: 50 points per satisfied rule
    """

    has_unique_h1: bool
    has_good_distribution: bool
    score: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MetaDescriptionValidation:
    """Meta description checks (33 + 33 + 34 points)."""

    has_desc: bool
    has_keyword: bool
    length_ok: bool
    length: int
    score: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ParagraphEvaluation:
    """Paragraph length distribution.

    Attributes:
        avg_words: Rounded mean words per paragraph
        total_paragraphs: Number of <p> elements
        good_paragraphs: Paragraphs with 40-60 words
        score: Percentage of good paragraphs
    """

    avg_words: int = 0
    total_paragraphs: int = 0
    good_paragraphs: int = 0
    score: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class ImageAltCheck:
    """Image alt text coverage."""

    total: int = 0
    with_alt: int = 0
    with_keyword: int = 0
    score: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class LinkCount:
    """Link classification.

    Attributes:
        internal: Links to the site itself
        external_follow: External links without rel="nofollow"
        total: All links found
        score: 100 from three internal links, linear below
    """

    internal: int = 0
    external_follow: int = 0
    total: int = 0
    score: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


# =============================================================================
# KEYWORD USAGE
# =============================================================================


def calculate_keyword_density(content: str | None, keyword: str | None) -> float:
    """Keyword occurrences per hundred words of plain text.

    Occurrences are substring matches in the lowercased plain text, so a
    multi-word keyword counts once per phrase occurrence.
    """
    keyword_lower = _normalize_keyword(keyword)
    if not content or not keyword_lower:
        return 0.0

    plain_text = strip_tags(content).lower()
    total_words = len(tokenize_words(plain_text))
    if total_words == 0:
        return 0.0

    occurrences = plain_text.count(keyword_lower)
    return occurrences / total_words * 100


def keyword_density_score(density: float) -> int:
    """Score a keyword density percentage.

    100 inside [1%, 2%]; below 1% it rises linearly from 0; above 2% it
    loses 25 points per percentage point, floored at 0.
    """
    if KEYWORD_DENSITY_MIN <= density <= KEYWORD_DENSITY_MAX:
        return 100
    if density < KEYWORD_DENSITY_MIN:
        return clamp_score(density / KEYWORD_DENSITY_MIN * 100)
    excess = density - KEYWORD_DENSITY_MAX
    return clamp_score(100 - excess * KEYWORD_DENSITY_PENALTY_PER_POINT)


def has_keyword_in_h1(content: str | None, keyword: str | None) -> bool:
    """Whether the first H1 contains the keyword (case-insensitive)."""
    keyword_lower = _normalize_keyword(keyword)
    if not keyword_lower:
        return False
    h1_text = first_h1_text(content)
    if h1_text is None:
        return False
    return keyword_lower in h1_text.lower()


def check_keyword_in_slug(slug: str | None, keyword: str | None) -> bool:
    """Whether the slug contains the keyword with spaces as hyphens."""
    keyword_lower = _normalize_keyword(keyword)
    if not slug or not keyword_lower:
        return False
    return _SPACES_PATTERN.sub("-", keyword_lower) in slug.lower()


def check_keyword_early(content: str | None, keyword: str | None) -> bool:
    """Whether the keyword appears within the first 10% of the words."""
    keyword_lower = _normalize_keyword(keyword)
    if not content or not keyword_lower:
        return False

    words = tokenize_words(strip_tags(content).lower())
    if not words:
        return False

    window = math.ceil(len(words) * EARLY_KEYWORD_WINDOW_PERCENT / 100)
    return keyword_lower in " ".join(words[:window])


# =============================================================================
# STRUCTURE
# =============================================================================


def count_headings(content: str | None) -> HeadingCount:
    """Count H1-H5 opening tags."""
    if not content:
        return HeadingCount()
    return HeadingCount(
        h1=count_heading_tags(content, 1),
        h2=count_heading_tags(content, 2),
        h3=count_heading_tags(content, 3),
        h4=count_heading_tags(content, 4),
        h5=count_heading_tags(content, 5),
    )


def evaluate_heading_structure(headings: HeadingCount) -> HeadingEvaluation:
    """Score heading counts: unique H1 and a 2+ H2 / 1+ H3 outline."""
    has_unique_h1 = headings.h1 == 1
    has_good_distribution = headings.h2 >= 2 and headings.h3 >= 1

    score = 0
    if has_unique_h1:
        score += 50
    if has_good_distribution:
        score += 50

    return HeadingEvaluation(
        has_unique_h1=has_unique_h1,
        has_good_distribution=has_good_distribution,
        score=score,
    )


def validate_meta_description(
    description: str | None, keyword: str | None
) -> MetaDescriptionValidation:
    """Check presence, keyword usage and 150-160 character length."""
    desc = description or ""
    keyword_lower = _normalize_keyword(keyword)

    has_desc = bool(desc.strip())
    has_keyword = has_desc and bool(keyword_lower) and keyword_lower in desc.lower()
    length_ok = (
        has_desc
        and META_DESCRIPTION_MIN_LENGTH <= len(desc) <= META_DESCRIPTION_MAX_LENGTH
    )

    score = 0
    if has_desc:
        score += 33
    if has_keyword:
        score += 33
    if length_ok:
        score += 34

    return MetaDescriptionValidation(
        has_desc=has_desc,
        has_keyword=has_keyword,
        length_ok=length_ok,
        length=len(desc),
        score=score,
    )


def evaluate_paragraphs(content: str | None) -> ParagraphEvaluation:
    """Share of paragraphs in the 40-60 word range.

    Zero paragraphs score 0 with total_paragraphs == 0, which tells
    "nothing to measure" apart from "every paragraph is fine".
    """
    word_counts = [len(tokenize_words(text)) for text in paragraph_texts(content)]
    if not word_counts:
        return ParagraphEvaluation()

    good = sum(
        1
        for count in word_counts
        if GOOD_PARAGRAPH_MIN_WORDS <= count <= GOOD_PARAGRAPH_MAX_WORDS
    )
    return ParagraphEvaluation(
        avg_words=round_half_up(sum(word_counts) / len(word_counts)),
        total_paragraphs=len(word_counts),
        good_paragraphs=good,
        score=percentage(good, len(word_counts)),
    )


def check_short_paragraphs(
    content: str | None, max_words: int = DEFAULT_MAX_PARAGRAPH_WORDS
) -> bool:
    """Whether every paragraph has at most ``max_words`` words.

    True for content without paragraphs, False for empty content.
    """
    if not content:
        return False
    return all(
        len(tokenize_words(text)) <= max_words for text in paragraph_texts(content)
    )


def check_min_length(content: str | None, min_words: int = DEFAULT_MIN_WORDS) -> bool:
    """Whether the plain text has at least ``min_words`` words."""
    if not content:
        return False
    return len(tokenize_words(strip_tags(content))) >= min_words


def title_has_number(content: str | None) -> bool:
    """Whether the first H1 contains a digit."""
    h1_text = first_h1_text(content)
    if h1_text is None:
        return False
    return _DIGIT_PATTERN.search(h1_text) is not None


# =============================================================================
# MEDIA, LINKS, SCHEMA
# =============================================================================


def check_image_alts(content: str | None, keyword: str | None) -> ImageAltCheck:
    """Share of <img> tags with a non-blank alt attribute."""
    images = extract_img_tags(content)
    if not images:
        return ImageAltCheck()

    keyword_lower = _normalize_keyword(keyword)
    with_alt = 0
    with_keyword = 0
    for tag in images:
        alt = extract_alt(tag)
        if alt is None or not alt.strip():
            continue
        with_alt += 1
        if keyword_lower and keyword_lower in alt.lower():
            with_keyword += 1

    return ImageAltCheck(
        total=len(images),
        with_alt=with_alt,
        with_keyword=with_keyword,
        score=percentage(with_alt, len(images)),
    )


def count_links(
    content: str | None, site_hosts: Iterable[str] | None = None
) -> LinkCount:
    """Classify links and score internal linking.

    Args:
        content: Article HTML
        site_hosts: The site's own hostnames; absolute links containing one
            of them count as internal. Relative and #fragment links are
            always internal.
    """
    links = extract_links(content, site_hosts or ())
    if not links:
        return LinkCount()

    internal = sum(1 for link in links if link.internal)
    external_follow = sum(
        1 for link in links if not link.internal and not link.nofollow
    )
    if internal >= MIN_INTERNAL_LINKS:
        score = 100
    else:
        score = clamp_score(internal / MIN_INTERNAL_LINKS * 100)

    return LinkCount(
        internal=internal,
        external_follow=external_follow,
        total=len(links),
        score=score,
    )


def has_faq_schema(content: str | None) -> bool:
    """FAQPage JSON-LD, or FAQ wording anywhere in the content."""
    if not content:
        return False
    data = extract_json_ld(content)
    if data is not None and FAQ_SCHEMA_TYPE in json_ld_types(data):
        return True
    return FAQ_INDICATOR_PATTERN.search(content) is not None


# =============================================================================
# READABILITY
# =============================================================================


def count_syllables(word: str) -> int:
    """Approximate syllables as vowel groups, minus a trailing silent e.

    Returns 0 for tokens without letters, otherwise at least 1.
    """
    clean = _NON_LETTER_PATTERN.sub("", word).lower()
    if not clean:
        return 0
    syllables = len(_VOWEL_GROUP_PATTERN.findall(clean))
    if clean.endswith("e") and syllables > 1:
        syllables -= 1
    return max(1, syllables)


def calculate_readability(content: str | None) -> int:
    """Flesch Reading Ease clamped to 0-100.

    206.835 - 1.015 × (words/sentences) - 84.6 × (syllables/words)
    """
    plain_text = strip_tags(content).strip()
    if not plain_text:
        return 0

    sentences = [s for s in _SENTENCE_SPLIT_PATTERN.split(plain_text) if s.strip()]
    words = tokenize_words(plain_text)
    if not sentences or not words:
        return 0

    syllables = sum(count_syllables(word) for word in words)
    avg_words_per_sentence = len(words) / len(sentences)
    avg_syllables_per_word = syllables / len(words)

    flesch = (
        206.835 - 1.015 * avg_words_per_sentence - 84.6 * avg_syllables_per_word
    )
    return clamp_score(flesch)

"""Regex-based text extraction from HTML fragments.

The scorers work on editor output (an HTML fragment, not a full document)
and only need a handful of primitives: plain text, words, paragraphs,
headings, images, links and JSON-LD blocks. These are pulled out with
regular expressions rather than a DOM parser, so nested or malformed markup
is handled the way a tag-stripping regex handles it. That behaviour is
intentional and the fixtures in tests/utils/test_html_text.py pin it down.

Every helper accepts ``None`` or an empty string and returns an empty
result instead of raising.
"""

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from app.core.logging import scoring_logger

# Any tag, including closing tags and comments
TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")
PARAGRAPH_PATTERN = re.compile(r"<p\b[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)
H1_PATTERN = re.compile(r"<h1\b[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
IMG_PATTERN = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
ALT_PATTERN = re.compile(r"\balt\s*=\s*[\"']([^\"']*)[\"']", re.IGNORECASE)
ANCHOR_PATTERN = re.compile(
    r"<a\b[^>]*\bhref\s*=\s*[\"']([^\"']*)[\"'][^>]*>", re.IGNORECASE
)
REL_PATTERN = re.compile(r"\brel\s*=\s*[\"']([^\"']*)[\"']", re.IGNORECASE)
JSON_LD_PATTERN = re.compile(
    r"<script\b[^>]*type\s*=\s*[\"']application/ld\+json[\"'][^>]*>(.*?)</script>",
    re.IGNORECASE | re.DOTALL,
)

_HEADING_PATTERNS = {
    level: re.compile(rf"<h{level}\b[^>]*>", re.IGNORECASE) for level in range(1, 7)
}


@dataclass(frozen=True)
class LinkRef:
    """A hyperlink found in the content.

    Attributes:
        href: Raw href attribute value
        rel: Raw rel attribute value (empty when absent)
        internal: Whether the link points at the site itself
    """

    href: str
    rel: str
    internal: bool

    @property
    def nofollow(self) -> bool:
        return "nofollow" in self.rel.lower()


# =============================================================================
# PLAIN TEXT AND WORDS
# =============================================================================


def strip_tags(html: str | None, replacement: str = " ") -> str:
    """Replace every tag with ``replacement``.

    Whitespace is not collapsed; callers tokenize with tokenize_words().
    """
    if not html:
        return ""
    return TAG_PATTERN.sub(replacement, html)


def tokenize_words(text: str | None) -> list[str]:
    """Split text on whitespace, dropping empty tokens."""
    if not text:
        return []
    return [word for word in WHITESPACE_PATTERN.split(text) if word]


def count_words(html: str | None) -> int:
    """Number of whitespace-separated words in the fragment's plain text."""
    return len(tokenize_words(strip_tags(html)))


# =============================================================================
# STRUCTURE
# =============================================================================


def extract_paragraphs(html: str | None) -> list[str]:
    """Inner HTML of every <p> element, in document order."""
    if not html:
        return []
    return PARAGRAPH_PATTERN.findall(html)


def paragraph_texts(html: str | None) -> list[str]:
    """Plain text of every <p> element with nested tags removed."""
    return [strip_tags(inner, "").strip() for inner in extract_paragraphs(html)]


def first_paragraph_text(html: str | None) -> str | None:
    """Plain text of the first <p> element, or None when there is none."""
    if not html:
        return None
    match = PARAGRAPH_PATTERN.search(html)
    if match is None:
        return None
    return strip_tags(match.group(1), "").strip()


def first_h1_text(html: str | None) -> str | None:
    """Plain text of the first <h1> element, or None when there is none."""
    if not html:
        return None
    match = H1_PATTERN.search(html)
    if match is None:
        return None
    return strip_tags(match.group(1), "")


def count_heading_tags(html: str | None, level: int) -> int:
    """Count opening <hN> tags for a heading level (1-6)."""
    if not html or level not in _HEADING_PATTERNS:
        return 0
    return len(_HEADING_PATTERNS[level].findall(html))


# =============================================================================
# IMAGES AND LINKS
# =============================================================================


def extract_img_tags(html: str | None) -> list[str]:
    """Every <img> tag in the fragment."""
    if not html:
        return []
    return IMG_PATTERN.findall(html)


def extract_alt(tag: str) -> str | None:
    """Value of the alt attribute of a tag, or None when missing."""
    match = ALT_PATTERN.search(tag)
    return match.group(1) if match else None


def is_internal_href(href: str, site_hosts: Iterable[str] = ()) -> bool:
    """Classify an href as pointing at the site itself.

    Relative paths and fragment links are internal; absolute URLs are
    internal only when they contain one of the configured site hosts.
    """
    if href.startswith(("/", "#")):
        return True
    href_lower = href.lower()
    return any(host and host.lower() in href_lower for host in site_hosts)


def extract_links(html: str | None, site_hosts: Iterable[str] = ()) -> list[LinkRef]:
    """Every <a href> in the fragment, classified internal or external."""
    if not html:
        return []
    hosts = tuple(site_hosts)
    links: list[LinkRef] = []
    for match in ANCHOR_PATTERN.finditer(html):
        tag = match.group(0)
        href = match.group(1)
        rel_match = REL_PATTERN.search(tag)
        links.append(
            LinkRef(
                href=href,
                rel=rel_match.group(1) if rel_match else "",
                internal=is_internal_href(href, hosts),
            )
        )
    return links


# =============================================================================
# STRUCTURED DATA
# =============================================================================


def extract_json_ld(html: str | None) -> Any | None:
    """Parse the first JSON-LD script block.

    Returns None when there is no block, when it is not valid JSON, or when
    it is nested too deeply for the decoder.
    """
    if not html:
        return None
    match = JSON_LD_PATTERN.search(html)
    if match is None:
        return None
    raw = match.group(1)
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        scoring_logger.structured_data_invalid(e, raw)
        return None


def json_ld_types(data: Any) -> set[str]:
    """Collect the schema.org @type values of a parsed JSON-LD payload.

    Handles a single object, a top-level array of objects, and @type given
    as a list.
    """
    items = data if isinstance(data, list) else [data]
    types: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        value = item.get("@type")
        if isinstance(value, str):
            types.add(value)
        elif isinstance(value, list):
            types.update(v for v in value if isinstance(v, str))
    return types

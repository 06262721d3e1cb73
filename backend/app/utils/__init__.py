"""Utility modules for the application.

This package contains shared utility functions and classes.
"""

from app.utils.html_text import (
    LinkRef,
    count_heading_tags,
    count_words,
    extract_alt,
    extract_img_tags,
    extract_json_ld,
    extract_links,
    extract_paragraphs,
    first_h1_text,
    first_paragraph_text,
    is_internal_href,
    json_ld_types,
    paragraph_texts,
    strip_tags,
    tokenize_words,
)
from app.utils.score_math import (
    bool_score,
    clamp_score,
    percentage,
    round_half_up,
)

__all__ = [
    # Text extraction
    "strip_tags",
    "tokenize_words",
    "count_words",
    "extract_paragraphs",
    "paragraph_texts",
    "first_paragraph_text",
    "first_h1_text",
    "count_heading_tags",
    "extract_img_tags",
    "extract_alt",
    "LinkRef",
    "is_internal_href",
    "extract_links",
    "extract_json_ld",
    "json_ld_types",
    # Score arithmetic
    "round_half_up",
    "clamp_score",
    "bool_score",
    "percentage",
]

from __future__ import annotations

"""
Text normalization utilities used by the cookbook search.

These helpers perform basic cleaning (HTML stripping, unicode
normalization, whitespace collapsing), lexical tokenization for
BM25 indexing, and synonym expansion.  Entry search text and user
queries go through the same pipeline so they tokenize identically.
"""

import re
import unicodedata
from typing import Iterable, List

from bs4 import BeautifulSoup

from .config import MAX_INPUT_CHARS, SYNONYM_MAP


# ---------------------------
# Basic helpers
# ---------------------------

def clamp_text_length(text: str, max_chars: int = MAX_INPUT_CHARS) -> str:
    if not isinstance(text, str):
        text = str(text)
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def strip_html(raw: str) -> str:
    """
    Strip HTML tags using BeautifulSoup.  Notebook markdown often
    carries inline badges or ``<img>`` tags that should not end up
    in the search text.
    """
    if not raw:
        return ""
    # no '<' means no markup
    if "<" not in raw:
        return raw

    soup = BeautifulSoup(raw, "lxml")
    text = soup.get_text(" ", strip=True)
    text = normalize_whitespace(text)
    # Remove spaces before common punctuation marks
    text = re.sub(r"\s+([.,!?;:])", r"\1", text)
    return text


def normalize_unicode(text: str) -> str:
    if not text:
        return ""
    return unicodedata.normalize("NFC", text)


def normalize_whitespace(text: str) -> str:
    """
    Collapse all whitespace runs into a single space and strip edges.
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


# ---------------------------
# Tokenization & synonyms
# ---------------------------

# Keep '-' so tags like "multi-tenant" stay one token
WORD_SPLIT_RE = re.compile(r"[^\w#+\-]+")


def simple_tokenize(text: str) -> List[str]:
    """
    Lowercase and split on non-word separators.  Leading/trailing
    hyphens are trimmed and empty tokens dropped.
    """
    if not text:
        return []
    text = text.lower()
    tokens = [t.strip("-") for t in WORD_SPLIT_RE.split(text)]
    return [t for t in tokens if t]


def apply_synonyms(tokens: Iterable[str]) -> List[str]:
    """
    Apply a small, deterministic synonym map, e.g. 'pg' -> 'postgres'.
    """
    normalized: List[str] = []
    for tok in tokens:
        replacement = SYNONYM_MAP.get(tok.lower())
        if replacement:
            for sub in replacement.split():
                normalized.append(sub)
        else:
            normalized.append(tok)
    return normalized


# ---------------------------
# High-level normalization pipelines
# ---------------------------

def basic_clean(text: str) -> str:
    """
    End-to-end basic cleaning:

    - clamp length
    - strip HTML
    - normalize unicode
    - normalize whitespace
    """
    if text is None:
        return ""
    text = clamp_text_length(str(text))
    text = strip_html(text)
    text = normalize_unicode(text)
    text = normalize_whitespace(text)
    return text


def lexical_tokens(text: str) -> List[str]:
    """Tokens used for BM25: cleaned, tokenized, synonyms applied."""
    return apply_synonyms(simple_tokenize(basic_clean(text)))

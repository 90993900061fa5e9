from __future__ import annotations

"""
Mapping utilities for the cookbook API.

This module converts enriched entries into the response models defined
in :mod:`qdrant_cookbook.config`: a compact card for listings and
search results, and a full detail record for a single entry.  Keeping
the conversion here keeps ``api.py`` and ``cli.py`` simple.
"""

from typing import Dict, List, Sequence

from loguru import logger

from .config import (
    CATEGORY_ORDER,
    Category,
    EnrichedEntry,
    EntryCard,
    EntryDetail,
    EntryListResponse,
    FeaturedResponse,
)


def to_card(entry: EnrichedEntry) -> EntryCard:
    return EntryCard(
        slug=entry.slug,
        title=entry.title,
        description=entry.description,
        tags=list(entry.tags),
        category=entry.category,
        requires_api_key=entry.requires_api_key,
    )


def to_detail(entry: EnrichedEntry) -> EntryDetail:
    """Full record of one entry, including code and external links."""
    return EntryDetail(
        **to_card(entry).model_dump(),
        notebook=entry.notebook,
        code=entry.code,
        language=entry.language,
        colab_url=entry.colab_url,
        github_url=entry.github_url,
    )


def map_entries_to_response(entries: Sequence[EnrichedEntry]) -> EntryListResponse:
    """Convert entries into a listing response, order preserved."""
    cards: List[EntryCard] = [to_card(e) for e in entries]
    logger.debug("Mapped {} entries into cards", len(cards))
    return EntryListResponse(entries=cards)


def map_featured_to_response(featured: Dict[Category, List[EnrichedEntry]]) -> FeaturedResponse:
    return FeaturedResponse(
        **{cat.value: [to_card(e) for e in featured.get(cat, [])] for cat in CATEGORY_ORDER}
    )

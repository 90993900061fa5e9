from __future__ import annotations

"""
Lexical search over cookbook entries.

Each enriched entry is flattened into a ``search_text`` (title,
description, tags and category), tokenized with the shared normalization
pipeline and indexed with BM25 (``rank_bm25``).  Only entries sharing at
least one token with the query are returned, so an unrelated query gives
an empty result instead of a list of zero-score entries.

Example::

    from qdrant_cookbook.search import search_entries
    for entry, score in search_entries(registry, "postgres incremental"):
        ...
"""

from typing import Iterable, List, Optional, Tuple

from loguru import logger
from rank_bm25 import BM25Okapi

from .config import SEARCH_TOP_N, EnrichedEntry
from .normalize import basic_clean, lexical_tokens
from .registry import ContentRegistry


def build_search_text(entry: EnrichedEntry) -> str:
    """
    title + ". " + description + ". " + tags + ". " + category,
    cleaned and lowercased.
    """
    parts: List[str] = [
        entry.title,
        entry.description,
        " ".join(entry.tags),
        entry.category.value if entry.category else "",
    ]
    cleaned = [basic_clean(p) for p in parts if p and p.strip()]
    return ". ".join(c for c in cleaned if c).lower()


class EntrySearchIndex:
    """BM25 index over a fixed list of entries, kept in declared order."""

    def __init__(self, entries: Iterable[EnrichedEntry]):
        self.entries: List[EnrichedEntry] = list(entries)
        self.corpus_tokens: List[List[str]] = [
            lexical_tokens(build_search_text(e)) for e in self.entries
        ]
        # BM25Okapi divides by the average document length
        if any(self.corpus_tokens):
            self._bm25: Optional[BM25Okapi] = BM25Okapi(self.corpus_tokens)
        else:
            self._bm25 = None
        logger.info("Built search index over {} entries", len(self.entries))

    def query(self, text: str, top_n: int = SEARCH_TOP_N) -> List[Tuple[EnrichedEntry, float]]:
        q_tokens = lexical_tokens(text or "")
        if not q_tokens or self._bm25 is None:
            return []

        scores = self._bm25.get_scores(q_tokens)
        wanted = set(q_tokens)
        hits: List[Tuple[int, float]] = []
        for pos, (doc_tokens, score) in enumerate(zip(self.corpus_tokens, scores)):
            if wanted.intersection(doc_tokens):
                hits.append((pos, float(score)))
        # ties keep declared order
        hits.sort(key=lambda x: (-x[1], x[0]))
        return [(self.entries[pos], score) for pos, score in hits[:top_n]]


def search_entries(
    registry: ContentRegistry,
    query: str,
    top_n: int = SEARCH_TOP_N,
) -> List[Tuple[EnrichedEntry, float]]:
    results = EntrySearchIndex(registry.all_entries()).query(query, top_n=top_n)
    logger.info("Search '{}' matched {} entries", query, len(results))
    return results

from __future__ import annotations

"""
Build-time snapshot of the enriched catalog.

The site is generated ahead of time, so every entry is enriched once and
written to a tabular snapshot (Parquet, with a CSV fallback).  The
snapshot can be shipped alongside the generated pages or loaded by
other tools without re-reading the notebooks.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd
from loguru import logger

from .config import CATALOG_SNAPSHOT_PATH, EnrichedEntry
from .registry import ContentRegistry, default_registry


SNAPSHOT_COLUMNS: List[str] = [
    "item_id",
    "category",
    "slug",
    "title",
    "description",
    "tags",
    "requires_api_key",
    "notebook",
    "language",
    "code",
    "colab_url",
    "github_url",
]


def entries_to_frame(entries: Sequence[EnrichedEntry]) -> pd.DataFrame:
    """
    One row per entry, in the given order, with a running ``item_id``.
    """
    rows = []
    for e in entries:
        row = e.model_dump(mode="json")
        rows.append({col: row.get(col) for col in SNAPSHOT_COLUMNS if col != "item_id"})
    df = pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS[1:])
    df.insert(0, "item_id", range(len(df)))
    return df


def build_catalog_snapshot(
    registry: Optional[ContentRegistry] = None,
    output_path: Path = CATALOG_SNAPSHOT_PATH,
) -> Path:
    """
    End-to-end: read registry → enrich every entry → write snapshot.

    Returns the written path (``.csv`` if Parquet writing failed).
    """
    registry = registry or default_registry()
    entries = registry.all_entries()
    df = entries_to_frame(entries)
    empty = int((df["code"] == "").sum()) if len(df) else 0
    logger.info("Enriched {} entries ({} without code)", len(df), empty)

    logger.info("Writing catalog snapshot to {}", output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        df.to_parquet(output_path, index=False)
        logger.info("Catalog snapshot written with {} rows", len(df))
    except Exception as e:
        logger.warning(
            "Failed to write catalog snapshot as Parquet ({}). Falling back to CSV.", e
        )
        csv_path = output_path.with_suffix(".csv")
        # CSV has no list type
        df.assign(tags=df["tags"].map(json.dumps)).to_csv(csv_path, index=False)
        logger.info("Catalog snapshot written as CSV with {} rows", len(df))
        return csv_path
    return output_path


def load_catalog_snapshot(path: Path = CATALOG_SNAPSHOT_PATH) -> pd.DataFrame:
    """
    Load the snapshot written by :func:`build_catalog_snapshot`.
    """
    logger.info("Loading catalog snapshot from {}", path)
    try:
        df = pd.read_parquet(path)
    except Exception as e:
        logger.warning(
            "Failed to load Parquet snapshot ({}). Trying CSV fallback.", e
        )
        csv_path = path.with_suffix(".csv")
        if not csv_path.exists():
            raise
        df = pd.read_csv(csv_path, keep_default_na=False)
        df["tags"] = df["tags"].map(json.loads)
        logger.info("Loaded catalog snapshot (CSV) with {} rows", len(df))
        return df
    df["tags"] = df["tags"].map(list)
    logger.info("Loaded catalog snapshot with {} rows", len(df))
    return df


if __name__ == "__main__":
    # python -m qdrant_cookbook.catalog_build
    build_catalog_snapshot()

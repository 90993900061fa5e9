from __future__ import annotations
"""
Configuration for the Qdrant cookbook registry.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
CONTENT_ROOT = Path(os.getenv("COOKBOOK_ROOT", str(PROJECT_ROOT)))
REGISTRY_FILENAME = "registry.yaml"
REGISTRY_PATH = Path(os.getenv("COOKBOOK_REGISTRY", str(CONTENT_ROOT / REGISTRY_FILENAME)))

DATA_DIR = PROJECT_ROOT / "data"
CATALOG_SNAPSHOT_PATH = DATA_DIR / "catalog_snapshot.parquet"

# Links
REPO = os.getenv("COOKBOOK_REPO", "thierrypdamiba/qdrant-etl-cookbook")
COLAB_URL_TEMPLATE = "https://colab.research.google.com/github/{repo}/blob/main/{notebook}"
GITHUB_URL_TEMPLATE = "https://github.com/{repo}/blob/main/{notebook}"

# Notebook extraction
CODE_LANGUAGE = "python"
INSTALL_DIRECTIVE = "!pip"
HEADING_MARKER = "#"
COLAB_HOST = "colab.research.google.com"
REQUIREMENTS_LABEL = "**Requirements"
CODE_BLOCK_SEPARATOR = "\n\n"


class Category(str, Enum):
    ETL = "etl"
    AGENTS = "agents"
    CONFIGS = "configs"


# Fixed order for combined listings
CATEGORY_ORDER: List[Category] = [Category.ETL, Category.AGENTS, Category.CONFIGS]

# How many entries per category the overview shows
FEATURED_LIMITS: Dict[Category, int] = {
    Category.ETL: 6,
    Category.AGENTS: 3,
    Category.CONFIGS: 3,
}

# Search
MAX_INPUT_CHARS = 20_000
SEARCH_TOP_N = int(os.getenv("COOKBOOK_SEARCH_TOP_N", "20"))

# Synonyms / lexical normalization
SYNONYM_MAP: Dict[str, str] = {
    "pg": "postgres",
    "postgresql": "postgres",
    "psql": "postgres",
    "jsonl": "json",
    "ndjson": "json",
    "bs4": "beautifulsoup",
    "scrape": "scraping",
    "scraper": "scraping",
    "img": "images",
    "image": "images",
    "embedding": "embeddings",
    "vector": "vectors",
    "k8s": "kubernetes",
    "compose": "docker",
    "tenant": "multi-tenant",
    "backups": "backup",
    "snapshot": "snapshots",
    "dedupe": "dedup",
    "deduplication": "dedup",
    "quant": "quantization",
}


# Pydantic schemas
class RawEntry(BaseModel):
    """One entry exactly as authored in the registry file."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(min_length=1)
    title: str
    notebook: str = ""
    # tuple so a frozen entry cannot be changed through its tags
    tags: Tuple[str, ...] = ()
    requires_api_key: bool = False

    @field_validator("notebook", mode="before")
    @classmethod
    def empty_notebook_from_null(cls, v):
        # `notebook:` with no value parses as None in YAML
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def empty_tags_from_null(cls, v):
        return () if v is None else v


class EnrichedEntry(RawEntry):
    """A raw entry plus the content pulled out of its notebook."""

    category: Optional[Category] = None
    description: str = ""
    code: str = ""
    language: str = CODE_LANGUAGE
    colab_url: str = ""
    github_url: str = ""


class EntryCard(BaseModel):
    slug: str
    title: str
    description: str
    tags: List[str]
    category: Optional[Category]
    requires_api_key: bool


class EntryDetail(EntryCard):
    notebook: str
    code: str
    language: str
    colab_url: str
    github_url: str


class EntryListResponse(BaseModel):
    entries: List[EntryCard]


class FeaturedResponse(BaseModel):
    etl: List[EntryCard]
    agents: List[EntryCard]
    configs: List[EntryCard]


class HealthResponse(BaseModel):
    status: str

from __future__ import annotations

"""
Content registry: the declarative list of cookbook entries, enriched with
content pulled out of the notebooks they reference.

The registry file (``registry.yaml``) has three top-level lists, ``etl``,
``agents`` and ``configs``.  Each item names a slug, a title, an optional
notebook path (relative to the content root), tags and whether the recipe
needs an API key.  Example::

    from qdrant_cookbook.registry import ContentRegistry

    registry = ContentRegistry(Path("."))
    for entry in registry.agents():
        print(entry.slug, entry.colab_url)

The YAML is parsed once per :class:`ContentRegistry` and kept until
:meth:`ContentRegistry.reset` is called.  Enrichment is recomputed on every
read; enriched entries are frozen.

Two failure tiers:

* a missing or malformed registry file raises :class:`RegistryConfigError`;
  nothing can be served without it.
* a missing or malformed notebook only empties that entry's description and
  code.  Other entries are unaffected and nothing is raised.
"""

import threading
from collections import Counter
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import yaml
from loguru import logger
from pydantic import ValidationError

from .config import (
    CATEGORY_ORDER,
    CODE_LANGUAGE,
    CONTENT_ROOT,
    FEATURED_LIMITS,
    REGISTRY_FILENAME,
    REGISTRY_PATH,
    REPO,
    Category,
    EnrichedEntry,
    RawEntry,
)
from .links import colab_url, github_url
from .notebook import extract_code, extract_description, read_notebook


class RegistryConfigError(ValueError):
    """The registry file is missing or cannot be turned into entries."""


RegistryReader = Callable[[Path], Mapping[str, Any]]
CategoryLike = Union[Category, str]


# ---------------------------
# Registry file
# ---------------------------

def load_registry_config(path: Path) -> Dict[str, Any]:
    """
    Read and parse the registry YAML.

    Raises :class:`RegistryConfigError` if the file is missing, is not
    valid YAML, or does not hold a mapping at the top level.
    """
    if not path.is_file():
        raise RegistryConfigError(f"Registry file not found: {path}")

    logger.info("Loading registry from {}", path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise RegistryConfigError(f"Registry file {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise RegistryConfigError(
            f"Registry file {path} must contain a mapping of categories, got {type(data).__name__}"
        )
    return data


def _warn_duplicate_slugs(category: Category, entries: List[RawEntry]) -> None:
    counts = Counter(e.slug for e in entries)
    dupes = sorted(slug for slug, n in counts.items() if n > 1)
    if dupes:
        logger.warning(
            "Duplicate slugs in '{}': {} (first declared entry wins lookups)",
            category.value,
            dupes,
        )


def parse_registry(data: Mapping[str, Any]) -> Dict[Category, List[RawEntry]]:
    """
    Validate the parsed YAML into raw entries per category.

    An absent or empty category gives an empty list.  Keys other than the
    three known categories are ignored.
    """
    parsed: Dict[Category, List[RawEntry]] = {}
    for category in CATEGORY_ORDER:
        items = data.get(category.value) or []
        if not isinstance(items, list):
            raise RegistryConfigError(
                f"Category '{category.value}' must be a list, got {type(items).__name__}"
            )
        entries: List[RawEntry] = []
        for idx, item in enumerate(items):
            try:
                entries.append(RawEntry.model_validate(item))
            except ValidationError as e:
                raise RegistryConfigError(
                    f"Invalid entry {category.value}[{idx}]: {e}"
                ) from e
        _warn_duplicate_slugs(category, entries)
        parsed[category] = entries
    return parsed


def as_category(category: CategoryLike) -> Optional[Category]:
    """Return the matching :class:`Category`, or ``None`` for unknown names."""
    try:
        return Category(category)
    except ValueError:
        return None


# ---------------------------
# Registry
# ---------------------------

class ContentRegistry:
    """
    Lazily parsed registry rooted at a content directory.

    ``reader`` is the function used to read the registry file; it is
    called at most once until :meth:`reset`.
    """

    def __init__(
        self,
        content_root: Path = CONTENT_ROOT,
        registry_path: Optional[Path] = None,
        reader: RegistryReader = load_registry_config,
        repo: str = REPO,
    ):
        self.content_root = Path(content_root)
        self.registry_path = (
            Path(registry_path) if registry_path is not None else self.content_root / REGISTRY_FILENAME
        )
        self.repo = repo
        self._reader = reader
        self._lock = threading.Lock()
        self._raw: Optional[Dict[Category, List[RawEntry]]] = None

    def raw_entries(self) -> Dict[Category, List[RawEntry]]:
        """Parsed registry, reading the file on first use only."""
        if self._raw is None:
            with self._lock:
                if self._raw is None:
                    parsed = parse_registry(self._reader(self.registry_path))
                    logger.info(
                        "Registry parsed: {}",
                        {c.value: len(v) for c, v in parsed.items()},
                    )
                    self._raw = parsed
        return self._raw

    def reset(self) -> None:
        with self._lock:
            self._raw = None

    # enrichment -------------------------------------------------------------

    def enrich_entry(self, raw: RawEntry, category: Optional[Category] = None) -> EnrichedEntry:
        base = raw.model_dump()
        if not raw.notebook:
            return EnrichedEntry(**base, category=category, language=CODE_LANGUAGE)

        description = ""
        code = ""
        result = read_notebook(self.content_root / raw.notebook)
        if result.resolved:
            description = extract_description(result.cells)
            code = extract_code(result.cells)
        else:
            logger.debug("Notebook for '{}' {}: {}", raw.slug, result.status.value, result.path)

        return EnrichedEntry(
            **base,
            category=category,
            description=description,
            code=code,
            language=CODE_LANGUAGE,
            colab_url=colab_url(raw.notebook, self.repo),
            github_url=github_url(raw.notebook, self.repo),
        )

    # queries ----------------------------------------------------------------

    def load_category_entries(self, category: CategoryLike) -> List[EnrichedEntry]:
        raw = self.raw_entries()
        cat = as_category(category)
        if cat is None:
            logger.debug("Unknown category requested: {}", category)
            return []
        return [self.enrich_entry(e, cat) for e in raw.get(cat, [])]

    def etl_recipes(self) -> List[EnrichedEntry]:
        return self.load_category_entries(Category.ETL)

    def agents(self) -> List[EnrichedEntry]:
        return self.load_category_entries(Category.AGENTS)

    def configs(self) -> List[EnrichedEntry]:
        return self.load_category_entries(Category.CONFIGS)

    def all_entries(self) -> List[EnrichedEntry]:
        return [*self.etl_recipes(), *self.agents(), *self.configs()]

    def find_entry(self, category: CategoryLike, slug: str) -> Optional[EnrichedEntry]:
        """First entry with ``slug`` in ``category``; only that one is enriched."""
        cat = as_category(category)
        if cat is None:
            return None
        for raw in self.raw_entries().get(cat, []):
            if raw.slug == slug:
                return self.enrich_entry(raw, cat)
        return None

    def featured_entries(self) -> Dict[Category, List[EnrichedEntry]]:
        """Leading entries of each category, as shown on the overview."""
        raw = self.raw_entries()
        return {
            cat: [self.enrich_entry(e, cat) for e in raw.get(cat, [])[:FEATURED_LIMITS[cat]]]
            for cat in CATEGORY_ORDER
        }


_default_registry: Optional[ContentRegistry] = None


def default_registry() -> ContentRegistry:
    """Registry for the configured content root, shared across the process."""
    global _default_registry
    if _default_registry is None:
        _default_registry = ContentRegistry(CONTENT_ROOT, REGISTRY_PATH)
    return _default_registry

# qdrant_cookbook/cli.py
"""
Command-line runner for the cookbook registry.

Commands:
- list    print slug/title per entry (optionally one category)
- show    print one entry's description, links and code
- search  BM25 search over all entries
- build   write the enriched catalog snapshot
"""

from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .catalog_build import build_catalog_snapshot
from .config import CATALOG_SNAPSHOT_PATH, CATEGORY_ORDER, CONTENT_ROOT, REGISTRY_FILENAME
from .registry import ContentRegistry
from .search import search_entries


def _format_tags(tags: Sequence[str]) -> str:
    return ", ".join(tags) if tags else "-"


def cmd_list(registry: ContentRegistry, args: argparse.Namespace) -> int:
    entries = registry.load_category_entries(args.category) if args.category else registry.all_entries()
    for e in entries:
        key = " [api key]" if e.requires_api_key else ""
        print(f"{e.category.value:<8} {e.slug:<32} {e.title}{key}")
    print(f"{len(entries)} entries")
    return 0


def cmd_show(registry: ContentRegistry, args: argparse.Namespace) -> int:
    entry = registry.find_entry(args.category, args.slug)
    if entry is None:
        print(f"No entry '{args.slug}' in '{args.category}'", file=sys.stderr)
        return 1
    print(entry.title)
    print(f"tags: {_format_tags(entry.tags)}")
    if entry.description:
        print()
        print(entry.description)
    if entry.colab_url:
        print()
        print(f"Colab:  {entry.colab_url}")
        print(f"GitHub: {entry.github_url}")
    if entry.code:
        print()
        print(entry.code)
    return 0


def cmd_search(registry: ContentRegistry, args: argparse.Namespace) -> int:
    results = search_entries(registry, args.query, top_n=args.topk)
    for e, score in results:
        print(f"{score:6.2f}  {e.category.value}/{e.slug}  {e.title}")
    if not results:
        print("No matches")
    return 0


def cmd_build(registry: ContentRegistry, args: argparse.Namespace) -> int:
    out = build_catalog_snapshot(registry, Path(args.out))
    print(f"Wrote snapshot to {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="qdrant-cookbook")
    ap.add_argument("--root", type=str, default=str(CONTENT_ROOT), help="content root holding registry.yaml and notebooks")
    ap.add_argument("--registry", type=str, default=None, help=f"registry file (default: $COOKBOOK_REGISTRY, else <root>/{REGISTRY_FILENAME})")
    sub = ap.add_subparsers(dest="command", required=True)

    categories = [c.value for c in CATEGORY_ORDER]

    p = sub.add_parser("list", help="list entries")
    p.add_argument("--category", choices=categories, default=None)
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("show", help="show one entry")
    p.add_argument("category", choices=categories)
    p.add_argument("slug")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("search", help="search entries")
    p.add_argument("query")
    p.add_argument("--topk", type=int, default=10, help="max results (default 10)")
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("build", help="write the catalog snapshot")
    p.add_argument("--out", type=str, default=str(CATALOG_SNAPSHOT_PATH))
    p.set_defaults(func=cmd_build)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # --registry wins over COOKBOOK_REGISTRY; with neither, <root>/registry.yaml
    registry_path = args.registry or os.getenv("COOKBOOK_REGISTRY")
    registry = ContentRegistry(
        Path(args.root),
        Path(registry_path) if registry_path else None,
    )
    return args.func(registry, args)


if __name__ == "__main__":
    sys.exit(main())

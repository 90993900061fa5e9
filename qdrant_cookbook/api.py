from __future__ import annotations

"""
FastAPI application serving the cookbook registry as JSON.

- Listings and search results are cards; a single entry is a full detail
- Unknown categories list as empty; an unknown slug is a 404
- The registry file is parsed at startup so a broken registry fails fast
"""

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import (
    SEARCH_TOP_N,
    EntryDetail,
    EntryListResponse,
    FeaturedResponse,
    HealthResponse,
)
from .mapping import (
    map_entries_to_response,
    map_featured_to_response,
    to_card,
    to_detail,
)
from .registry import ContentRegistry, default_registry
from .search import search_entries


def get_registry(request: Request) -> ContentRegistry:
    return request.app.state.registry


def create_app(registry: Optional[ContentRegistry] = None) -> FastAPI:
    app = FastAPI(title="Qdrant Cookbook")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.registry = registry or default_registry()

    @app.on_event("startup")
    def startup_event() -> None:
        logger.info("Loading registry from {}", app.state.registry.registry_path)
        raw = app.state.registry.raw_entries()
        logger.info("Registry ready with {} entries", sum(len(v) for v in raw.values()))

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="healthy")

    @app.get("/entries", response_model=EntryListResponse)
    def list_all(reg: ContentRegistry = Depends(get_registry)) -> EntryListResponse:
        return map_entries_to_response(reg.all_entries())

    # declared before /entries/{category} so "featured" is not read as a category
    @app.get("/entries/featured", response_model=FeaturedResponse)
    def featured(reg: ContentRegistry = Depends(get_registry)) -> FeaturedResponse:
        return map_featured_to_response(reg.featured_entries())

    @app.get("/entries/{category}", response_model=EntryListResponse)
    def list_category(category: str, reg: ContentRegistry = Depends(get_registry)) -> EntryListResponse:
        return map_entries_to_response(reg.load_category_entries(category))

    @app.get("/entries/{category}/{slug}", response_model=EntryDetail)
    def get_entry(category: str, slug: str, reg: ContentRegistry = Depends(get_registry)) -> EntryDetail:
        entry = reg.find_entry(category, slug)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"No entry '{slug}' in '{category}'")
        return to_detail(entry)

    @app.get("/search", response_model=EntryListResponse)
    def search(
        q: str = Query(..., min_length=1),
        limit: int = Query(SEARCH_TOP_N, ge=1, le=100),
        reg: ContentRegistry = Depends(get_registry),
    ) -> EntryListResponse:
        query = q.strip()
        if not query:
            raise HTTPException(status_code=422, detail="Query must be non-empty")
        results = search_entries(reg, query, top_n=limit)
        return EntryListResponse(entries=[to_card(e) for e, _ in results])

    return app


# uvicorn qdrant_cookbook.api:app
app = create_app()

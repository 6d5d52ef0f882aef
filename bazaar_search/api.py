from __future__ import annotations

"""
FastAPI application for marketplace search.

- POST /search runs the fuzzy matcher over inline items or the catalog
  loaded at startup ($BAZAAR_CATALOG_PATH)
- Results are paged; the full match count is always reported
- GET /health for liveness checks
"""

from typing import Any, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .catalog import catalog_path_from_env, load_catalog
from .config import DEFAULT_PAGE_SIZE, MAX_QUERY_CHARS, HealthResponse
from .matcher import get_matcher
from .models import CatalogItem, SearchRequest, SearchResponse
from .paging import has_exact_match, paginate


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_catalog: Optional[List[CatalogItem]] = None


@app.on_event("startup")
def startup_event() -> None:
    global _catalog
    logger.info("Starting search service warmup...")
    get_matcher()
    path = catalog_path_from_env()
    if path is None:
        logger.warning("No catalog configured; /search will only accept inline items.")
        return
    try:
        _catalog = load_catalog(path)
    except (FileNotFoundError, ValueError) as e:
        _catalog = None
        logger.warning("Failed to load catalog from {}: {}", path, e)
        return
    logger.info("Warmup complete with {} catalog items.", len(_catalog))


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


def run_search(req: SearchRequest, catalog: List[Any]) -> SearchResponse:
    matcher = get_matcher()
    ranked = matcher.rank(catalog, req.query)
    # badge looks at the product words only, without condition or price phrases
    search_text = matcher.interpret(req.query).search_text
    page = paginate(ranked, req.offset, req.limit or DEFAULT_PAGE_SIZE)
    items = [s.item for s in page.items]
    return SearchResponse(
        items=items,
        total=page.total,
        offset=page.offset,
        limit=page.limit,
        has_more=page.has_more,
        has_exact_matches=has_exact_match(items, search_text),
        result_type="results" if page.total else "no_results",
        scores=[round(s.score, 4) for s in page.items] if req.include_scores else None,
    )


@app.post("/search", response_model=SearchResponse)
def search_endpoint(req: SearchRequest) -> SearchResponse:
    if len(req.query) > MAX_QUERY_CHARS:
        raise HTTPException(
            status_code=422, detail=f"Query must be at most {MAX_QUERY_CHARS} characters"
        )
    catalog = req.items if req.items is not None else _catalog
    if catalog is None:
        raise HTTPException(status_code=503, detail="Catalog not loaded")
    return run_search(req, catalog)

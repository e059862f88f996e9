"""Search API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from apple_docs.api.dependencies import get_app_settings, get_engine, get_gate
from apple_docs.api.formatting import related_hit, search_hit
from apple_docs.core.config import Settings
from apple_docs.core.gate import OperationGate
from apple_docs.core.logging import get_logger
from apple_docs.core.metrics import track_request
from apple_docs.models.dto import SearchRequest, SearchResponse
from apple_docs.retrieval.related import MAX_SEED_RESULTS
from apple_docs.retrieval.search import SearchEngine

logger = get_logger(__name__)

router = APIRouter()


@router.post("/search", response_model=SearchResponse, summary="Semantic search with related documents")
def search_docs(
    request: SearchRequest,
    engine: SearchEngine = Depends(get_engine),
    gate: OperationGate = Depends(get_gate),
    settings: Settings = Depends(get_app_settings),
) -> SearchResponse:
    limit = request.limit if request.limit is not None else settings.default_limit
    min_similarity = request.min_similarity if request.min_similarity is not None else settings.default_min_similarity
    with track_request("search", "POST"):
        results = gate.run(
            f'Search: "{request.query}"',
            settings.search_timeout,
            engine.search,
            request.query,
            limit,
            min_similarity,
        )
        response = SearchResponse(
            query=request.query,
            total=len(results),
            results=[
                search_hit(result, request.include_content, request.max_content_chars, request.show_code_preview)
                for result in results
            ],
        )
        if not request.include_related or not results:
            return response

        try:
            related = gate.run(
                f'Finding related docs for: "{request.query}"',
                settings.related_timeout,
                engine.find_related_documents,
                results[:MAX_SEED_RESULTS],
                request.query,
            )
        except Exception as exc:  # noqa: BLE001 - related docs are best-effort
            logger.error("Error finding related documents: %s", exc)
            response.related_error = "Failed to find related documents"
            return response

        if related:
            response.related_documents = [related_hit(item, request.include_content) for item in related]
            response.coverage = "extended"
            response.total_with_related = len(results) + len(related)
        return response


__all__ = ["router"]

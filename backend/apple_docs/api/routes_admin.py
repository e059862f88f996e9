"""Administrative routes: corpus statistics and Prometheus metrics."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from apple_docs.api.dependencies import get_app_settings, get_engine, get_gate
from apple_docs.core.config import Settings
from apple_docs.core.gate import OperationGate
from apple_docs.core.metrics import metrics_response, track_request
from apple_docs.models.dto import StatsResponse
from apple_docs.retrieval.search import SearchEngine

router = APIRouter()


@router.get("/stats", response_model=StatsResponse, summary="Corpus overview")
def get_stats(
    engine: SearchEngine = Depends(get_engine),
    gate: OperationGate = Depends(get_gate),
    settings: Settings = Depends(get_app_settings),
) -> StatsResponse:
    with track_request("stats", "GET"):
        stats = gate.run("Retrieving statistics", settings.stats_timeout, engine.get_stats)
        return StatsResponse(
            database=engine.store.db.db_path.name,
            total_documents=stats.total_documents,
            model=engine.embedder.model_name,
            dimensions=engine.embedder.dim,
            sample_titles=stats.sample_titles,
        )


@router.get("/metrics", summary="Prometheus metrics")
def get_metrics():
    return metrics_response()


__all__ = ["router"]

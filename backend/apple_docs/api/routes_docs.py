"""Document retrieval and code example routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from apple_docs.api.dependencies import get_app_settings, get_engine, get_gate
from apple_docs.api.formatting import code_example_payload, document_payload
from apple_docs.core.config import Settings
from apple_docs.core.gate import OperationGate
from apple_docs.core.metrics import track_request
from apple_docs.models.dto import CodeExamplesResponse, DocumentsRequest, DocumentsResponse
from apple_docs.models.entities import Document
from apple_docs.retrieval.search import SearchEngine

router = APIRouter()


# Ids may contain "/", so the code-examples route is registered before the
# catch-all document route.
@router.get(
    "/documents/{document_id:path}/code-examples",
    response_model=CodeExamplesResponse,
    summary="Extract code examples with context from one document",
)
def get_code_examples(
    document_id: str,
    engine: SearchEngine = Depends(get_engine),
    gate: OperationGate = Depends(get_gate),
    settings: Settings = Depends(get_app_settings),
) -> CodeExamplesResponse:
    with track_request("code_examples", "GET"):
        examples = gate.run(
            f"Extract code from document: {document_id}",
            settings.code_timeout,
            engine.extract_code_from_document,
            document_id,
        )
        return CodeExamplesResponse(
            doc_id=document_id,
            total=len(examples),
            examples=[code_example_payload(example) for example in examples],
        )


@router.get("/documents/{document_id:path}", response_model=DocumentsResponse, summary="Fetch one full document")
def get_document(
    document_id: str,
    engine: SearchEngine = Depends(get_engine),
    gate: OperationGate = Depends(get_gate),
    settings: Settings = Depends(get_app_settings),
) -> DocumentsResponse:
    with track_request("documents", "GET"):
        document = gate.run(
            f"Retrieving document: {document_id}",
            settings.document_timeout,
            engine.get_document,
            document_id,
        )
        return _documents_response([document] if document else [], [document_id])


@router.post("/documents", response_model=DocumentsResponse, summary="Fetch up to ten full documents")
def get_documents(
    request: DocumentsRequest,
    engine: SearchEngine = Depends(get_engine),
    gate: OperationGate = Depends(get_gate),
    settings: Settings = Depends(get_app_settings),
) -> DocumentsResponse:
    with track_request("documents", "POST"):
        documents = gate.run(
            f"Retrieving documents: {', '.join(request.ids)}",
            settings.document_timeout,
            engine.get_documents,
            request.ids,
        )
        return _documents_response(documents, request.ids)


def _documents_response(documents: list[Document], requested_ids: list[str]) -> DocumentsResponse:
    if not documents:
        return DocumentsResponse(found=0, error="Documents not found", requested_ids=requested_ids)
    return DocumentsResponse(
        found=len(documents),
        documents=[document_payload(document) for document in documents],
    )


__all__ = ["router"]

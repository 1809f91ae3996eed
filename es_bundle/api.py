"""
FastAPI REST API for reading documents through configured managers.
"""

import os
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from es_bundle.container import Container
from es_bundle.core.exceptions import ConfigurationError, UnknownDocumentTypeError
from es_bundle.orm.manager import Manager
from es_bundle.orm.repository import Repository


class SearchRequest(BaseModel):
    """Request model for a criteria search."""
    criteria: Dict[str, Any] = Field(default_factory=dict, description="Field -> value; a list matches any value")
    order_by: Optional[Dict[str, str]] = Field(None, description="Field -> asc / desc")
    limit: Optional[int] = Field(None, ge=0, description="Maximum number of documents")
    offset: Optional[int] = Field(None, ge=0, description="Number of documents to skip")


class SearchResponse(BaseModel):
    """Response model for a criteria search."""
    total: int
    documents: List[Dict[str, Any]]


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        container: Service container; built from the environment when omitted

    Returns:
        FastAPI app
    """
    container = container or Container()

    app = FastAPI(
        title="ES Bundle API",
        description="Read documents stored in Elasticsearch indexes",
        version="1.0.0",
    )

    def get_manager(manager_name: str) -> Manager:
        try:
            return container.get_manager(manager_name)
        except ConfigurationError as e:
            raise HTTPException(status_code=404, detail=str(e))

    def get_repository(manager_name: str, doc_type: str) -> Repository:
        try:
            return get_manager(manager_name).get_repository(doc_type)
        except UnknownDocumentTypeError as e:
            raise HTTPException(status_code=404, detail=str(e))

    def serialize(manager: Manager, document: Any) -> Dict[str, Any]:
        body = manager.get_converter().convert_to_dict(document)
        return {"id": document.id, "score": document.score, **body}

    @app.get("/health")
    def health():
        """Service status and configured managers."""
        return {"status": "ok", "managers": container.manager_names()}

    @app.get("/{manager_name}/{doc_type}/{doc_id}")
    def get_document(manager_name: str, doc_type: str, doc_id: str):
        """Fetch a single document by id."""
        repository = get_repository(manager_name, doc_type)
        document = repository.find(doc_id)
        if document is None:
            raise HTTPException(status_code=404, detail=f"Document {doc_id!r} not found")
        return serialize(repository.get_manager(), document)

    @app.post("/{manager_name}/{doc_type}/_search", response_model=SearchResponse)
    def search_documents(manager_name: str, doc_type: str, request: SearchRequest):
        """
        Find documents by exact field values.

        Returns the total number of matches and the requested page.
        """
        repository = get_repository(manager_name, doc_type)
        try:
            results = repository.find_by(
                request.criteria,
                order_by=request.order_by,
                limit=request.limit,
                offset=request.offset,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        manager = repository.get_manager()
        return SearchResponse(
            total=results.total,
            documents=[serialize(manager, document) for document in results],
        )

    return app


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("API_PORT", "8000"))
    host = os.getenv("API_HOST", "0.0.0.0")

    uvicorn.run(create_app(), host=host, port=port)

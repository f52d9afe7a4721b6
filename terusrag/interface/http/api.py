"""HTTP API for RAG queries.

Thin delegation to the query use case; no business logic here.
"""

from functools import lru_cache

try:
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel
except ImportError as err:
    raise ImportError("FastAPI not installed. Install with: pip install 'terusrag[http]'") from err

from terusrag.application.dto.query_dto import QueryRequest
from terusrag.application.use_cases.query_knowledge_base import QueryKnowledgeBase
from terusrag.config.composition import build_query_use_case
from terusrag.domain.errors import DomainError, ProviderError, ValidationError


class QueryRequestModel(BaseModel):
    """Request model for /v1/query endpoint."""

    query: str


class CitationModel(BaseModel):
    id: int
    title: str
    content: str
    viewurl: str | None = None


class QueryResponseModel(BaseModel):
    """Response model for /v1/query endpoint. An empty ``answer`` means nothing matched."""

    answer: list[CitationModel]
    promptTokenCount: int = 0
    responseTokenCount: int = 0
    totalTokenCount: int = 0


class ErrorResponseModel(BaseModel):
    """Single error payload schema for every failing /v1/query call."""

    error: str  # error kind, e.g. "validation_error", "provider_transport_error"
    message: str
    provider: str | None = None
    status: int | None = None  # upstream provider status, when there was one


def error_response(err: DomainError) -> JSONResponse:
    if isinstance(err, ValidationError):
        code, body = 400, ErrorResponseModel(error="validation_error", message=str(err))
    elif isinstance(err, ProviderError):
        code = 502
        body = ErrorResponseModel(
            error=err.kind, message=err.message, provider=err.provider, status=err.status
        )
    else:
        code, body = 500, ErrorResponseModel(error="internal_error", message=str(err))
    return JSONResponse(status_code=code, content=body.model_dump())


@lru_cache(maxsize=1)
def get_query_use_case() -> QueryKnowledgeBase:
    """Use case built once per process from environment settings."""
    return build_query_use_case()


app = FastAPI(title="Terus RAG API", version="1.0.0")


@app.post(
    "/v1/query",
    response_model=QueryResponseModel,
    responses={400: {"model": ErrorResponseModel}, 502: {"model": ErrorResponseModel}},
)
def query(
    req: QueryRequestModel,
    uc: QueryKnowledgeBase = Depends(get_query_use_case),
):
    """Answer a question with cited lines from the indexed content.

    Example:
        POST /v1/query
        {"query": "What is the capital of France?"}
    """
    result = uc.execute(QueryRequest(question=req.query))
    if not result.ok or result.value is None:
        return error_response(result.error or DomainError("query failed"))
    return QueryResponseModel.model_validate(result.value.to_dict())


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "healthy", "service": "terusrag"}

"""
Search request/response models.

Request validation and per-pipeline result structures for the
hybrid search endpoint, including compare mode.

Dependencies: pydantic, legal_search.models.document
System role: Search API data contracts
"""

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from legal_search.models.document import Document

PRIMARY_CORPUS = "primary"
ALTERNATE_CORPUS = "alternate"


class SearchRequest(BaseModel):
    """Hybrid search request."""

    model_config = ConfigDict(populate_by_name=True)

    # Emptiness is checked by the search service so it surfaces as InvalidRequestError
    query: str = Field(default="", description="Free-text legal query (required)")
    limit: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="Maximum documents to return (configured default when omitted)",
    )
    corpus: str | None = Field(
        default=None,
        description="Corpus configuration key (primary, alternate) or collection name",
    )
    compare_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("compare_mode", "compareMode"),
        description="Run the primary and alternate corpora side by side",
    )


class CorpusConfig(BaseModel):
    """Embedding configuration bound to one collection."""

    name: str = Field(description="Configuration key")
    collection: str = Field(description="Qdrant collection name")
    dense_dimension: int = Field(description="Dense embedding dimensionality")


class PipelineError(BaseModel):
    """Failure report of one pipeline run."""

    type: str = Field(description="Exception class name")
    message: str = Field(description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Diagnostic context (non-production only)",
    )
    status_code: int = Field(default=500, exclude=True)


class PipelineResult(BaseModel):
    """Outcome of one Retriever -> Expander -> Reassembler run."""

    success: bool = True
    corpus: str = Field(description="Corpus configuration key")
    collection: str = Field(description="Collection that was searched")
    documents: list[Document] = Field(default_factory=list)
    total: int = Field(default=0, description="Number of documents returned")
    elapsed_ms: float = Field(description="Wall-clock duration of the run in milliseconds")
    error: PipelineError | None = None


class SearchResponse(BaseModel):
    """Search endpoint response for both single and compare mode."""

    success: bool
    query: str
    mode: Literal["single", "compare"]
    result: PipelineResult | None = Field(default=None, description="Single mode result")
    results: dict[str, PipelineResult] | None = Field(
        default=None,
        description="Compare mode results keyed by corpus configuration",
    )

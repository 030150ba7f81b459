"""
Search service for hybrid legal document retrieval.

Orchestrates the Retriever -> Expander -> Reassembler chain per corpus
configuration. In compare mode the primary and alternate configurations
run concurrently as independent tasks, each reporting its own result or error.

Dependencies: asyncio, legal_search.core.retrieval, legal_search.models
System role: Search orchestration layer
"""

import asyncio
import logging
import time
import traceback

from legal_search.configs.retrieval import RetrievalSettings
from legal_search.core.exceptions import InvalidRequestError, LegalSearchException
from legal_search.core.retrieval import DocumentExpander, HybridRetriever, reassemble_documents
from legal_search.models.search import (
    ALTERNATE_CORPUS,
    PRIMARY_CORPUS,
    CorpusConfig,
    PipelineError,
    PipelineResult,
    SearchRequest,
    SearchResponse,
)
from legal_search.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 30


def corpora_from_settings(settings: RetrievalSettings) -> dict[str, CorpusConfig]:
    """Build the primary/alternate corpus registry from retrieval settings."""
    return {
        PRIMARY_CORPUS: CorpusConfig(
            name=PRIMARY_CORPUS,
            collection=settings.primary_collection,
            dense_dimension=settings.primary_dimension,
        ),
        ALTERNATE_CORPUS: CorpusConfig(
            name=ALTERNATE_CORPUS,
            collection=settings.alternate_collection,
            dense_dimension=settings.alternate_dimension,
        ),
    }


def infer_dense_dimension(collection: str) -> int:
    """Collections are named after their dense size (e.g. tjsc-voyage-1024-chunks)."""
    return 1024 if "1024" in collection else 512


class SearchService:
    """
    Hybrid search orchestrator.

    Stateless across requests: every run gets its own timer, document cap
    list and score lookup.
    """

    def __init__(
        self,
        retriever: HybridRetriever,
        expander: DocumentExpander,
        corpora: dict[str, CorpusConfig],
        default_corpus: str = PRIMARY_CORPUS,
        default_limit: int = DEFAULT_LIMIT,
        expose_details: bool = True,
    ) -> None:
        """
        Initialize search service.

        Args:
            retriever: Hybrid retriever
            expander: Document expander
            corpora: Corpus configurations keyed by name (primary, alternate)
            default_corpus: Corpus used when a request names none
            default_limit: Document limit used when a request sets none
            expose_details: Attach diagnostic details to errors (disable in production)
        """
        self.retriever = retriever
        self.expander = expander
        self.corpora = corpora
        self.default_corpus = default_corpus
        self.default_limit = default_limit
        self.expose_details = expose_details

    def resolve_corpus(self, corpus: str | None) -> CorpusConfig:
        """
        Resolve a corpus key or raw collection name.

        Args:
            corpus: Configuration key, collection name, or None for the default

        Returns:
            CorpusConfig: Resolved configuration
        """
        name = corpus or self.default_corpus
        if name in self.corpora:
            return self.corpora[name]
        for config in self.corpora.values():
            if config.collection == name:
                return config
        return CorpusConfig(name=name, collection=name, dense_dimension=infer_dense_dimension(name))

    async def run_pipeline(self, query: str, corpus: CorpusConfig, limit: int) -> PipelineResult:
        """
        Run retrieval, expansion and reassembly once.

        Raises:
            LegalSearchException: Any pipeline stage failure
        """
        start_time = time.perf_counter()

        ranked = await self.retriever.retrieve(query, corpus)
        chunks = await self.expander.expand(corpus.collection, ranked, document_cap=limit)
        documents = reassemble_documents(chunks)[:limit]

        elapsed_ms = round((time.perf_counter() - start_time) * 1000, 2)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run_pipeline - {corpus.collection}: {len(documents)} documents in {elapsed_ms}ms",
            corpus=corpus.name,
            ranked_chunks=len(ranked),
            expanded_chunks=len(chunks),
        )
        return PipelineResult(
            corpus=corpus.name,
            collection=corpus.collection,
            documents=documents,
            total=len(documents),
            elapsed_ms=elapsed_ms,
        )

    async def run_tagged(self, query: str, corpus: CorpusConfig, limit: int) -> PipelineResult:
        """Run the pipeline, reporting any failure as a failed PipelineResult."""
        start_time = time.perf_counter()
        try:
            return await self.run_pipeline(query, corpus, limit)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:run_tagged - pipeline failed for {corpus.collection}",
                e,
                corpus=corpus.name,
            )
            return PipelineResult(
                success=False,
                corpus=corpus.name,
                collection=corpus.collection,
                elapsed_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error=self._to_pipeline_error(e),
            )

    async def search(self, request: SearchRequest) -> SearchResponse:
        """
        Execute a search request in single or compare mode.

        Args:
            request: Search request

        Returns:
            SearchResponse: One result, or one result per corpus configuration

        Raises:
            InvalidRequestError: If the query is empty (no remote call is made)
        """
        query = request.query.strip()
        if not query:
            raise InvalidRequestError("Query is required and must be a non-empty string", field="query")
        limit = request.limit or self.default_limit

        logger.info(
            f"{__name__}:search - query_len={len(query)} "
            f"mode={'compare' if request.compare_mode else 'single'}"
        )

        if request.compare_mode:
            names = (PRIMARY_CORPUS, ALTERNATE_CORPUS)
            results = await asyncio.gather(
                *(self.run_tagged(query, self.resolve_corpus(name), limit) for name in names)
            )
            return SearchResponse(
                success=any(result.success for result in results),
                query=query,
                mode="compare",
                results=dict(zip(names, results)),
            )

        result = await self.run_tagged(query, self.resolve_corpus(request.corpus), limit)
        return SearchResponse(success=result.success, query=query, mode="single", result=result)

    def _to_pipeline_error(self, exc: Exception) -> PipelineError:
        if isinstance(exc, LegalSearchException):
            message, status_code, details = exc.message, exc.status_code, dict(exc.details)
        else:
            message, status_code, details = str(exc) or "Hybrid search failed", 500, {}

        if not self.expose_details:
            return PipelineError(type=type(exc).__name__, message=message, status_code=status_code)

        details["traceback"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return PipelineError(
            type=type(exc).__name__,
            message=message,
            details=details,
            status_code=status_code,
        )

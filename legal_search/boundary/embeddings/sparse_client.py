"""
BM25 sparse embedding client.

Talks to the embedding microservice (POST /embed/bm25, GET /health).

Dependencies: httpx, pydantic, legal_search.core.exceptions
System role: Sparse query encoder
"""

import logging

import httpx
from pydantic import ValidationError

from legal_search.boundary.embeddings.embedding_schemas import SparseVector
from legal_search.core.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)


class SparseEmbeddingClient:
    """Sparse (BM25) embeddings from the embedding microservice."""

    provider = "bm25"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        model: str = "bm25",
        health_timeout: float = 5.0,
    ) -> None:
        """
        Initialize the client.

        Args:
            http_client: Shared async HTTP client whose base_url points at the service
            model: Sparse model name sent to the service
            health_timeout: Timeout for the health probe in seconds
        """
        self._http = http_client
        self.model = model
        self._health_timeout = health_timeout

    async def embed(self, text: str) -> SparseVector:
        """
        Embed a query into a sparse vector.

        Args:
            text: Query text

        Returns:
            SparseVector: indices and values of the BM25 representation

        Raises:
            EmbeddingProviderError: On transport failure, non-success status
                or malformed payload
        """
        try:
            response = await self._http.post(
                f"/embed/{self.model}",
                json={"texts": [text], "model": self.model},
            )
        except httpx.HTTPError as e:
            raise EmbeddingProviderError(
                f"BM25 service request failed: {type(e).__name__}",
                provider=self.provider,
                details={"error": str(e)},
            ) from e

        if not response.is_success:
            raise EmbeddingProviderError(
                f"BM25 service error: {response.status_code} {response.reason_phrase}",
                provider=self.provider,
                status_code=response.status_code,
            )

        try:
            payload = response.json()["embeddings"][0]
            vector = SparseVector.model_validate(payload)
        except (ValueError, KeyError, IndexError, TypeError, ValidationError) as e:
            raise EmbeddingProviderError(
                "BM25 service returned a malformed embedding",
                provider=self.provider,
                status_code=response.status_code,
                details={"error": str(e)},
            ) from e

        logger.debug(f"{__name__}:embed - sparse embedding with {len(vector.indices)} terms")
        return vector

    async def check_health(self) -> bool:
        """Return True when the service health endpoint answers 2xx."""
        try:
            response = await self._http.get("/health", timeout=self._health_timeout)
            return response.is_success
        except httpx.HTTPError as e:
            logger.warning(f"{__name__}:check_health - embedding service unavailable: {e}")
            return False

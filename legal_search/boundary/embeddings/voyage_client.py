"""
Voyage AI dense embedding client.

Calls the Voyage embeddings REST endpoint with input_type="query" and an
explicit output dimension so the vector matches the target collection.

Dependencies: httpx, legal_search.core.exceptions
System role: Dense query encoder
"""

import logging

import httpx

from legal_search.core.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)


class VoyageEmbeddingClient:
    """Dense embeddings from Voyage AI."""

    provider = "voyage"
    supported_dimensions = (512, 1024)

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str | None,
        model: str = "voyage-3.5-lite",
        health_probe: bool = True,
    ) -> None:
        """
        Initialize the client.

        Args:
            http_client: Shared async HTTP client whose base_url points at the Voyage API
            api_key: Voyage API key
            model: Embedding model name
            health_probe: Send a real (billed) embedding request on health checks
        """
        self._http = http_client
        self._api_key = api_key
        self.model = model
        self.health_probe = health_probe

    async def embed(self, text: str, dimension: int = 512) -> list[float]:
        """
        Embed a query.

        Args:
            text: Query text
            dimension: Output dimensionality (512 or 1024)

        Returns:
            list[float]: Dense vector of length ``dimension``

        Raises:
            EmbeddingProviderError: On missing credentials, transport failure,
                non-success status or malformed payload
        """
        if dimension not in self.supported_dimensions:
            raise EmbeddingProviderError(
                f"Unsupported Voyage output dimension: {dimension}",
                provider=self.provider,
                details={"supported": list(self.supported_dimensions)},
            )
        if not self._api_key:
            raise EmbeddingProviderError(
                "VOYAGE_API_KEY is not configured",
                provider=self.provider,
            )

        try:
            response = await self._http.post(
                "/embeddings",
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={
                    "input": [text],
                    "model": self.model,
                    "input_type": "query",
                    "output_dimension": dimension,
                },
            )
        except httpx.HTTPError as e:
            raise EmbeddingProviderError(
                f"Voyage AI request failed: {type(e).__name__}",
                provider=self.provider,
                details={"error": str(e)},
            ) from e

        if not response.is_success:
            raise EmbeddingProviderError(
                f"Voyage AI returned {response.status_code} {response.reason_phrase}",
                provider=self.provider,
                status_code=response.status_code,
            )

        try:
            embedding = response.json()["data"][0]["embedding"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise EmbeddingProviderError(
                "Failed to generate embedding from Voyage AI: malformed response",
                provider=self.provider,
                status_code=response.status_code,
            ) from e

        if not isinstance(embedding, list) or len(embedding) != dimension:
            raise EmbeddingProviderError(
                "Failed to generate embedding from Voyage AI: unexpected vector size",
                provider=self.provider,
                status_code=response.status_code,
                details={
                    "expected": dimension,
                    "received": len(embedding) if isinstance(embedding, list) else None,
                },
            )

        logger.debug(f"{__name__}:embed - {dimension}d embedding generated")
        return [float(v) for v in embedding]

    async def check_health(self) -> bool:
        """
        Embed a probe string; True when the provider answers correctly.

        Each probe is a billed Voyage request. With health_probe disabled only
        the presence of an API key is reported.
        """
        if not self.health_probe:
            return bool(self._api_key)
        try:
            await self.embed("health", dimension=self.supported_dimensions[0])
            return True
        except EmbeddingProviderError as e:
            logger.warning(f"{__name__}:check_health - Voyage unavailable: {e}")
            return False

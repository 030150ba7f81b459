"""
Boundary layer for external system integrations.

Adapters for Qdrant (vdb) and the dense and sparse embedding providers
(embeddings). Every remote failure leaves this layer as a domain exception.
"""

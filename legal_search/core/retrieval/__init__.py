"""
Hybrid retrieval and document reconstruction.

Pipeline stages:
- HybridRetriever: dense + sparse retrieval fused by RRF
- DocumentExpander: every chunk of the top documents
- reassemble_documents: chunks grouped, ordered and joined into documents
"""

from legal_search.core.retrieval.document_expander import DocumentExpander
from legal_search.core.retrieval.fusion import (
    DelegatedFusionRanking,
    LocalRRFRanking,
    RankingStrategy,
    reciprocal_rank_fusion,
)
from legal_search.core.retrieval.hybrid_retriever import HybridRetriever
from legal_search.core.retrieval.reassembler import reassemble_documents

__all__ = [
    "DelegatedFusionRanking",
    "DocumentExpander",
    "HybridRetriever",
    "LocalRRFRanking",
    "RankingStrategy",
    "reassemble_documents",
    "reciprocal_rank_fusion",
]

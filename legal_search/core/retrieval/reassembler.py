"""Reassembly of expanded chunks into ranked documents (pure, no I/O)."""

from legal_search.models.chunk import Chunk
from legal_search.models.document import Document


def group_by_document(chunks: list[Chunk]) -> dict[str, list[Chunk]]:
    """Group chunks by doc_id, keeping first-seen document order."""
    groups: dict[str, list[Chunk]] = {}
    for chunk in chunks:
        groups.setdefault(chunk.doc_id, []).append(chunk)
    return groups


def build_document(doc_id: str, chunks: list[Chunk]) -> Document:
    """Order a document's chunks by index and join their text."""
    ordered = sorted(chunks, key=lambda c: c.chunk_index)
    head = ordered[0]
    return Document(
        doc_id=doc_id,
        full_text=" ".join(c.text for c in ordered),
        score=max(c.score for c in ordered),
        metadata=dict(head.metadata),
        total_chunks=head.total_chunks,
        chunk_count=len(ordered),
        chunks=ordered,
    )


def reassemble_documents(chunks: list[Chunk]) -> list[Document]:
    """
    Rebuild documents from a flat chunk list.

    Documents come back in descending score; equal scores keep the order in
    which their first chunk appeared.

    Args:
        chunks: Expanded chunks, any order

    Returns:
        list[Document]: Reconstructed documents
    """
    documents = [build_document(doc_id, group) for doc_id, group in group_by_document(chunks).items()]
    return sorted(documents, key=lambda d: d.score, reverse=True)

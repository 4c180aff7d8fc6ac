"""
RAG pipeline metrics.

Prometheus counters for the failure paths that are recovered locally and
would otherwise be invisible to operators:
- retrieval failures (message answered without document context)
- generation failures (fallback message persisted)
- indexing failures (documents and chat messages)
"""

from prometheus_client import Counter

RETRIEVAL_FAILURES = Counter(
    "ragchat_retrieval_failures_total",
    "Context retrievals that failed and fell back to an empty context",
)

GENERATION_FAILURES = Counter(
    "ragchat_generation_failures_total",
    "Model calls that failed and produced the fallback message",
)

INDEXING_FAILURES = Counter(
    "ragchat_indexing_failures_total",
    "Indexing jobs that failed",
    ["kind"],  # Labels: document, chat-message
)

DOCUMENTS_INDEXED = Counter(
    "ragchat_documents_indexed_total",
    "Documents that reached READY",
)

CHUNKS_INDEXED = Counter(
    "ragchat_chunks_indexed_total",
    "Document chunks added to the vector index",
)

WORKER_RESTARTS = Counter(
    "ragchat_worker_restarts_total",
    "Indexing workers restarted by the pool supervisor",
)

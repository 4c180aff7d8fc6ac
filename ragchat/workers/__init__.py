"""Background workers for off-request-path indexing."""

from ragchat.workers.indexing_pool import IndexingJob, IndexingWorkerPool

__all__ = ["IndexingJob", "IndexingWorkerPool"]

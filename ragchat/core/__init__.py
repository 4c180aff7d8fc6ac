"""
Core RAG logic: history windowing, retrieval, prompting, generation
and document ingestion.
"""

"""
Boundary layer: database, vector index, model and file storage adapters.
"""

"""
Boundary layer.

Adapters for PostgreSQL (documents, chunks and their embeddings) and S3
(raw document blobs).
"""

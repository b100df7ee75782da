"""
Application layer.

Provider adapters (Gemini embeddings and chat) and the service orchestrators
used by the API and the embedding workers.
"""

"""
Document processing package.

Text extraction, word-window chunking and per-chunk embedding for the
ingestion pipeline.

Dependencies: langchain_community, langchain_text_splitters, langchain_google_genai
System role: Ingestion pipeline stages
"""

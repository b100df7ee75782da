"""
Core domain layer.

Chunking, embedding tasks, retrieval and prompt assembly.
No HTTP or worker concerns live here.
"""

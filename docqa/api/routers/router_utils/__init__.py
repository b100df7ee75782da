"""
Router utility functions.

Contains helpers shared by router endpoints to keep them clean.
"""

from docqa.api.routers.router_utils.error_handling import handle_rag_errors

__all__ = ["handle_rag_errors"]

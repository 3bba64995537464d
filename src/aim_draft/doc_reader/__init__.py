"""
Document title lookup (Google Drive metadata, API key access).
"""

from .title import extract_document_id, fetch_title

__all__ = ["extract_document_id", "fetch_title"]

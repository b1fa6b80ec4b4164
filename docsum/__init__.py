"""
docsum - chunked, context-carrying summarization of PDF documents.
"""

__version__ = "0.1.0"

"""
Summary persistence.
"""

from .summaries import StoredSummary, SummaryMetadata, SummaryStore


__all__ = ["SummaryStore", "StoredSummary", "SummaryMetadata"]

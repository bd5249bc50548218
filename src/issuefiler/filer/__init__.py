"""Filer - Files newly created organization issues into a project column."""

from issuefiler.filer.filer import Filer, file_new_issues
from issuefiler.filer.models import ExclusionStatus, FilingReport, FilingResult, FilingState
from issuefiler.filer.query import build_search_query, created_since

__all__ = [
    "ExclusionStatus",
    "Filer",
    "FilingReport",
    "FilingResult",
    "FilingState",
    "build_search_query",
    "created_since",
    "file_new_issues",
]

"""Project board client - Interfaces with GitHub organization projects and issue search."""

from issuefiler.kanban.client import ProjectsClient
from issuefiler.kanban.exceptions import (
    ColumnNotFoundError,
    KanbanError,
    ProjectNotFoundError,
)
from issuefiler.kanban.models import ALREADY_ASSOCIATED, CardOutcome, Column, Issue, Project

__all__ = [
    "ALREADY_ASSOCIATED",
    "CardOutcome",
    "Column",
    "ColumnNotFoundError",
    "Issue",
    "KanbanError",
    "Project",
    "ProjectNotFoundError",
    "ProjectsClient",
]

"""Custom exceptions for the project board client."""


class KanbanError(Exception):
    """Base exception for project board client errors."""


class ProjectNotFoundError(KanbanError):
    """Project with given number does not exist in the organization."""


class ColumnNotFoundError(KanbanError):
    """Column with given name does not exist in the project."""

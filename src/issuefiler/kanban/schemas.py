"""Pydantic models for GitHub REST payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from issuefiler.kanban.models import Column, Issue, Project


class _Payload(BaseModel):
    """Base for upstream payloads; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class ProjectPayload(_Payload):
    """Item of GET /orgs/{org}/projects."""

    id: int
    number: int
    name: str = ""

    def to_project(self) -> Project:
        return Project(id=self.id, number=self.number, name=self.name)


class ColumnPayload(_Payload):
    """Item of GET /projects/{project_id}/columns."""

    id: int
    name: str

    def to_column(self) -> Column:
        return Column(id=self.id, name=self.name)


class SearchItemPayload(_Payload):
    """Item of GET /search/issues."""

    id: int
    number: int
    title: str = ""
    html_url: str = ""
    # Present only on pull requests
    pull_request: dict[str, Any] | None = None

    def to_issue(self) -> Issue:
        return Issue(
            id=self.id,
            number=self.number,
            title=self.title,
            url=self.html_url,
            is_pull_request="pull_request" in self.model_fields_set,
        )


class SearchPagePayload(_Payload):
    """One page of GET /search/issues."""

    total_count: int = 0
    incomplete_results: bool = False
    items: list[dict[str, Any]] = Field(default_factory=list)


class CardPayload(_Payload):
    """Response of POST /projects/columns/{column_id}/cards."""

    id: int


class ErrorDetail(_Payload):
    """Entry of the `errors` array of a validation failure."""

    resource: str | None = None
    code: str | None = None
    field: str | None = None
    message: str | None = None


class ErrorPayload(_Payload):
    """Error body returned by the REST API."""

    message: str = ""
    errors: list[ErrorDetail | str] = Field(default_factory=list)
    documentation_url: str | None = None

    def messages(self) -> list[str]:
        """Flatten to error messages, falling back to the top-level message."""
        result = []
        for error in self.errors:
            if isinstance(error, str):
                result.append(error)
            elif error.message:
                result.append(error.message)
            elif error.code:
                result.append(" ".join(p for p in (error.resource, error.field, error.code) if p))
        if not result and self.message:
            result.append(self.message)
        return result

"""ProjectsClient - Async REST client for organization project boards."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx
from pydantic import ValidationError

from issuefiler.kanban.exceptions import KanbanError
from issuefiler.kanban.models import CardOutcome, Column, Issue, Project
from issuefiler.kanban.schemas import (
    CardPayload,
    ColumnPayload,
    ErrorPayload,
    ProjectPayload,
    SearchItemPayload,
    SearchPagePayload,
)
from issuefiler.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("issuefiler.kanban")

PER_PAGE = 100


class ProjectsClient:
    """Client for classic organization projects and the issue search API.

    All calls are single attempts; no retries or backoff.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub access token with project scope
            base_url: GitHub REST API URL (for testing/enterprise)
            timeout: Transport timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client for the REST API."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    # Classic projects preview
                    "Accept": "application/vnd.github.inertia-preview+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ProjectsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        response = await self.client.get(url, params=params)
        if response.status_code >= 400:
            raise KanbanError(
                f"GET {response.request.url.path} failed: "
                f"{response.status_code} - {_error_text(response)}"
            )
        return response

    async def _pages(
        self, path: str, params: dict[str, Any] | None = None
    ) -> AsyncIterator[httpx.Response]:
        """Yield every page of a paginated listing, following Link rel="next"."""
        url: str | None = path
        page_params: dict[str, Any] | None = {"per_page": PER_PAGE, **(params or {})}
        while url is not None:
            response = await self._get(url, params=page_params)
            yield response
            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            page_params = None

    async def list_projects(self, org: str) -> list[Project]:
        """List all projects of an organization.

        Args:
            org: Organization login

        Returns:
            Projects in API order
        """
        projects: list[Project] = []
        async for response in self._pages(f"/orgs/{org}/projects"):
            projects.extend(_parse(ProjectPayload, item).to_project() for item in _json(response))
        logger.debug("Fetched %d project(s) for org %s", len(projects), org)
        return projects

    async def list_columns(self, project_id: int) -> list[Column]:
        """List all columns of a project.

        Args:
            project_id: Absolute ID of the project

        Returns:
            Columns in board order
        """
        columns: list[Column] = []
        async for response in self._pages(f"/projects/{project_id}/columns"):
            columns.extend(_parse(ColumnPayload, item).to_column() for item in _json(response))
        logger.debug("Fetched %d column(s) for project %d", len(columns), project_id)
        return columns

    async def search_issues(self, query: str) -> list[Issue]:
        """Search issues and pull requests, consuming every result page.

        Args:
            query: Search query, terms separated by spaces

        Returns:
            Matching issues in the order returned by the search API
        """
        logger.debug("Searching issues: %s", query)
        issues: list[Issue] = []
        async for response in self._pages("/search/issues", params={"q": query}):
            page = _parse(SearchPagePayload, _json(response))
            issues.extend(_parse(SearchItemPayload, item).to_issue() for item in page.items)
            if page.incomplete_results:
                logger.warning("Search results may be incomplete (upstream timeout)")
            logger.debug("Fetched %d/%d issues.", len(issues), page.total_count)
        return issues

    async def create_card(self, column_id: int, content_id: int) -> CardOutcome:
        """Create a card for an issue in a column.

        HTTP failures are returned as an unsuccessful outcome instead of raised.

        Args:
            column_id: Absolute ID of the column
            content_id: Absolute ID of the issue or pull request

        Returns:
            CardOutcome with the card ID or the upstream error messages

        Raises:
            KanbanError: If a successful response carries an unreadable card
        """
        response = await self.client.post(
            f"/projects/columns/{column_id}/cards",
            json={"content_id": content_id, "content_type": "Issue"},
        )
        if response.status_code >= 400:
            errors = _error_messages(response)
            logger.debug(
                "Card creation for content %d in column %d failed: %s",
                content_id,
                column_id,
                errors,
            )
            return CardOutcome(success=False, errors=errors)

        card = _parse(CardPayload, _json(response))
        logger.debug("Created card %d in column %d", card.id, column_id)
        return CardOutcome(success=True, card_id=card.id)

    async def delete_card(self, card_id: int) -> None:
        """Delete a card.

        Args:
            card_id: Absolute ID of the card

        Raises:
            KanbanError: If deletion fails
        """
        response = await self.client.delete(f"/projects/columns/cards/{card_id}")
        if response.status_code >= 400:
            raise KanbanError(
                f"Failed to delete card {card_id}: "
                f"{response.status_code} - {_error_text(response)}"
            )
        logger.debug("Deleted card %d", card_id)


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise KanbanError(
            f"{response.request.method} {response.request.url.path} returned "
            f"non-JSON body: {response.status_code} - {_error_text(response)}"
        ) from e


def _parse(model: Any, data: Any) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise KanbanError(f"Unexpected {model.__name__} payload: {e}") from e


def _error_messages(response: httpx.Response) -> list[str]:
    try:
        messages = ErrorPayload.model_validate(response.json()).messages()
    except (ValueError, ValidationError):
        messages = []
    return messages or [f"HTTP {response.status_code}: {_error_text(response)}"]


def _error_text(response: httpx.Response) -> str:
    return sanitize_for_log(truncate_output(response.text, max_length=500))

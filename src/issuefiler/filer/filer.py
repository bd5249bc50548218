"""Filer - Files newly created issues into a project column."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING

import httpx

from issuefiler.filer.models import ExclusionStatus, FilingReport, FilingResult, FilingState
from issuefiler.filer.query import build_search_query, created_since
from issuefiler.kanban import (
    ColumnNotFoundError,
    KanbanError,
    ProjectNotFoundError,
    ProjectsClient,
)

if TYPE_CHECKING:
    from issuefiler.config import FilerConfig
    from issuefiler.kanban import Column, Issue, Project

logger = logging.getLogger(__name__)


class Filer:
    """Finds issues created in the configured interval and files them as cards.

    A run resolves the target column (and the excluded project's first
    column, if configured), searches for new issues, then files each one.
    Lookup failures abort the run; card failures only affect their issue.
    """

    def __init__(self, config: FilerConfig, client: ProjectsClient) -> None:
        """Initialize the Filer.

        Args:
            config: Run configuration.
            client: Client for the project board and search APIs.
        """
        self.config = config
        self.client = client

    async def resolve_project(self, project_number: int) -> Project:
        """Find an organization project by its number.

        Raises:
            ProjectNotFoundError: If no project has that number.
        """
        projects = await self.client.list_projects(self.config.org_name)
        for project in projects:
            if project.number == project_number:
                logger.info("Project ID: %d", project.id)
                logger.info("Project Name: %s", project.name)
                return project
        raise ProjectNotFoundError(
            f"Project #{project_number} not found in org {self.config.org_name}"
        )

    async def resolve_column(self, project: Project, column_name: str) -> Column:
        """Find a project column by exact name.

        Raises:
            ColumnNotFoundError: If no column has that name.
        """
        columns = await self.client.list_columns(project.id)
        for column in columns:
            if column.name == column_name:
                logger.info("Column ID: %d", column.id)
                return column
        raise ColumnNotFoundError(
            f"Column '{column_name}' not found in project '{project.name}'. "
            f"Available: {[c.name for c in columns]}"
        )

    async def resolve_first_column(self, project: Project) -> Column:
        """Get any column of a project to probe membership against.

        Raises:
            ColumnNotFoundError: If the project has no columns.
        """
        columns = await self.client.list_columns(project.id)
        if not columns:
            raise ColumnNotFoundError(f"Project '{project.name}' has no columns")
        column = columns[0]
        logger.info("Column ID: %d", column.id)
        return column

    async def find_new_issues(self, now: datetime | None = None) -> list[Issue]:
        """Search open issues created within the configured interval."""
        since = created_since(self.config.interval, self.config.interval_unit, now)
        query = build_search_query(self.config.org_name, self.config.issue_type, since)
        issues = await self.client.search_issues(query)
        logger.info("Retrieved %d new issues", len(issues))
        return issues

    async def check_exclusion(self, issue: Issue, excluded_column: Column) -> ExclusionStatus:
        """Check whether an issue already belongs to the excluded project.

        Creating a card is the membership probe: success means the issue was
        not there, so the probe card is deleted again.

        Args:
            issue: Issue to check.
            excluded_column: Any column of the excluded project.

        Returns:
            EXCLUDED, NOT_EXCLUDED, or INDETERMINATE when the probe failed
            for another reason.
        """
        outcome = await self.client.create_card(excluded_column.id, issue.id)
        if outcome.success:
            logger.debug("Card created in excluded project")
            if outcome.card_id is not None:
                try:
                    await self.client.delete_card(outcome.card_id)
                except (KanbanError, httpx.HTTPError) as e:
                    logger.error(
                        "Could not delete probe card %d for issue '%s': %s",
                        outcome.card_id,
                        issue.title,
                        e,
                    )
                else:
                    logger.debug("Card deleted from excluded project")
            return ExclusionStatus.NOT_EXCLUDED

        if outcome.already_exists:
            return ExclusionStatus.EXCLUDED

        logger.error(
            "Could not check excluded project for issue '%s': %s",
            issue.title,
            "; ".join(outcome.errors),
        )
        return ExclusionStatus.INDETERMINATE

    async def file_issue(
        self,
        issue: Issue,
        column: Column,
        excluded_column: Column | None = None,
    ) -> FilingResult:
        """File one issue into the target column.

        Args:
            issue: Issue to file.
            column: Target column.
            excluded_column: Column of the excluded project, if configured.

        Returns:
            FilingResult; never raises for card-level failures.
        """
        try:
            if excluded_column is not None:
                status = await self.check_exclusion(issue, excluded_column)
                if status == ExclusionStatus.EXCLUDED:
                    logger.warning(
                        "Ignoring issue '%s' as it belongs to excluded project", issue.title
                    )
                    return FilingResult(issue=issue, state=FilingState.SKIPPED_EXCLUDED)
                if status == ExclusionStatus.INDETERMINATE and not self.config.file_unchecked:
                    logger.warning(
                        "Ignoring issue '%s' as its exclusion could not be checked", issue.title
                    )
                    return FilingResult(issue=issue, state=FilingState.SKIPPED_UNCHECKED)

            outcome = await self.client.create_card(column.id, issue.id)
        except (KanbanError, httpx.HTTPError) as e:
            logger.error("Card creation failed for issue '%s': %s", issue.title, e)
            return FilingResult(issue=issue, state=FilingState.FAILED, errors=[str(e)])

        if outcome.success:
            logger.info("Card creation succeeded for issue '%s'.", issue.title)
            return FilingResult(issue=issue, state=FilingState.FILED)
        if outcome.already_exists:
            logger.warning("Card already exists for issue '%s'.", issue.title)
            return FilingResult(issue=issue, state=FilingState.DUPLICATE, errors=outcome.errors)

        logger.error(
            "Card creation failed for issue '%s'. %s", issue.title, "; ".join(outcome.errors)
        )
        return FilingResult(issue=issue, state=FilingState.FAILED, errors=outcome.errors)

    async def file_issues(
        self,
        issues: list[Issue],
        column: Column,
        excluded_column: Column | None = None,
    ) -> FilingReport:
        """File issues, one at a time unless max_concurrency allows more.

        Results keep discovery order either way.
        """
        if self.config.max_concurrency <= 1:
            results = [await self.file_issue(issue, column, excluded_column) for issue in issues]
            return FilingReport(results=results)

        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def bounded(issue: Issue) -> FilingResult:
            async with semaphore:
                return await self.file_issue(issue, column, excluded_column)

        results = await asyncio.gather(*(bounded(issue) for issue in issues))
        return FilingReport(results=list(results))

    async def run(self, now: datetime | None = None) -> FilingReport:
        """Resolve the board, find new issues and file them.

        Raises:
            ProjectNotFoundError: If a configured project does not exist.
            ColumnNotFoundError: If the target column (or any excluded column) is missing.
            KanbanError: If a lookup or the search fails upstream.
        """
        project = await self.resolve_project(self.config.project_number)
        column = await self.resolve_column(project, self.config.column_name)

        excluded_column = None
        if self.config.excluded_project_number is not None:
            excluded_project = await self.resolve_project(self.config.excluded_project_number)
            excluded_column = await self.resolve_first_column(excluded_project)

        issues = await self.find_new_issues(now)
        report = await self.file_issues(issues, column, excluded_column)

        logger.info(
            "Filing complete: filed %d, duplicates %d, skipped %d, failed %d",
            report.filed,
            report.duplicates,
            report.skipped,
            report.failed,
        )
        return report


async def file_new_issues(config: FilerConfig, now: datetime | None = None) -> FilingReport:
    """Run the filer with a client built from the configuration."""
    async with ProjectsClient(token=config.access_token, base_url=config.api_url) as client:
        return await Filer(config, client).run(now)

"""Shared pytest fixtures and configuration."""

import pytest

from issuefiler.config import FilerConfig
from issuefiler.kanban import Column, Issue, Project


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the live GitHub API (local only)")


# Shared fixtures


@pytest.fixture
def filer_config() -> FilerConfig:
    """Minimal valid configuration."""
    return FilerConfig(
        access_token="ghp_" + "a" * 36,
        org_name="acme",
        project_number=3,
        column_name="Triage",
    )


@pytest.fixture
def target_project() -> Project:
    return Project(id=1003, number=3, name="Roadmap")


@pytest.fixture
def target_column() -> Column:
    return Column(id=2001, name="Triage")


@pytest.fixture
def excluded_column() -> Column:
    return Column(id=2901, name="Backlog")


@pytest.fixture
def sample_issues() -> list[Issue]:
    """Two issues and one pull request, in discovery order."""
    return [
        Issue(id=501, number=1, title="Crash on login", url="https://github.com/acme/app/issues/1"),
        Issue(id=502, number=2, title="Typo in docs", url="https://github.com/acme/docs/issues/2"),
        Issue(
            id=503,
            number=3,
            title="Bump httpx",
            url="https://github.com/acme/app/pull/3",
            is_pull_request=True,
        ),
    ]

"""Data models for the Filer module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from issuefiler.kanban.models import Issue


class ExclusionStatus(str, Enum):
    """Membership of an issue in the excluded project."""

    EXCLUDED = "excluded"
    NOT_EXCLUDED = "not_excluded"
    # The probe failed for a reason other than existing membership
    INDETERMINATE = "indeterminate"


class FilingState(str, Enum):
    """Terminal state of one issue in a run."""

    FILED = "filed"
    DUPLICATE = "duplicate"
    SKIPPED_EXCLUDED = "skipped_excluded"
    SKIPPED_UNCHECKED = "skipped_unchecked"
    FAILED = "failed"


@dataclass
class FilingResult:
    """Outcome of filing one issue.

    Attributes:
        issue: The discovered issue.
        state: Where the issue ended up.
        errors: Upstream error messages, if any.
    """

    issue: Issue
    state: FilingState
    errors: list[str] = field(default_factory=list)


@dataclass
class FilingReport:
    """Result of a run, in discovery order."""

    results: list[FilingResult] = field(default_factory=list)

    def count(self, state: FilingState) -> int:
        return sum(1 for result in self.results if result.state == state)

    @property
    def filed(self) -> int:
        return self.count(FilingState.FILED)

    @property
    def duplicates(self) -> int:
        return self.count(FilingState.DUPLICATE)

    @property
    def skipped(self) -> int:
        return self.count(FilingState.SKIPPED_EXCLUDED) + self.count(FilingState.SKIPPED_UNCHECKED)

    @property
    def failed(self) -> int:
        return self.count(FilingState.FAILED)

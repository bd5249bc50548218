"""Data models for the project board client."""

from dataclasses import dataclass, field

# Upstream message returned when a card for the same content already exists
ALREADY_ASSOCIATED = "Project already has the associated issue"


@dataclass(frozen=True)
class Issue:
    """Reduced form of an issue or pull request from the search API."""

    id: int  # absolute ID, used as card content ID
    number: int
    title: str
    url: str = ""
    is_pull_request: bool = False


@dataclass(frozen=True)
class Project:
    """Organization project board."""

    id: int
    number: int
    name: str


@dataclass(frozen=True)
class Column:
    """Column within a project board."""

    id: int
    name: str


@dataclass
class CardOutcome:
    """Result of a card creation attempt.

    Attributes:
        success: Whether the card was created.
        card_id: ID of the new card, if created.
        errors: Upstream error messages, if creation failed.
    """

    success: bool
    card_id: int | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def already_exists(self) -> bool:
        """Whether the failure means the project already holds this issue."""
        return not self.success and ALREADY_ASSOCIATED in self.errors

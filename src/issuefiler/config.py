"""Configuration loading from GitHub Actions inputs.

The runner exposes each action input as an ``INPUT_<NAME>`` environment
variable (name upper-cased, spaces replaced by underscores). Inputs are read
once into an immutable :class:`FilerConfig` which is passed explicitly to
everything that needs it.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_API_URL = "https://api.github.com"
MAX_CONCURRENCY_LIMIT = 20

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


class ConfigError(Exception):
    """Raised when an action input is missing or invalid."""


class IssueType(str, Enum):
    """Which search results to file."""

    ANY = "any"
    ISSUE = "issue"
    PR = "pr"


class IntervalUnit(str, Enum):
    """Unit of the look-back interval."""

    DAYS = "d"
    HOURS = "h"


@dataclass(frozen=True)
class FilerConfig:
    """Immutable run configuration.

    Attributes:
        access_token: Token with read access to the org and write access to projects.
        org_name: Organization login.
        project_number: Number of the target project within the org.
        column_name: Name of the target column in the project.
        excluded_project_number: Project whose issues are never filed, if any.
        issue_type: Whether to file issues, pull requests or both.
        interval: Look-back period for newly created issues.
        interval_unit: Unit of ``interval``.
        max_concurrency: Issues filed at the same time; 1 keeps discovery order.
        file_unchecked: File issues whose exclusion check failed instead of skipping them.
        api_url: REST API base URL.
    """

    access_token: str
    org_name: str
    project_number: int
    column_name: str
    excluded_project_number: int | None = None
    issue_type: IssueType = IssueType.ISSUE
    interval: int = 1
    interval_unit: IntervalUnit = IntervalUnit.DAYS
    max_concurrency: int = 1
    file_unchecked: bool = False
    api_url: str = DEFAULT_API_URL

    @property
    def token_looks_valid(self) -> bool:
        """Rough plausibility check for logging; never exposes the token."""
        token = self.access_token
        return len(token) == 40 or token.startswith(("ghp_", "ghs_", "gho_", "github_pat_"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilerConfig:
        """Create config from raw input values.

        Args:
            data: Mapping of lower-case input name to raw value. Empty strings
                  and None count as not provided.

        Returns:
            Validated configuration.

        Raises:
            ConfigError: If a required input is missing or a value is invalid.
        """
        values = {k: v for k, v in data.items() if v is not None and str(v).strip() != ""}

        required = ["access_token", "org_name", "project_number", "column_name"]
        missing = [name.upper() for name in required if name not in values]
        if missing:
            raise ConfigError(f"Input required and not supplied: {', '.join(missing)}")

        excluded = values.get("excluded_project_number")
        return cls(
            access_token=str(values["access_token"]).strip(),
            org_name=str(values["org_name"]).strip(),
            project_number=_positive_int("project_number", values["project_number"]),
            column_name=str(values["column_name"]).strip(),
            excluded_project_number=(
                _positive_int("excluded_project_number", excluded) if excluded is not None else None
            ),
            issue_type=_choice("issue_type", values.get("issue_type", IssueType.ISSUE), IssueType),
            interval=_positive_int("interval", values.get("interval", 1)),
            interval_unit=_choice(
                "interval_unit", values.get("interval_unit", IntervalUnit.DAYS), IntervalUnit
            ),
            max_concurrency=_bounded_int(
                "max_concurrency", values.get("max_concurrency", 1), 1, MAX_CONCURRENCY_LIMIT
            ),
            file_unchecked=_boolean("file_unchecked", values.get("file_unchecked", False)),
            api_url=str(values.get("api_url", DEFAULT_API_URL)).strip().rstrip("/"),
        )


INPUT_NAMES = (
    "access_token",
    "org_name",
    "project_number",
    "column_name",
    "excluded_project_number",
    "issue_type",
    "interval",
    "interval_unit",
    "max_concurrency",
    "file_unchecked",
    "api_url",
)


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read an action input the way the runner exposes it.

    Args:
        name: Input name as declared in action.yml.
        environ: Environment to read from. Defaults to os.environ.

    Returns:
        The trimmed value, or an empty string when unset.
    """
    environ = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return environ.get(key, "").strip()


def load_config(
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> FilerConfig:
    """Load configuration from action inputs.

    Args:
        environ: Environment to read inputs from. Defaults to os.environ.
        **overrides: Values that take precedence over environment inputs
                     (e.g. from command-line options). None means not given.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If a required input is missing or a value is invalid.
    """
    unknown = set(overrides) - set(INPUT_NAMES)
    if unknown:
        raise ConfigError(f"Unknown inputs: {', '.join(sorted(unknown))}")

    raw: dict[str, Any] = {name: get_input(name, environ) for name in INPUT_NAMES}
    raw.update({k: v for k, v in overrides.items() if v is not None})
    return FilerConfig.from_dict(raw)


def _positive_int(name: str, value: Any) -> int:
    return _bounded_int(name, value, 1, None)


def _bounded_int(name: str, value: Any, minimum: int, maximum: int | None) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name.upper()} must be an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{name.upper()} must be an integer, got {value!r}") from None
    if number < minimum or (maximum is not None and number > maximum):
        bounds = f">= {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        raise ConfigError(f"{name.upper()} must be {bounds}, got {number}")
    return number


def _choice(name: str, value: Any, enum_cls: type[Enum]) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(repr(member.value) for member in enum_cls)
        raise ConfigError(f"{name.upper()} must be one of {allowed}, got {value!r}") from None


def _boolean(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name.upper()} must be a boolean, got {value!r}")

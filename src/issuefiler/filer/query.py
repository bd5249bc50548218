"""Search query construction for newly created issues."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from issuefiler.config import IntervalUnit, IssueType


def created_since(
    interval: int,
    unit: IntervalUnit,
    now: datetime | None = None,
) -> datetime:
    """Get the creation-date lower bound for the look-back interval.

    Args:
        interval: Length of the look-back period.
        unit: Days for IntervalUnit.DAYS, hours otherwise.
        now: Reference time. Defaults to the current UTC time.

    Returns:
        ``now`` minus the interval.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if unit == IntervalUnit.DAYS:
        return now - timedelta(days=interval)
    return now - timedelta(hours=interval)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with a Z suffix."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def build_search_query(org: str, issue_type: IssueType, since: datetime) -> str:
    """Build the issue search query.

    Args:
        org: Organization login.
        issue_type: Type filter; IssueType.ANY adds no type term.
        since: Creation-date lower bound.

    Returns:
        Space-separated search terms.
    """
    terms = [
        "is:open",
        f"org:{org}",
        f"created:>={format_timestamp(since)}",
    ]
    if issue_type != IssueType.ANY:
        terms.append(f"is:{issue_type.value}")
    return " ".join(terms)

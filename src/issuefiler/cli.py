"""CLI entry point for issue-filer.

Inputs come from the action's ``INPUT_*`` environment variables; any option
given on the command line takes precedence.
"""

from __future__ import annotations

import asyncio
import sys

import click
import httpx

from issuefiler import __version__
from issuefiler.config import ConfigError, load_config
from issuefiler.filer import file_new_issues
from issuefiler.kanban import KanbanError
from issuefiler.logging import get_logger, sanitize_for_log, setup_logging
from issuefiler.workflow import set_failed, set_output

logger = get_logger("cli")


@click.command()
@click.version_option(__version__)
@click.option("--access-token", help="Access token (env: INPUT_ACCESS_TOKEN)")
@click.option("--org-name", help="Organization login (env: INPUT_ORG_NAME)")
@click.option("--project-number", help="Target project number (env: INPUT_PROJECT_NUMBER)")
@click.option("--column-name", help="Target column name (env: INPUT_COLUMN_NAME)")
@click.option(
    "--excluded-project-number",
    help="Skip issues already in this project (env: INPUT_EXCLUDED_PROJECT_NUMBER)",
)
@click.option("--issue-type", help="any, issue or pr (default: issue)")
@click.option("--interval", help="Look-back period (default: 1)")
@click.option("--interval-unit", help="d for days, h for hours (default: d)")
@click.option("--max-concurrency", help="Issues filed at the same time (default: 1)")
@click.option(
    "--file-unchecked/--skip-unchecked",
    default=None,
    help="File issues whose exclusion check failed (default: skip them)",
)
@click.option("--api-url", help="REST API base URL (default: https://api.github.com)")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: INFO, DEBUG when RUNNER_DEBUG=1)",
)
def main(log_level: str | None, **inputs: str | bool | None) -> None:
    """File newly created organization issues into a project board column."""
    setup_logging(level=log_level)

    try:
        config = load_config(**inputs)
        logger.debug("Access token: %s", "OK" if config.token_looks_valid else "Not OK")
        logger.debug("Org name: %s", config.org_name)
        logger.debug("Project number: %d", config.project_number)
        logger.debug("Column name: %s", config.column_name)
        logger.debug("Excluded project number: %s", config.excluded_project_number)
        logger.debug("Issue type: %s", config.issue_type.value)
        logger.debug("Interval: %d%s", config.interval, config.interval_unit.value)

        report = asyncio.run(file_new_issues(config))
    except (ConfigError, KanbanError, httpx.HTTPError) as e:
        sys.exit(set_failed(sanitize_for_log(str(e))))
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        sys.exit(set_failed(sanitize_for_log(str(e) or type(e).__name__)))

    set_output("filed", report.filed)
    set_output("duplicates", report.duplicates)
    set_output("skipped", report.skipped)
    set_output("failed", report.failed)


if __name__ == "__main__":
    main()

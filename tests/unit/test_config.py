"""Unit tests for action input loading."""

import pytest

from issuefiler.config import (
    ConfigError,
    FilerConfig,
    IntervalUnit,
    IssueType,
    get_input,
    load_config,
)


@pytest.fixture
def environ() -> dict[str, str]:
    """Runner environment with the required inputs."""
    return {
        "INPUT_ACCESS_TOKEN": "ghp_" + "x" * 36,
        "INPUT_ORG_NAME": "acme",
        "INPUT_PROJECT_NUMBER": "3",
        "INPUT_COLUMN_NAME": "Triage",
    }


@pytest.mark.unit
class TestGetInput:
    """Tests for get_input."""

    def test_reads_upper_case_variable(self) -> None:
        assert get_input("org_name", {"INPUT_ORG_NAME": "acme"}) == "acme"

    def test_spaces_become_underscores(self) -> None:
        assert get_input("column name", {"INPUT_COLUMN_NAME": "To do"}) == "To do"

    def test_value_is_trimmed(self) -> None:
        assert get_input("interval", {"INPUT_INTERVAL": "  6 \n"}) == "6"

    def test_missing_is_empty(self) -> None:
        assert get_input("interval", {}) == ""


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_required_inputs(self, environ: dict[str, str]) -> None:
        config = load_config(environ)

        assert config.org_name == "acme"
        assert config.project_number == 3
        assert config.column_name == "Triage"

    def test_defaults(self, environ: dict[str, str]) -> None:
        config = load_config(environ)

        assert config.excluded_project_number is None
        assert config.issue_type == IssueType.ISSUE
        assert config.interval == 1
        assert config.interval_unit == IntervalUnit.DAYS
        assert config.max_concurrency == 1
        assert config.file_unchecked is False
        assert config.api_url == "https://api.github.com"

    def test_optional_inputs(self, environ: dict[str, str]) -> None:
        environ.update(
            {
                "INPUT_EXCLUDED_PROJECT_NUMBER": "9",
                "INPUT_ISSUE_TYPE": "PR",
                "INPUT_INTERVAL": "12",
                "INPUT_INTERVAL_UNIT": "h",
                "INPUT_MAX_CONCURRENCY": "4",
                "INPUT_FILE_UNCHECKED": "yes",
                "INPUT_API_URL": "https://ghe.example.com/api/v3/",
            }
        )

        config = load_config(environ)

        assert config.excluded_project_number == 9
        assert config.issue_type == IssueType.PR
        assert config.interval == 12
        assert config.interval_unit == IntervalUnit.HOURS
        assert config.max_concurrency == 4
        assert config.file_unchecked is True
        assert config.api_url == "https://ghe.example.com/api/v3"

    def test_empty_optional_input_uses_default(self, environ: dict[str, str]) -> None:
        """The runner passes empty strings for inputs without defaults."""
        environ["INPUT_EXCLUDED_PROJECT_NUMBER"] = ""
        environ["INPUT_INTERVAL"] = ""

        config = load_config(environ)

        assert config.excluded_project_number is None
        assert config.interval == 1

    def test_overrides_take_precedence(self, environ: dict[str, str]) -> None:
        config = load_config(environ, column_name="Inbox", interval=None)

        assert config.column_name == "Inbox"
        assert config.interval == 1

    def test_unknown_override_rejected(self, environ: dict[str, str]) -> None:
        with pytest.raises(ConfigError, match="Unknown inputs"):
            load_config(environ, colour="blue")

    @pytest.mark.parametrize(
        "missing",
        ["INPUT_ACCESS_TOKEN", "INPUT_ORG_NAME", "INPUT_PROJECT_NUMBER", "INPUT_COLUMN_NAME"],
    )
    def test_missing_required_input(self, environ: dict[str, str], missing: str) -> None:
        del environ[missing]

        with pytest.raises(ConfigError) as exc_info:
            load_config(environ)

        assert missing.removeprefix("INPUT_") in str(exc_info.value)

    def test_invalid_issue_type(self, environ: dict[str, str]) -> None:
        environ["INPUT_ISSUE_TYPE"] = "discussion"

        with pytest.raises(ConfigError, match="ISSUE_TYPE"):
            load_config(environ)

    def test_invalid_interval_unit(self, environ: dict[str, str]) -> None:
        environ["INPUT_INTERVAL_UNIT"] = "w"

        with pytest.raises(ConfigError, match="INTERVAL_UNIT"):
            load_config(environ)

    @pytest.mark.parametrize("value", ["abc", "0", "-2", "1.5"])
    def test_invalid_project_number(self, environ: dict[str, str], value: str) -> None:
        environ["INPUT_PROJECT_NUMBER"] = value

        with pytest.raises(ConfigError, match="PROJECT_NUMBER"):
            load_config(environ)

    def test_concurrency_upper_bound(self, environ: dict[str, str]) -> None:
        environ["INPUT_MAX_CONCURRENCY"] = "500"

        with pytest.raises(ConfigError, match="between 1 and 20"):
            load_config(environ)

    def test_invalid_boolean(self, environ: dict[str, str]) -> None:
        environ["INPUT_FILE_UNCHECKED"] = "maybe"

        with pytest.raises(ConfigError, match="FILE_UNCHECKED"):
            load_config(environ)


@pytest.mark.unit
class TestFilerConfig:
    """Tests for FilerConfig."""

    def test_is_immutable(self, filer_config: FilerConfig) -> None:
        with pytest.raises(AttributeError):
            filer_config.org_name = "other"  # type: ignore[misc]

    def test_token_plausibility(self, filer_config: FilerConfig) -> None:
        assert filer_config.token_looks_valid
        assert not FilerConfig.from_dict(
            {"access_token": "short", "org_name": "a", "project_number": 1, "column_name": "c"}
        ).token_looks_valid

    def test_from_dict_accepts_enums(self) -> None:
        config = FilerConfig.from_dict(
            {
                "access_token": "t",
                "org_name": "acme",
                "project_number": 1,
                "column_name": "Triage",
                "issue_type": IssueType.ANY,
                "file_unchecked": True,
            }
        )

        assert config.issue_type == IssueType.ANY
        assert config.file_unchecked is True

"""Unit tests for runner workflow commands and outputs."""

import io
from pathlib import Path

import pytest

from issuefiler.workflow import escape_data, set_failed, set_output


@pytest.mark.unit
class TestEscapeData:
    """Tests for escape_data."""

    def test_plain_text_unchanged(self) -> None:
        assert escape_data("Project not found") == "Project not found"

    def test_special_characters_escaped(self) -> None:
        assert escape_data("50%\r\ndone") == "50%25%0D%0Adone"


@pytest.mark.unit
class TestSetOutput:
    """Tests for set_output."""

    def test_appends_name_value(self, tmp_path: Path) -> None:
        output = tmp_path / "output"
        output.write_text("existing=1\n")

        assert set_output("filed", 3, output_path=output)

        assert output.read_text() == "existing=1\nfiled=3\n"

    def test_multiline_uses_delimiter(self, tmp_path: Path) -> None:
        output = tmp_path / "output"

        set_output("titles", "a\nb", output_path=output)

        lines = output.read_text().splitlines()
        assert lines[0].startswith("titles<<ghadelimiter_")
        assert lines[1:3] == ["a", "b"]
        assert lines[3] == lines[0].split("<<", 1)[1]

    def test_uses_github_output_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        output = tmp_path / "output"
        monkeypatch.setenv("GITHUB_OUTPUT", str(output))

        set_output("failed", 0)

        assert output.read_text() == "failed=0\n"

    def test_no_output_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GITHUB_OUTPUT", raising=False)

        assert set_output("filed", 1) is False


@pytest.mark.unit
class TestSetFailed:
    """Tests for set_failed."""

    def test_writes_error_command(self) -> None:
        stream = io.StringIO()

        code = set_failed("Project #3 not found\nin org acme", stream=stream)

        assert code == 1
        assert stream.getvalue() == "::error::Project #3 not found%0Ain org acme\n"

"""GitHub Actions runner surface: workflow commands and step outputs."""

from __future__ import annotations

import os
import sys
import uuid
from pathlib import Path
from typing import TextIO


def escape_data(value: str) -> str:
    """Escape a message so the runner keeps it on one workflow command line."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_output(name: str, value: object, output_path: str | Path | None = None) -> bool:
    """Write a step output to the runner's output file.

    Args:
        name: Output name.
        value: Output value; converted with str().
        output_path: Output file. Defaults to $GITHUB_OUTPUT.

    Returns:
        True if the output was written, False when no output file is defined.
    """
    if output_path is None:
        output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return False

    text = str(value)
    with open(output_path, "a", encoding="utf-8") as f:
        if "\n" in text:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        else:
            f.write(f"{name}={text}\n")
    return True


def set_failed(message: str, stream: TextIO | None = None) -> int:
    """Report the run as failed.

    Args:
        message: Failure reason shown as an error annotation.
        stream: Where to write the command. Defaults to stdout.

    Returns:
        The process exit code to use.
    """
    stream = stream or sys.stdout
    stream.write(f"::error::{escape_data(message)}\n")
    stream.flush()
    return 1

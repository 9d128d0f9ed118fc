"""Exception taxonomy for the diff processor."""

from __future__ import annotations

from pathlib import Path


class DiffProcessorError(RuntimeError):
    """Base class for fatal diff-processor failures."""


class DiffComputationError(DiffProcessorError):
    """Schema input is malformed or inconsistent.

    Raised before any documentation is inspected; nothing is reported when it
    escapes.
    """


class DocReadError(DiffProcessorError):
    """A documentation file exists but could not be read or decoded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"error reading documentation file {path}: {reason}")
        self.path = path
        self.reason = reason


class ReportWriteError(DiffProcessorError):
    """The report or diff could not be written to its output path."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"error writing output file {path}: {reason}")
        self.path = path
        self.reason = reason

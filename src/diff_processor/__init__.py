"""diff-processor package root."""

from diff_processor.exceptions import DiffComputationError, DiffProcessorError, DocReadError

__all__ = ["__version__", "DiffComputationError", "DiffProcessorError", "DocReadError"]

__version__ = "0.1.0"

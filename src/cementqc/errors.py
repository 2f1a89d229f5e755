# src/cementqc/errors.py
from __future__ import annotations


class CementQCError(RuntimeError):
    """Base class for fatal analysis errors."""


class FormatError(CementQCError):
    """Raised when a log text has no curve definitions or no data rows."""


class NoCompatibleCurveError(CementQCError):
    """Raised when none of the configured amplitude curves exist in the log."""


class NoValidDataError(CementQCError):
    """Raised when no record survives the depth/amplitude sanity filter."""


class LayerTableError(CementQCError):
    """Raised when a layer table cannot be read or lacks the expected columns."""

"""
RexOS Exceptions

Only the boundaries raise: persistence (storage read/write) and report export.
State transitions and ratings are total and never raise for missing data.
"""


class RexOSError(Exception):
    """Base class for all RexOS errors."""


class PersistenceError(RexOSError):
    """Serializing, writing or reading the stored aggregate failed."""


class ExportError(RexOSError):
    """Rendering or writing an exported report failed."""


class ExportInProgressError(ExportError):
    """An export was requested while another one is still running."""

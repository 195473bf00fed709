"""Exceptions raised by the reporter."""


class ReporterError(Exception):
    """Base class for reporter errors."""


class LockError(ReporterError):
    """Raised when the result lock cannot be taken for a reason besides contention."""


class LockTimeoutError(LockError, TimeoutError):
    """Raised when the result lock stays held for longer than the timeout."""


class OptionsError(ReporterError, ValueError):
    """Raised when a reporter options file cannot be loaded."""

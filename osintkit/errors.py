"""Exception types raised by the scan engine."""


class OSINTError(Exception):
    """Base class for scan engine errors."""


class TargetValidationError(OSINTError):
    """Target text does not classify as the requested input type."""

    def __init__(self, target: str, expected: str | None = None):
        self.target = target
        self.expected = expected
        if expected:
            msg = f"Target is not a valid {expected}"
        else:
            msg = "Target is not a valid email, domain, IP or username"
        super().__init__(msg)


class ConfigurationError(OSINTError):
    """A live source was requested without its credential."""


class TransportError(OSINTError):
    """Network failure or non-2xx response from a source."""


class RateLimitExceeded(OSINTError):
    """Per-source request quota for the current window is used up."""

    def __init__(self, source: str, wait_ms: int):
        self.source = source
        self.wait_ms = wait_ms
        super().__init__(
            f"Rate limit exceeded for {source}. "
            f"Please wait {-(-wait_ms // 1000)} seconds."
        )


class ScanInProgressError(OSINTError):
    """scan() was called on an orchestrator that is still running one."""

"""
Error taxonomy for device pairing.

Every failure the gateway or the automation routine can report has its own
exception type. The automation routine never lets these escape: they are
normalized into a PairingResult at its boundary via describe_error().
"""


class PairingError(Exception):
    """Base class for all expected pairing failures."""

    @property
    def code(self) -> str:
        return type(self).__name__


class ValidationError(PairingError):
    """Required request fields are missing or blank."""


class RateLimited(PairingError):
    """The client exhausted its request budget for the current window."""

    def __init__(self, message: str, retry_after: int = 0):
        super().__init__(message)
        self.retry_after = retry_after


class CapacityExceeded(PairingError):
    """All browser session slots are busy."""


class ConfigurationError(PairingError):
    """Target-account credentials are not configured."""


class NavigationTimeout(PairingError):
    """An expected page (e.g. the dashboard) did not load in time."""


class FieldNotFound(PairingError):
    """No selector strategy located a required input field."""


class ControlNotFound(PairingError):
    """No selector strategy located the submit control."""


class ConfirmationNotDetected(PairingError):
    """The workflow finished but the UI showed no success marker."""


class DeadlineExceeded(PairingError):
    """The overall workflow deadline elapsed before completion."""


class UnexpectedFault(PairingError):
    """Anything not covered by the other kinds."""


def describe_error(exc: BaseException) -> str:
    """
    Render an exception as '<Kind>: <message>' for a PairingResult.

    Unknown exception types are reported as UnexpectedFault.
    """
    code = exc.code if isinstance(exc, PairingError) else UnexpectedFault.__name__
    message = str(exc).strip() or type(exc).__name__
    return f"{code}: {message}"

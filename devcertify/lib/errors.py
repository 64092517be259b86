"""Exceptions raised by the issuance pipeline."""

from .models import CommandResult


class ProvisioningError(RuntimeError):
    """A pipeline step failed and the run cannot continue.

    Args:
        message: What failed
        guidance: Manual remediation lines shown to the operator
    """

    def __init__(self, message: str, guidance: list[str] | None = None) -> None:
        super().__init__(message)
        self.guidance = guidance or []


class ToolUnavailableError(ProvisioningError):
    """A prerequisite tool is missing and could not be installed."""


class CommandFailedError(ProvisioningError):
    """An external command exited non-zero or could not be launched."""

    def __init__(
        self, message: str, result: CommandResult, guidance: list[str] | None = None
    ) -> None:
        super().__init__(message, guidance)
        self.result = result

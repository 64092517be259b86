"""Availability checks for external tools."""

from dataclasses import dataclass

from .command_runner import CommandRunner
from .config import PROBE_TIMEOUT_SECONDS
from .logging_config import LOGGER


@dataclass(frozen=True)
class ToolInvocation:
    """A cheap command that exits zero when the tool works."""

    program: str
    args: tuple[str, ...]


MKCERT = ToolInvocation("mkcert", ("--version",))
OPENSSL = ToolInvocation("openssl", ("version",))
CHOCOLATEY = ToolInvocation("choco", ("--version",))
SCOOP = ToolInvocation("scoop", ("--version",))
HOMEBREW = ToolInvocation("brew", ("--version",))


def probe_tool(
    runner: CommandRunner,
    tool: ToolInvocation,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> bool:
    """Return True if ``tool`` runs and exits zero within ``timeout`` seconds.

    Every call re-runs the probe.
    """
    result = runner.run(tool.program, list(tool.args), timeout=timeout)
    present = result.succeeded
    LOGGER.debug("Probe %s: %s", tool.program, "present" if present else "absent")
    return present

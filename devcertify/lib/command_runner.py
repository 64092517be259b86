"""External process execution with optional elevation."""

import subprocess
from pathlib import Path

from .logging_config import LOGGER
from .models import CommandResult

POWERSHELL = "powershell.exe"
POWERSHELL_BASE_ARGS = ["-NoProfile", "-ExecutionPolicy", "Bypass"]

LAUNCH_FAILURE_EXIT_CODE = -1


def powershell_quote(value: str) -> str:
    """Quote a literal as a single-quoted PowerShell string."""
    return "'" + value.replace("'", "''") + "'"


def elevation_wrapper(program: str, args: list[str], cwd: Path | None = None) -> str:
    """Render the PowerShell command that relaunches ``program`` through UAC.

    Start-Process raises when the prompt is declined. With the Stop
    preference that error reaches the catch block and the wrapper exits 1;
    a missing process object is treated the same way.
    """
    start = f"$p = Start-Process -FilePath {powershell_quote(program)}"
    if args:
        start += f" -ArgumentList {powershell_quote(subprocess.list2cmdline(args))}"
    if cwd is not None:
        start += f" -WorkingDirectory {powershell_quote(str(cwd))}"
    start += " -Verb RunAs -Wait -PassThru"

    return (
        "$ErrorActionPreference = 'Stop'; "
        f"try {{ {start}; if ($null -eq $p) {{ exit 1 }}; exit $p.ExitCode }} "
        "catch { Write-Error $_; exit 1 }"
    )


class CommandRunner:
    """Runs external programs and reports their exit status and output."""

    def __init__(self, elevation_supported: bool = False) -> None:
        """Initialize runner.

        Args:
            elevation_supported: True where elevated calls go through a UAC
                prompt (Windows). Elsewhere ``elevated`` is ignored and the
                caller is expected to already hold the needed privileges.
        """
        self.elevation_supported = elevation_supported

    def run(
        self,
        program: str,
        args: list[str],
        elevated: bool = False,
        timeout: float | None = None,
        cwd: Path | None = None,
    ) -> CommandResult:
        """Run ``program`` with ``args`` and wait for it to exit.

        Launch failures and timeouts are logged and returned as a failed
        result; this method does not raise for them.

        Args:
            program: Executable name or path
            args: Arguments, passed without shell interpretation
            elevated: Request administrative privileges
            timeout: Seconds to wait before killing the process (None waits forever)
            cwd: Working directory for the child process

        Returns:
            CommandResult; elevated results carry no captured output
        """
        command_line = subprocess.list2cmdline([program, *args])
        LOGGER.debug("Running: %s", command_line)

        if elevated and self.elevation_supported:
            return self._run_elevated(program, args, timeout, cwd)
        return self._run_captured(program, args, timeout, cwd)

    def _run_captured(
        self,
        program: str,
        args: list[str],
        timeout: float | None,
        cwd: Path | None,
    ) -> CommandResult:
        try:
            completed = subprocess.run(
                [program, *args],
                capture_output=True,
                text=True,
                timeout=timeout,
                cwd=cwd,
                check=False,
            )
        except subprocess.TimeoutExpired:
            message = f"'{program}' did not exit within {timeout} seconds"
            LOGGER.warning(message)
            return CommandResult(exit_code=LAUNCH_FAILURE_EXIT_CODE, stderr=message)
        except OSError as e:
            message = f"Error running command '{program}': {e}"
            LOGGER.warning(message)
            return CommandResult(exit_code=LAUNCH_FAILURE_EXIT_CODE, stderr=message)

        if completed.stdout.strip():
            LOGGER.info("%s output:\n%s", program, completed.stdout.rstrip())
        if completed.stderr.strip():
            LOGGER.info("%s error:\n%s", program, completed.stderr.rstrip())

        return CommandResult(
            exit_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )

    def _run_elevated(
        self,
        program: str,
        args: list[str],
        timeout: float | None,
        cwd: Path | None,
    ) -> CommandResult:
        """Run through Start-Process -Verb RunAs, which shows the UAC prompt.

        The elevated child gets its own console, so its streams cannot be
        redirected back here. A declined prompt exits the wrapper with 1
        (see ``elevation_wrapper``).
        """
        LOGGER.info(
            "Running '%s' with elevated privileges, output will not be captured",
            program,
        )
        wrapper = elevation_wrapper(program, args, cwd)

        try:
            completed = subprocess.run(
                [POWERSHELL, *POWERSHELL_BASE_ARGS, "-Command", wrapper],
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            message = f"elevated '{program}' did not exit within {timeout} seconds"
            LOGGER.warning(message)
            return CommandResult(exit_code=LAUNCH_FAILURE_EXIT_CODE, captured=False)
        except OSError as e:
            LOGGER.warning("Error running elevated command '%s': %s", program, e)
            return CommandResult(exit_code=LAUNCH_FAILURE_EXIT_CODE, captured=False)

        if completed.returncode != 0:
            LOGGER.warning(
                "Elevated '%s' exited with %d (the UAC prompt may have been declined)",
                program,
                completed.returncode,
            )
        return CommandResult(exit_code=completed.returncode, captured=False)

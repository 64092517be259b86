"""mkcert installation through platform package managers."""

from .command_runner import CommandRunner
from .logging_config import LOGGER
from .platforms import PlatformCapabilities
from .tool_probe import probe_tool


def install_tool(
    runner: CommandRunner,
    capabilities: PlatformCapabilities,
    probe_timeout: float,
) -> bool:
    """Try each package-manager candidate in order until one installs mkcert.

    A candidate whose probe fails is skipped; a failed install falls through
    to the next candidate. Each install command runs exactly once.

    Returns:
        True if some candidate reported success
    """
    if not capabilities.package_managers:
        LOGGER.info(
            "No automated mkcert installation is available on %s",
            capabilities.kind.value,
        )
        return False

    for manager in capabilities.package_managers:
        LOGGER.info("Attempting to install mkcert via %s...", manager.name)
        if not probe_tool(runner, manager.probe, timeout=probe_timeout):
            LOGGER.info("%s is not installed, skipping", manager.name)
            continue

        result = runner.run(
            manager.probe.program,
            list(manager.install_args),
            elevated=manager.elevated,
        )
        if result.succeeded:
            LOGGER.info("mkcert installed via %s", manager.name)
            return True
        LOGGER.warning("%s installation of mkcert failed", manager.name)

    return False

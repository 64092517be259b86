"""Per-OS capabilities, resolved once at startup."""

import platform
from dataclasses import dataclass, field
from enum import Enum

from .tool_probe import CHOCOLATEY, HOMEBREW, SCOOP, ToolInvocation

MKCERT_PACKAGE = "mkcert"


class PlatformKind(Enum):
    WINDOWS = "Windows"
    MACOS = "Darwin"
    LINUX = "Linux"
    OTHER = "Other"


@dataclass(frozen=True)
class PackageManager:
    """A package manager that can install mkcert."""

    name: str
    probe: ToolInvocation
    install_args: tuple[str, ...]
    elevated: bool = False
    install_hint: str = ""


@dataclass(frozen=True)
class PlatformCapabilities:
    """Everything in the pipeline that differs by operating system."""

    kind: PlatformKind
    package_managers: tuple[PackageManager, ...] = field(default_factory=tuple)
    supports_elevation_prompt: bool = False
    supports_privileged_binding: bool = False


CHOCOLATEY_MANAGER = PackageManager(
    name="Chocolatey",
    probe=CHOCOLATEY,
    install_args=("install", MKCERT_PACKAGE, "-y"),
    elevated=True,
    install_hint="Install choco (https://chocolatey.org/install), then 'choco install mkcert'",
)
SCOOP_MANAGER = PackageManager(
    name="Scoop",
    probe=SCOOP,
    install_args=("install", MKCERT_PACKAGE),
    install_hint="Install scoop (https://scoop.sh/), then 'scoop install mkcert'",
)
HOMEBREW_MANAGER = PackageManager(
    name="Homebrew",
    probe=HOMEBREW,
    install_args=("install", MKCERT_PACKAGE),
    install_hint="Install brew (https://brew.sh/), then 'brew install mkcert'",
)

_CAPABILITIES = {
    PlatformKind.WINDOWS: PlatformCapabilities(
        kind=PlatformKind.WINDOWS,
        package_managers=(CHOCOLATEY_MANAGER, SCOOP_MANAGER),
        supports_elevation_prompt=True,
        supports_privileged_binding=True,
    ),
    PlatformKind.MACOS: PlatformCapabilities(
        kind=PlatformKind.MACOS,
        package_managers=(HOMEBREW_MANAGER,),
    ),
    # Too many distro package managers to automate reliably.
    PlatformKind.LINUX: PlatformCapabilities(kind=PlatformKind.LINUX),
    PlatformKind.OTHER: PlatformCapabilities(kind=PlatformKind.OTHER),
}


def resolve_platform(system: str | None = None) -> PlatformCapabilities:
    """Return capabilities for ``system`` (defaults to ``platform.system()``)."""
    name = system if system is not None else platform.system()
    try:
        kind = PlatformKind(name)
    except ValueError:
        kind = PlatformKind.OTHER
    return _CAPABILITIES[kind]

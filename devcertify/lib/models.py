"""Data and result models for certificate provisioning."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class IssuanceStrategy(Enum):
    """How the certificate is produced."""

    AUTOMATED_TRUST = "mkcert"
    MANUAL = "openssl"


@dataclass
class CommandResult:
    """Outcome of one external process invocation.

    Elevated invocations run outside our process group, so their output is
    never captured: ``captured`` is False and both streams are empty.
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    captured: bool = True

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class CertificateBundle:
    """Hostname-derived artifact paths for one certificate."""

    hostname: str
    key_path: Path
    csr_path: Path
    cert_path: Path
    bundle_path: Path
    raw_bundle_path: Path

    def artifacts(self) -> list[Path]:
        """All files a run for this hostname may leave behind."""
        return [
            self.key_path,
            self.csr_path,
            self.cert_path,
            self.bundle_path,
            self.raw_bundle_path,
        ]


@dataclass(frozen=True)
class BindingTarget:
    """IIS HTTPS listener to create or replace."""

    site_name: str
    port: int
    hostname: str

    @property
    def binding_information(self) -> str:
        return f"*:{self.port}:{self.hostname}"


@dataclass
class BundleInfo:
    """Certificate details read back from a PKCS#12 bundle."""

    common_name: str
    dns_names: list[str]
    ip_addresses: list[str]
    thumbprint: str
    not_valid_after: datetime


@dataclass
class ProvisionResult:
    """Result from a provisioning run.

    ``certificate_generated`` and ``binding_configured`` are reported
    separately: a failed IIS binding does not undo a generated certificate.
    """

    strategy: IssuanceStrategy
    hostname: str
    certificate_generated: bool
    bundle: CertificateBundle | None = None
    bundle_info: BundleInfo | None = None
    binding_attempted: bool = False
    binding_configured: bool = False
    guidance: list[str] = field(default_factory=list)

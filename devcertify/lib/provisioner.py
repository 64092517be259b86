"""Certificate provisioning orchestrator."""

from pathlib import Path

from .bundle_inspector import inspect_bundle
from .command_runner import CommandRunner
from .config import DevCertConfig
from .errors import ProvisioningError
from .guidance import (
    iis_manual_binding_guidance,
    manual_trust_guidance,
    mkcert_next_steps,
    restart_reminder,
)
from .iis_binding import configure_iis_binding
from .issuers import AutomatedTrustIssuer, ManualIssuer
from .logging_config import LOGGER
from .models import BindingTarget, CertificateBundle, IssuanceStrategy, ProvisionResult
from .platforms import PlatformCapabilities


class Provisioner:
    """Runs issuance, then IIS binding or manual guidance, for one hostname."""

    def __init__(
        self,
        config: DevCertConfig,
        capabilities: PlatformCapabilities,
        runner: CommandRunner | None = None,
    ) -> None:
        """Initialize provisioner.

        Args:
            config: Provisioning settings
            capabilities: Platform capabilities resolved at startup
            runner: Command runner; defaults to one matching the platform's
                elevation support
        """
        self.config = config
        self.capabilities = capabilities
        self.runner = runner or CommandRunner(
            elevation_supported=capabilities.supports_elevation_prompt
        )

    def _issue(
        self, strategy: IssuanceStrategy, hostname: str, directory: Path
    ) -> CertificateBundle:
        if strategy is IssuanceStrategy.MANUAL:
            return ManualIssuer(self.runner, self.config).issue(hostname, directory)
        return AutomatedTrustIssuer(self.runner, self.capabilities, self.config).issue(
            hostname, directory
        )

    def provision(
        self,
        strategy: IssuanceStrategy,
        hostname: str,
        directory: Path,
    ) -> ProvisionResult:
        """Provision a certificate for ``hostname`` in ``directory``.

        Issuance failures are logged and reported in the result rather than
        raised. Guidance lines are logged as they are produced and also
        returned on the result.

        Args:
            strategy: mkcert (automated trust) or openssl (manual)
            hostname: Name to certify
            directory: Output directory for certificate artifacts

        Returns:
            ProvisionResult with per-phase success flags

        Raises:
            ValueError: If hostname is empty
        """
        if not hostname or not hostname.strip():
            raise ValueError("hostname must not be empty")

        result = ProvisionResult(strategy=strategy, hostname=hostname, certificate_generated=False)

        try:
            bundle = self._issue(strategy, hostname, directory)
        except ProvisioningError as e:
            LOGGER.error("Certificate generation failed: %s", e)
            self._emit(result, e.guidance)
            return result

        result.certificate_generated = True
        result.bundle = bundle
        self._inspect(result, bundle)

        password = self.config.bundle_password
        if strategy is IssuanceStrategy.MANUAL:
            self._emit(result, manual_trust_guidance(self.capabilities, bundle, password))
        elif self.capabilities.supports_privileged_binding:
            self._bind(result, bundle)
        else:
            self._emit(result, mkcert_next_steps(self.capabilities, bundle, password))

        self._emit(result, restart_reminder())
        return result

    def _inspect(self, result: ProvisionResult, bundle: CertificateBundle) -> None:
        try:
            info = inspect_bundle(bundle.bundle_path, self.config.bundle_password)
        except (OSError, ValueError) as e:
            LOGGER.warning("Could not read back %s: %s", bundle.bundle_path.name, e)
            return

        result.bundle_info = info
        LOGGER.info(
            "A certificate for '%s' has been created as '%s'",
            info.common_name,
            bundle.bundle_path,
        )
        LOGGER.info("  SANs: %s", ", ".join([*info.dns_names, *info.ip_addresses]))
        LOGGER.info("  Thumbprint: %s", info.thumbprint)
        LOGGER.info("  Expires: %s", info.not_valid_after.isoformat())

    def _bind(self, result: ProvisionResult, bundle: CertificateBundle) -> None:
        target = BindingTarget(
            site_name=self.config.iis_site_name,
            port=self.config.https_port,
            hostname=bundle.hostname,
        )
        LOGGER.info("Attempting to configure IIS binding for '%s'...", target.site_name)
        result.binding_attempted = True

        password = self.config.bundle_password
        if configure_iis_binding(self.runner, bundle.bundle_path, password, target):
            result.binding_configured = True
            LOGGER.info(
                "Successfully configured IIS for '%s' with the new certificate.",
                target.site_name,
            )
            LOGGER.info(
                "You might need to restart IIS (iisreset) or your application pool "
                "for changes to take effect."
            )
            return

        self._emit(result, iis_manual_binding_guidance(bundle, password))

    @staticmethod
    def _emit(result: ProvisionResult, lines: list[str]) -> None:
        for line in lines:
            LOGGER.info(line)
        result.guidance.extend(lines)

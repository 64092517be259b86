"""Certificate issuance: mkcert with a trusted local CA, or self-signed via openssl."""

from dataclasses import replace
from pathlib import Path

from .artifacts import bundle_for, remove_stale_artifacts, rename_bundle
from .command_runner import CommandRunner
from .config import DevCertConfig
from .errors import CommandFailedError, ProvisioningError, ToolUnavailableError
from .guidance import mkcert_install_guidance, openssl_missing_guidance
from .installer import install_tool
from .logging_config import LOGGER
from .models import CertificateBundle
from .openssl_config import EXTENSIONS_SECTION, write_openssl_config
from .platforms import PlatformCapabilities
from .tool_probe import MKCERT, OPENSSL, probe_tool


def _run_step(
    runner: CommandRunner,
    description: str,
    program: str,
    args: list[str],
    directory: Path,
    elevated: bool = False,
    guidance: list[str] | None = None,
) -> None:
    """Run one pipeline step, raising CommandFailedError if it fails."""
    result = runner.run(program, args, elevated=elevated, cwd=directory)
    if not result.succeeded:
        raise CommandFailedError(f"Failed to {description}", result, guidance)


class AutomatedTrustIssuer:
    """Issues certificates with mkcert, whose local CA is installed into the trust store."""

    def __init__(
        self,
        runner: CommandRunner,
        capabilities: PlatformCapabilities,
        config: DevCertConfig,
    ) -> None:
        self.runner = runner
        self.capabilities = capabilities
        self.config = config

    def ensure_mkcert(self) -> None:
        """Probe for mkcert and install it if missing.

        Raises:
            ToolUnavailableError: If mkcert is absent and no installation worked
        """
        if probe_tool(self.runner, MKCERT, timeout=self.config.probe_timeout):
            LOGGER.info("mkcert is installed. Proceeding with certificate generation...")
            return

        LOGGER.info("mkcert is not found on your system. Attempting to install it...")
        if not install_tool(self.runner, self.capabilities, self.config.probe_timeout):
            raise ToolUnavailableError(
                "mkcert is not installed", mkcert_install_guidance(self.capabilities)
            )
        LOGGER.info("mkcert installed successfully.")

    def issue(self, hostname: str, directory: Path) -> CertificateBundle:
        """Install the mkcert CA and export a PKCS#12 bundle for ``hostname``.

        Args:
            hostname: Name to certify
            directory: Where mkcert writes its bundle

        Returns:
            CertificateBundle whose bundle_path is ``<hostname>.pfx``, or the
            ``.p12`` mkcert wrote if it could not be renamed

        Raises:
            ProvisioningError: If mkcert is unavailable or a step fails
        """
        bundle = bundle_for(hostname, directory)
        self.ensure_mkcert()

        LOGGER.info("Step 1: Installing local mkcert CA...")
        _run_step(
            self.runner,
            "install mkcert CA",
            MKCERT.program,
            ["-install"],
            directory,
            elevated=True,
            guidance=[
                "Please ensure you have necessary permissions "
                "(e.g., run as administrator/sudo)."
            ],
        )
        LOGGER.info("Local mkcert CA installed successfully.")

        LOGGER.info("Step 2: Generating certificate for '%s'...", hostname)
        remove_stale_artifacts(bundle.artifacts())
        _run_step(
            self.runner,
            f"generate {hostname} certificate",
            MKCERT.program,
            ["-pkcs12", hostname],
            directory,
        )
        LOGGER.info("Certificate '%s' generated successfully.", bundle.raw_bundle_path.name)

        # The .pfx extension is what certlm.msc and IIS expect.
        if bundle.raw_bundle_path.exists() and not rename_bundle(
            bundle.raw_bundle_path, bundle.bundle_path
        ):
            LOGGER.warning("Continuing with '%s'", bundle.raw_bundle_path.name)
            return replace(bundle, bundle_path=bundle.raw_bundle_path)

        return bundle


class ManualIssuer:
    """Issues a self-signed certificate with four openssl invocations."""

    def __init__(
        self,
        runner: CommandRunner,
        config: DevCertConfig,
    ) -> None:
        self.runner = runner
        self.config = config

    def issue(self, hostname: str, directory: Path) -> CertificateBundle:
        """Generate key, CSR, self-signed certificate and PKCS#12 bundle.

        openssl must already be installed; no installation is attempted.

        Raises:
            ProvisioningError: If openssl is missing, the config cannot be
                written, or any openssl step fails
        """
        bundle = bundle_for(hostname, directory)
        if not probe_tool(self.runner, OPENSSL, timeout=self.config.probe_timeout):
            raise ToolUnavailableError("openssl is not installed", openssl_missing_guidance())

        LOGGER.info("Generating OpenSSL certificate for '%s'...", hostname)
        config_path = directory / self.config.openssl_config_filename
        remove_stale_artifacts([*bundle.artifacts(), config_path])

        try:
            write_openssl_config(config_path, hostname, self.config.subject_for(hostname))
        except OSError as e:
            raise ProvisioningError(f"Error creating OpenSSL config file: {e}") from e
        LOGGER.info("Created OpenSSL config file: %s", config_path.name)

        key, csr, cert, pfx = (
            bundle.key_path.name,
            bundle.csr_path.name,
            bundle.cert_path.name,
            bundle.bundle_path.name,
        )
        cfg = config_path.name
        openssl = OPENSSL.program

        LOGGER.info("Generating private key (%d-bit RSA)...", self.config.key_size)
        _run_step(
            self.runner,
            "generate private key",
            openssl,
            ["genrsa", "-out", key, str(self.config.key_size)],
            directory,
        )

        LOGGER.info("Generating Certificate Signing Request (CSR)...")
        _run_step(
            self.runner,
            "generate CSR",
            openssl,
            ["req", "-new", "-key", key, "-out", csr, "-config", cfg],
            directory,
        )

        LOGGER.info(
            "Generating self-signed certificate (valid for %d days)...",
            self.config.validity_days,
        )
        _run_step(
            self.runner,
            "generate self-signed certificate",
            openssl,
            [
                "x509",
                "-req",
                "-days",
                str(self.config.validity_days),
                "-in",
                csr,
                "-signkey",
                key,
                "-out",
                cert,
                "-extfile",
                cfg,
                "-extensions",
                EXTENSIONS_SECTION,
            ],
            directory,
        )

        LOGGER.info("Exporting certificate to PFX format...")
        _run_step(
            self.runner,
            "export certificate to PFX",
            openssl,
            [
                "pkcs12",
                "-export",
                "-out",
                pfx,
                "-inkey",
                key,
                "-in",
                cert,
                "-password",
                f"pass:{self.config.bundle_password}",
            ],
            directory,
        )

        LOGGER.info("OpenSSL certificate generation complete! '%s' created.", pfx)
        return bundle

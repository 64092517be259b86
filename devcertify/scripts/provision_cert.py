#!/usr/bin/env python3
"""Provision a locally-trusted TLS certificate for a development hostname."""

import argparse
import sys
from pathlib import Path

from devcertify.lib.config import DEFAULT_IIS_SITE, LOOPBACK_HOSTNAME, DevCertConfig
from devcertify.lib.logging_config import LOGGER, configure_log_level
from devcertify.lib.models import IssuanceStrategy
from devcertify.lib.platforms import resolve_platform
from devcertify.lib.provisioner import Provisioner

EPILOG = """\
methods:
  mkcert (default)  installs mkcert if needed (Chocolatey/Scoop on Windows,
                    Homebrew on macOS), installs its local CA into the system
                    trust store and exports <hostname>.pfx. On Windows the
                    certificate is also imported and bound to an IIS site.
  --openssl         generates <hostname>.key/.csr/.crt/.pfx with openssl.
                    openssl must already be installed; trust is set up manually.

Run from an administrator/sudo terminal: installing the CA, installing mkcert
and configuring IIS need elevated privileges.

troubleshooting:
  - IIS configuration fails: Install-Module IISAdministration -Scope AllUsers
  - Restart the web server (iisreset for IIS) and clear the browser cache.
  - For a custom hostname add '127.0.0.1 <hostname>' to your hosts file.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devcertify",
        description="Create a trusted SSL certificate for localhost or a custom domain",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "hostname",
        nargs="*",
        help=f"Domain to certify; the last one given is used (default: {LOOPBACK_HOSTNAME})",
    )
    parser.add_argument(
        "--openssl",
        action="store_true",
        help="Use openssl to create a self-signed certificate instead of mkcert",
    )
    parser.add_argument(
        "--site",
        default=DEFAULT_IIS_SITE,
        help=f"IIS site to bind on Windows (default: {DEFAULT_IIS_SITE})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory for certificate artifacts (default: current directory)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every command line that is run",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Provision a certificate.

    Returns:
        Exit code (0 if the certificate was generated, 1 otherwise)
    """
    args = build_parser().parse_intermixed_args(argv)
    configure_log_level(args.verbose)

    hostname = args.hostname[-1] if args.hostname else LOOPBACK_HOSTNAME
    strategy = IssuanceStrategy.MANUAL if args.openssl else IssuanceStrategy.AUTOMATED_TRUST

    try:
        config = DevCertConfig(iis_site_name=args.site)
        capabilities = resolve_platform()
        provisioner = Provisioner(config, capabilities)

        LOGGER.info(
            "Using %s method to create certificate for: %s", strategy.value, hostname
        )
        args.output_dir.mkdir(parents=True, exist_ok=True)
        result = provisioner.provision(strategy, hostname, args.output_dir)

        if not result.certificate_generated:
            LOGGER.error("Failed to generate certificate for %s", hostname)
            return 1

        LOGGER.info("Certificate generation complete: %s", result.bundle.bundle_path)
        return 0

    except ValueError as e:
        LOGGER.error("Invalid input: %s", e)
        return 1
    except Exception as e:
        LOGGER.error("Certificate provisioning failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())

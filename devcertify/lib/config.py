"""Provisioning configuration dataclasses and well-known constants."""

from dataclasses import dataclass

LOOPBACK_HOSTNAME = "localhost"
LOOPBACK_ADDRESS = "127.0.0.1"

# PKCS#12 needs a password; mkcert uses this one and openssl exports reuse it.
BUNDLE_PASSWORD = "changeit"

# Not derived from the hostname: two hostnames in one directory share it.
OPENSSL_CONFIG_FILENAME = "openssl.cfg"

PROBE_TIMEOUT_SECONDS = 5
DEFAULT_IIS_SITE = "Default Web Site"
DEFAULT_HTTPS_PORT = 443


@dataclass
class SubjectName:
    """X.509 subject used for the openssl certificate request."""

    country: str
    state: str
    locality: str
    organization: str
    organizational_unit: str
    common_name: str

    def to_openssl_fields(self) -> list[tuple[str, str]]:
        """Return (short name, value) pairs for a [req_distinguished_name] section."""
        return [
            ("C", self.country),
            ("ST", self.state),
            ("L", self.locality),
            ("O", self.organization),
            ("OU", self.organizational_unit),
            ("CN", self.common_name),
        ]


@dataclass
class DevCertConfig:
    """Settings for one provisioning run."""

    country: str = "US"
    state: str = "State"
    locality: str = "City"
    organization: str = "DevCertify"
    organizational_unit: str = "Development"
    key_size: int = 2048
    validity_days: int = 3650
    bundle_password: str = BUNDLE_PASSWORD
    openssl_config_filename: str = OPENSSL_CONFIG_FILENAME
    iis_site_name: str = DEFAULT_IIS_SITE
    https_port: int = DEFAULT_HTTPS_PORT
    probe_timeout: float = PROBE_TIMEOUT_SECONDS

    def subject_for(self, hostname: str) -> SubjectName:
        """Build the request subject from the fixed fields + hostname as CN."""
        return SubjectName(
            country=self.country,
            state=self.state,
            locality=self.locality,
            organization=self.organization,
            organizational_unit=self.organizational_unit,
            common_name=hostname,
        )

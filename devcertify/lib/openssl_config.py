"""openssl request configuration with Subject Alternative Names."""

from pathlib import Path

from .config import LOOPBACK_ADDRESS, LOOPBACK_HOSTNAME, SubjectName

EXTENSIONS_SECTION = "v3_req"


def subject_alt_names(hostname: str) -> list[tuple[str, str]]:
    """SAN entries in config order; localhost is repeated when hostname is localhost."""
    return [
        ("DNS.1", hostname),
        ("DNS.2", LOOPBACK_HOSTNAME),
        ("IP.1", LOOPBACK_ADDRESS),
    ]


def render_openssl_config(hostname: str, subject: SubjectName) -> str:
    """Render an openssl.cfg for a TLS server certificate request.

    Args:
        hostname: Name placed first in the SAN list
        subject: Distinguished name for [req_distinguished_name]

    Returns:
        Config text usable by ``openssl req -config`` and ``openssl x509 -extfile``
    """
    lines = [
        "[req]",
        "distinguished_name = req_distinguished_name",
        f"x509_extensions = {EXTENSIONS_SECTION}",
        "prompt = no",
        "",
        "[req_distinguished_name]",
    ]
    lines += [f"{name} = {value}" for name, value in subject.to_openssl_fields()]
    lines += [
        "",
        f"[{EXTENSIONS_SECTION}]",
        "keyUsage = critical, digitalSignature, keyEncipherment",
        "extendedKeyUsage = serverAuth",
        "subjectAltName = @alt_names",
        "",
        "[alt_names]",
    ]
    lines += [f"{name} = {value}" for name, value in subject_alt_names(hostname)]
    return "\n".join(lines) + "\n"


def write_openssl_config(path: Path, hostname: str, subject: SubjectName) -> Path:
    """Write the rendered config to ``path`` and return it."""
    path.write_text(render_openssl_config(hostname, subject))
    return path

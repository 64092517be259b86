"""Read certificate details back out of a PKCS#12 bundle."""

from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.serialization import pkcs12

from .models import BundleInfo


def get_thumbprint(cert: x509.Certificate) -> str:
    """Return the SHA-1 fingerprint as upper-case hex (the Windows thumbprint)."""
    return cert.fingerprint(hashes.SHA1()).hex().upper()


def extract_bundle_info(cert: x509.Certificate) -> BundleInfo:
    """Extract subject CN, SANs, thumbprint and expiry from a certificate.

    Raises:
        ValueError: If the certificate has no string common name
    """
    attributes = cert.subject.get_attributes_for_oid(x509.NameOID.COMMON_NAME)
    if not attributes or not isinstance(attributes[0].value, str):
        raise ValueError("certificate has no common name")

    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
        dns_names = san.get_values_for_type(x509.DNSName)
        ip_addresses = [str(ip) for ip in san.get_values_for_type(x509.IPAddress)]
    except x509.ExtensionNotFound:
        dns_names, ip_addresses = [], []

    return BundleInfo(
        common_name=attributes[0].value,
        dns_names=dns_names,
        ip_addresses=ip_addresses,
        thumbprint=get_thumbprint(cert),
        not_valid_after=cert.not_valid_after_utc,
    )


def inspect_bundle(bundle_path: Path, password: str) -> BundleInfo:
    """Load a password-protected PKCS#12 file and describe its certificate.

    Args:
        bundle_path: Path to the .pfx/.p12 file
        password: Bundle password

    Returns:
        BundleInfo for the leaf certificate

    Raises:
        FileNotFoundError: If the bundle does not exist
        ValueError: If the bundle cannot be decrypted or holds no certificate
    """
    _, cert, _ = pkcs12.load_key_and_certificates(
        bundle_path.read_bytes(), password.encode("utf-8")
    )
    if cert is None:
        raise ValueError(f"no certificate in bundle: {bundle_path}")
    return extract_bundle_info(cert)

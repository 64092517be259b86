"""Tests for openssl_config module."""

from pathlib import Path

import pytest

from devcertify.lib.config import DevCertConfig
from devcertify.lib.openssl_config import (
    render_openssl_config,
    subject_alt_names,
    write_openssl_config,
)


def _section(text: str, name: str) -> list[str]:
    """Return the non-empty lines of one [section]."""
    lines = text.splitlines()
    start = lines.index(f"[{name}]") + 1
    body = []
    for line in lines[start:]:
        if line.startswith("["):
            break
        if line.strip():
            body.append(line)
    return body


class TestSubjectAltNames:
    """Tests for the SAN list."""

    @pytest.mark.parametrize("hostname", ["api.dev", "myapp.local", "localhost"])
    def test_always_includes_loopback_in_order(self, hostname: str) -> None:
        assert subject_alt_names(hostname) == [
            ("DNS.1", hostname),
            ("DNS.2", "localhost"),
            ("IP.1", "127.0.0.1"),
        ]

    def test_localhost_is_not_deduplicated(self) -> None:
        values = [value for _, value in subject_alt_names("localhost")]
        assert values.count("localhost") == 2


class TestRenderOpensslConfig:
    """Tests for render_openssl_config."""

    @pytest.fixture
    def rendered(self, dev_config: DevCertConfig) -> str:
        return render_openssl_config("api.dev", dev_config.subject_for("api.dev"))

    def test_req_section_is_non_interactive(self, rendered: str) -> None:
        assert _section(rendered, "req") == [
            "distinguished_name = req_distinguished_name",
            "x509_extensions = v3_req",
            "prompt = no",
        ]

    def test_distinguished_name_uses_hostname_as_cn(self, rendered: str) -> None:
        assert _section(rendered, "req_distinguished_name") == [
            "C = US",
            "ST = State",
            "L = City",
            "O = DevCertify",
            "OU = Development",
            "CN = api.dev",
        ]

    def test_extensions_for_tls_server(self, rendered: str) -> None:
        assert _section(rendered, "v3_req") == [
            "keyUsage = critical, digitalSignature, keyEncipherment",
            "extendedKeyUsage = serverAuth",
            "subjectAltName = @alt_names",
        ]

    def test_alt_names_section(self, rendered: str) -> None:
        assert _section(rendered, "alt_names") == [
            "DNS.1 = api.dev",
            "DNS.2 = localhost",
            "IP.1 = 127.0.0.1",
        ]

    def test_custom_subject_fields(self) -> None:
        config = DevCertConfig(organization="Acme", country="GB")
        rendered = render_openssl_config("acme.test", config.subject_for("acme.test"))

        assert "O = Acme" in rendered
        assert "C = GB" in rendered


class TestWriteOpensslConfig:
    """Tests for write_openssl_config."""

    def test_writes_rendered_text(self, temp_output_dir: Path, dev_config: DevCertConfig) -> None:
        path = temp_output_dir / "openssl.cfg"
        subject = dev_config.subject_for("localhost")

        written = write_openssl_config(path, "localhost", subject)

        assert written == path
        assert path.read_text() == render_openssl_config("localhost", subject)

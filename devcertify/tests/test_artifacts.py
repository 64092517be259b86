"""Tests for artifacts module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from devcertify.lib.artifacts import bundle_for, remove_stale_artifacts, rename_bundle


class TestBundleFor:
    """Tests for hostname-derived artifact names."""

    def test_names_derive_from_hostname(self, temp_output_dir: Path) -> None:
        bundle = bundle_for("api.dev", temp_output_dir)

        assert bundle.key_path == temp_output_dir / "api.dev.key"
        assert bundle.csr_path == temp_output_dir / "api.dev.csr"
        assert bundle.cert_path == temp_output_dir / "api.dev.crt"
        assert bundle.bundle_path == temp_output_dir / "api.dev.pfx"
        assert bundle.raw_bundle_path == temp_output_dir / "api.dev.p12"

    def test_hostname_used_verbatim(self, temp_output_dir: Path) -> None:
        """No validation beyond non-empty: odd names pass through."""
        bundle = bundle_for("Not_A-DNS name", temp_output_dir)
        assert bundle.key_path.name == "Not_A-DNS name.key"

    @pytest.mark.parametrize("hostname", ["", "   "])
    def test_empty_hostname_rejected(self, temp_output_dir: Path, hostname: str) -> None:
        with pytest.raises(ValueError, match="hostname must not be empty"):
            bundle_for(hostname, temp_output_dir)


class TestRemoveStaleArtifacts:
    """Tests for remove_stale_artifacts."""

    def test_removes_existing_files_only(self, temp_output_dir: Path) -> None:
        bundle = bundle_for("localhost", temp_output_dir)
        bundle.key_path.write_text("old key")
        bundle.raw_bundle_path.write_text("old p12")

        removed = remove_stale_artifacts(bundle.artifacts())

        assert removed == [bundle.key_path, bundle.raw_bundle_path]
        assert not any(path.exists() for path in bundle.artifacts())

    def test_leaves_other_hostnames_alone(self, temp_output_dir: Path) -> None:
        other = bundle_for("other.dev", temp_output_dir)
        other.bundle_path.write_text("keep me")

        remove_stale_artifacts(bundle_for("api.dev", temp_output_dir).artifacts())

        assert other.bundle_path.exists()

    def test_failure_is_warning_not_abort(self, temp_output_dir: Path) -> None:
        """A file that cannot be deleted is logged and cleanup continues."""
        locked = temp_output_dir / "locked.pfx"
        stale = temp_output_dir / "stale.key"
        locked.write_text("x")
        stale.write_text("x")
        original_unlink = Path.unlink

        def unlink(self: Path, missing_ok: bool = False) -> None:
            if self == locked:
                raise PermissionError("in use")
            original_unlink(self, missing_ok=missing_ok)

        with (
            patch.object(Path, "unlink", unlink),
            patch("devcertify.lib.artifacts.LOGGER") as mock_logger,
        ):
            removed = remove_stale_artifacts([locked, stale])

        assert removed == [stale]
        assert locked.exists()
        mock_logger.warning.assert_called_once()


class TestRenameBundle:
    """Tests for rename_bundle."""

    def test_renames_file(self, temp_output_dir: Path) -> None:
        source = temp_output_dir / "localhost.p12"
        target = temp_output_dir / "localhost.pfx"
        source.write_bytes(b"bundle")

        assert rename_bundle(source, target) is True
        assert not source.exists()
        assert target.read_bytes() == b"bundle"

    def test_replaces_existing_target(self, temp_output_dir: Path) -> None:
        source = temp_output_dir / "localhost.p12"
        target = temp_output_dir / "localhost.pfx"
        source.write_bytes(b"new")
        target.write_bytes(b"old")

        assert rename_bundle(source, target) is True
        assert target.read_bytes() == b"new"

    def test_failure_returns_false(self, temp_output_dir: Path) -> None:
        with patch("devcertify.lib.artifacts.LOGGER") as mock_logger:
            result = rename_bundle(temp_output_dir / "missing.p12", temp_output_dir / "x.pfx")

        assert result is False
        mock_logger.warning.assert_called_once()

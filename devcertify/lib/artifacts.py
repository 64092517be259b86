"""Hostname-derived artifact names and stale-file cleanup."""

from pathlib import Path

from .logging_config import LOGGER
from .models import CertificateBundle


def bundle_for(hostname: str, directory: Path) -> CertificateBundle:
    """Derive artifact paths for ``hostname`` inside ``directory``.

    Raises:
        ValueError: If hostname is empty
    """
    if not hostname or not hostname.strip():
        raise ValueError("hostname must not be empty")

    return CertificateBundle(
        hostname=hostname,
        key_path=directory / f"{hostname}.key",
        csr_path=directory / f"{hostname}.csr",
        cert_path=directory / f"{hostname}.crt",
        bundle_path=directory / f"{hostname}.pfx",
        raw_bundle_path=directory / f"{hostname}.p12",
    )


def remove_stale_artifacts(paths: list[Path]) -> list[Path]:
    """Delete files left by a previous run.

    A file that cannot be removed is logged as a warning; cleanup goes on
    with the remaining paths.

    Returns:
        Paths that existed and were removed
    """
    removed = []
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        except OSError as e:
            LOGGER.warning("Could not clean up old certificate file %s: %s", path, e)
            continue
        removed.append(path)
        LOGGER.debug("Removed stale artifact %s", path)
    return removed


def rename_bundle(source: Path, target: Path) -> bool:
    """Rename ``source`` to ``target``, replacing any existing target.

    Returns:
        False (after logging a warning) if the rename failed
    """
    try:
        source.replace(target)
    except OSError as e:
        LOGGER.warning("Could not rename %s to %s: %s", source.name, target.name, e)
        return False
    LOGGER.info("Renamed '%s' to '%s'", source.name, target.name)
    return True

"""Permission normalization for build artifacts."""

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)


def normalize_permissions(root: Path, mode: int = 0o777) -> bool:
    """Recursively apply mode to root and everything below it.

    Best-effort: failures are logged and never raised. Symbolic links below
    root are neither changed nor followed.

    Returns:
        True if every entry was updated, False otherwise.

    """
    if not root.is_dir():
        log.warning("Artifact directory not found, skipping chmod: %s", root)
        return False

    walk_errors: list[OSError] = []
    succeeded = _chmod(root, mode)

    # Top-down, so each directory is opened up before it is listed.
    for dirpath, dirnames, filenames in os.walk(root, onerror=walk_errors.append):
        for name in [*dirnames, *filenames]:
            path = Path(dirpath) / name
            if path.is_symlink():
                continue
            succeeded = _chmod(path, mode) and succeeded

    for error in walk_errors:
        log.warning("Failed to list %s: %s", error.filename, error)

    succeeded = succeeded and not walk_errors
    log.info("Set mode %o on %s (complete=%s)", mode, root, succeeded)
    return succeeded


def _chmod(path: Path, mode: int) -> bool:
    try:
        path.chmod(mode)
    except OSError as e:
        log.warning("Failed to chmod %s: %s", path, e)
        return False
    return True

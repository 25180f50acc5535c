"""Resolution of the orchestrator's own location on disk."""

from dataclasses import dataclass
from pathlib import Path

from integration_ci.models.config import RunnerConfig

PACKAGE_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True, kw_only=True)
class InvocationContext:
    """Absolute paths resolved once at start."""

    package_dir: Path
    project_root: Path
    artifact_dir: Path


def resolve_context(
    config: RunnerConfig, package_dir: Path = PACKAGE_DIR
) -> InvocationContext:
    """Resolve the project root and artifact directory.

    Paths are derived from where this package lives, not from the caller's
    working directory. The project root is one level up from the package and
    the artifact directory sits directly under it, unless
    ``config.artifact_dir`` names one explicitly (relative to the working
    directory). Nothing is checked for existence here.
    """
    package_dir = package_dir.resolve()
    project_root = package_dir.parent
    if config.artifact_dir is not None:
        artifact_dir = config.artifact_dir.resolve()
    else:
        artifact_dir = project_root / config.artifact_dir_name
    return InvocationContext(
        package_dir=package_dir,
        project_root=project_root,
        artifact_dir=artifact_dir,
    )

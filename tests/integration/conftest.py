"""Fixtures for integration tests driving stub test runners."""

import stat
from dataclasses import dataclass
from pathlib import Path

import pytest

from integration_ci.context import InvocationContext, resolve_context
from integration_ci.models.config import RunnerConfig

STUB_RUNNER = "stub-runner"

# Records its arguments, environment and umask, then exits with STUB_EXIT_CODE.
STUB_SCRIPT = """#!/bin/sh
echo invoked >> "$STUB_RECORD_DIR/calls"
echo "$@" > "$STUB_RECORD_DIR/args"
env > "$STUB_RECORD_DIR/env"
umask > "$STUB_RECORD_DIR/umask"
touch "$STUB_RECORD_DIR/created"
exit "${STUB_EXIT_CODE:-0}"
"""


@dataclass(frozen=True, kw_only=True)
class StubProject:
    """Temporary project with a stub runner installed in the user bin dir."""

    home: Path
    record_dir: Path
    context: InvocationContext
    config: RunnerConfig

    def base_env(self, exit_code: int = 0) -> dict[str, str]:
        """Return an environment that reaches the stub via HOME only."""
        return {
            "HOME": str(self.home),
            "PATH": "/usr/bin:/bin",
            "STUB_RECORD_DIR": str(self.record_dir),
            "STUB_EXIT_CODE": str(exit_code),
        }

    def recorded(self, name: str) -> str:
        """Return what the stub recorded under name."""
        return (self.record_dir / name).read_text()

    def recorded_env(self) -> dict[str, str]:
        """Return the environment the stub ran with."""
        env: dict[str, str] = {}
        for line in self.recorded("env").splitlines():
            key, sep, value = line.partition("=")
            if sep:
                env[key] = value
        return env

    def make_artifacts(self) -> Path:
        """Create a restrictive artifact tree and return its root."""
        root = self.context.artifact_dir
        deps = root / "release" / "deps"
        deps.mkdir(parents=True)
        (deps / "libnode.rlib").write_text("rlib")
        (deps / "libnode.rlib").chmod(0o600)
        deps.chmod(0o700)
        root.chmod(0o700)
        return root


def mode_of(path: Path) -> int:
    """Return the permission bits of path."""
    return stat.S_IMODE(path.lstat().st_mode)


@pytest.fixture
def stub_project(tmp_path: Path) -> StubProject:
    """Create a project layout with a stub runner under ~/.cargo/bin."""
    home = tmp_path / "home"
    user_bin = home / ".cargo" / "bin"
    user_bin.mkdir(parents=True)
    runner = user_bin / STUB_RUNNER
    runner.write_text(STUB_SCRIPT)
    runner.chmod(0o755)

    record_dir = tmp_path / "records"
    record_dir.mkdir()

    config = RunnerConfig(runner=STUB_RUNNER)
    context = resolve_context(config, tmp_path / "project" / "ci")
    return StubProject(
        home=home, record_dir=record_dir, context=context, config=config
    )

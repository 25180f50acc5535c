"""Configuration for the integration test run."""

from pathlib import Path

from pydantic import Field

from integration_ci.models.base import Model


class RunnerConfig(Model):
    """Fixed invocation parameters for the test runner.

    The defaults describe the CI run: the release profile, output capture
    disabled and only tests whose name contains ``_integration``.
    """

    runner: str = Field(default="cargo", description="Test runner executable")
    subcommand: str = Field(default="test", description="Runner subcommand")
    release: bool = Field(default=True, description="Build in the release profile")
    nocapture: bool = Field(default=True, description="Stream test output directly")
    test_filter: str = Field(
        default="_integration", description="Name filter selecting tests to run"
    )
    user_bin_dir: str = Field(
        default=".cargo/bin",
        description="User-local binary directory, relative to the home directory",
    )
    backtrace_var: str = Field(
        default="RUST_BACKTRACE", description="Diagnostics variable name"
    )
    backtrace: str = Field(default="full", description="Diagnostics variable value")
    umask: int = Field(default=0, ge=0, le=0o777, description="Child file mask")
    artifact_dir_name: str = Field(
        default="target", description="Build output directory under the project root"
    )
    artifact_dir: Path | None = Field(
        default=None,
        description=(
            "Explicit build output directory, replacing the project root lookup "
            "(needed when the package is installed outside the project)"
        ),
    )
    artifact_mode: int = Field(
        default=0o777, ge=0, le=0o7777, description="Mode applied to artifacts"
    )

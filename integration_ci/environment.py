"""Environment configuration for the test runner child process."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from integration_ci.models.config import RunnerConfig

log = logging.getLogger(__name__)


def get_home_dir(base_env: Mapping[str, str]) -> Path | None:
    """Return the user's home directory, preferring ``HOME`` from base_env.

    Returns None when neither ``HOME`` nor the password database knows it.
    """
    if home := base_env.get("HOME"):
        return Path(home)
    try:
        return Path.home()
    except RuntimeError as e:
        log.warning("Cannot determine home directory: %s", e)
        return None


def extend_search_path(search_path: str, directory: Path) -> str:
    """Append directory to a PATH-style string unless already present.

    Appending keeps a globally installed runner ahead of the user-local one.
    """
    if not search_path:
        return str(directory)
    if str(directory) in search_path.split(os.pathsep):
        return search_path
    return os.pathsep.join([search_path, str(directory)])


def build_child_environment(
    config: RunnerConfig,
    base_env: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the environment passed to the test runner.

    Args:
        config: Runner configuration
        base_env: Environment to start from (default: ``os.environ``)

    Returns:
        A new mapping; base_env is left untouched.

    """
    env = dict(os.environ if base_env is None else base_env)

    if (home := get_home_dir(env)) is not None:
        user_bin = home / config.user_bin_dir
        env["PATH"] = extend_search_path(env.get("PATH", ""), user_bin)
    else:
        log.warning("Not extending PATH with %s", config.user_bin_dir)
    env[config.backtrace_var] = config.backtrace

    log.debug(
        "Child environment: PATH=%s %s=%s",
        env.get("PATH"),
        config.backtrace_var,
        config.backtrace,
    )
    return env

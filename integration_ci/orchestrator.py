"""Test-run orchestrator driving one integration test run to completion."""

import logging
import time
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from integration_ci.context import InvocationContext, resolve_context
from integration_ci.environment import build_child_environment
from integration_ci.models.config import RunnerConfig
from integration_ci.models.result import RunOutcome, RunState
from integration_ci.permissions import normalize_permissions
from integration_ci.test_runner import build_command, run_test_suite

log = logging.getLogger(__name__)

EXIT_FAILURE = 1

SuiteRunner: TypeAlias = Callable[[Sequence[str], Mapping[str, str], int], Awaitable[int]]
Cleanup: TypeAlias = Callable[[Path, int], bool]


@dataclass(frozen=True, kw_only=True)
class TestRunOrchestrator:
    """Runs the test suite once and reports its true exit status.

    The steps always happen in the same order: configure the environment,
    invoke the runner, capture its status, normalize artifact permissions,
    terminate. Cleanup runs whatever the status and cannot change it.
    """

    __test__ = False

    config: RunnerConfig
    context: InvocationContext
    base_env: Mapping[str, str] | None = None
    suite_runner: SuiteRunner = run_test_suite
    cleanup: Cleanup = normalize_permissions

    @classmethod
    def from_config(
        cls, config: RunnerConfig, base_env: Mapping[str, str] | None = None
    ) -> "TestRunOrchestrator":
        """Create an orchestrator with paths resolved from the package location."""
        return cls(config=config, context=resolve_context(config), base_env=base_env)

    async def run(self) -> RunOutcome:
        """Run the test suite and return its outcome.

        Returns:
            Outcome whose exit_code is the runner's status, unchanged by
            anything that happens afterwards.

        """
        transitions = [RunState.START]
        started = time.monotonic()

        env = build_child_environment(self.config, self.base_env)
        self._advance(transitions, RunState.ENVIRONMENT_CONFIGURED)

        command = build_command(self.config)
        self._advance(transitions, RunState.TEST_INVOKED)
        try:
            exit_code = await self.suite_runner(command, env, self.config.umask)
        except Exception:
            log.exception("Test runner invocation failed")
            exit_code = EXIT_FAILURE
        self._advance(transitions, RunState.OUTCOME_CAPTURED)
        log.info("Test runner exited with status %d", exit_code)

        cleanup_succeeded = self._normalize_artifacts()
        self._advance(transitions, RunState.CLEANED_UP)

        duration = time.monotonic() - started
        self._advance(transitions, RunState.TERMINATED)

        return RunOutcome(
            exit_code=exit_code,
            duration=duration,
            cleanup_succeeded=cleanup_succeeded,
            command=tuple(command),
            transitions=tuple(transitions),
        )

    def _normalize_artifacts(self) -> bool:
        artifact_dir = self.context.artifact_dir
        try:
            return self.cleanup(artifact_dir, self.config.artifact_mode)
        except Exception:
            log.exception("Permission normalization failed for %s", artifact_dir)
            return False

    @staticmethod
    def _advance(transitions: list[RunState], state: RunState) -> None:
        log.debug("State: %s -> %s", transitions[-1], state)
        transitions.append(state)

"""Models for test run outcomes."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum


class RunState(StrEnum):
    """States of a single orchestrated test run, in order."""

    START = "start"
    ENVIRONMENT_CONFIGURED = "environment_configured"
    TEST_INVOKED = "test_invoked"
    OUTCOME_CAPTURED = "outcome_captured"
    CLEANED_UP = "cleaned_up"
    TERMINATED = "terminated"


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Result of one orchestrated test run.

    ``exit_code`` is the status captured from the test runner. The cleanup
    result is kept apart in ``cleanup_succeeded`` and never feeds into it.
    ``transitions`` ends with TERMINATED at the point the outcome is handed
    back; the process itself exits afterwards with ``exit_code``.
    """

    exit_code: int
    duration: float
    cleanup_succeeded: bool
    command: Sequence[str] = ()
    transitions: Sequence[RunState] = ()

    @property
    def passed(self) -> bool:
        return self.exit_code == 0

"""CLI entry point for the integration test run."""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from integration_ci.models.config import RunnerConfig
from integration_ci.models.result import RunOutcome
from integration_ci.orchestrator import TestRunOrchestrator

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_config(config_json: str) -> RunnerConfig:
    """Parse a JSON object of RunnerConfig overrides."""
    if not config_json.strip():
        return RunnerConfig()
    return RunnerConfig.model_validate(json.loads(config_json))


def log_outcome(log: logging.Logger, outcome: RunOutcome) -> None:
    """Log a one-line summary of the run."""
    log.info(
        "%s: %s exited %d (%.2fs, cleanup %s)",
        "PASSED" if outcome.passed else "FAILED",
        " ".join(outcome.command),
        outcome.exit_code,
        outcome.duration,
        "ok" if outcome.cleanup_succeeded else "incomplete",
    )


async def run(config: RunnerConfig) -> int:
    """Run the integration tests and return the exit code to report."""
    log = logging.getLogger("integration_ci")

    orchestrator = TestRunOrchestrator.from_config(config)
    log.info("Artifact directory: %s", orchestrator.context.artifact_dir)
    outcome = await orchestrator.run()

    log_outcome(log, outcome)
    return outcome.exit_code


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run the integration test suite and normalize artifact permissions"
    )
    parser.add_argument(
        "--config",
        default="",
        help="JSON object overriding runner configuration fields",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args()

    try:
        config = parse_config(args.config)
    except (json.JSONDecodeError, ValidationError) as e:
        parser.error(f"invalid --config: {e}")

    logging.basicConfig(
        level=args.log_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    exit_code = asyncio.run(run(config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()

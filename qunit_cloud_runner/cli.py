"""CLI entry point for running QUnit pages on cloud browsers."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, NoReturn

from qunit_cloud_runner.coordinator import RunCoordinator
from qunit_cloud_runner.models.config import RunConfig
from qunit_cloud_runner.models.platform import PlatformDefaults
from qunit_cloud_runner.models.result import PlatformResult
from qunit_cloud_runner.providers.loading import load_provider_manifest

DEFAULT_PROVIDER = "saucelabs"

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "error": "❗",
}


def log_results_summary(
    log: logging.Logger, results: Sequence[PlatformResult]
) -> None:
    """Log a formatted summary of platform results with job URLs."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for result in results:
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        counts = (
            f" {result.counters.passed}/{result.counters.total}"
            if result.counters
            else ""
        )
        log.info(
            "%s %s: %s%s (%.2fs)",
            symbol,
            result.name,
            result.status,
            counts,
            result.duration,
        )
        if result.job_url:
            log.info("  Job URL: %s", result.job_url)
        if result.message:
            log.info("  Message: %s", result.message)


def load_run_config(path: Path) -> RunConfig:
    """Load a run configuration from a JSON file."""
    return RunConfig.model_validate_json(path.read_text())


async def run(
    provider_key: str,
    provider_config_json: str,
    run_config: RunConfig,
    environ: Mapping[str, str] = os.environ,
) -> int:
    """Run every configured platform and return the exit code."""
    log = logging.getLogger("qunit_cloud_runner")

    log.info("Loading provider: %s", provider_key)
    manifest = load_provider_manifest(provider_key)

    config_dict = {
        **manifest.config_from_env(environ),
        **json.loads(provider_config_json),
    }
    config = manifest.config_cls(**config_dict)
    defaults = PlatformDefaults.from_env(environ)

    async with manifest.provider_factory(config) as provider:
        coordinator = RunCoordinator(
            provider=provider, config=run_config, defaults=defaults
        )
        summary = await coordinator.run_all()

    log_results_summary(log, summary.results)
    log.info("Overall status: %s", "passed" if summary.passed else "failed")

    return summary.exit_code


def configure_logging() -> None:
    """Send diagnostics to stderr, leaving stdout to progress output."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def run_and_exit(
    options: RunConfig | Mapping[str, Any],
    *,
    provider_key: str = DEFAULT_PROVIDER,
    provider_config_json: str = "{}",
) -> NoReturn:
    """Run the given options and exit with 0 if every platform passed, else 1."""
    run_config = (
        options
        if isinstance(options, RunConfig)
        else RunConfig.model_validate(options)
    )

    configure_logging()
    exit_code = asyncio.run(run(provider_key, provider_config_json, run_config))
    sys.exit(exit_code)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run QUnit test pages on cloud browser platforms"
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to the JSON run configuration (urls, platforms, ...)",
    )
    parser.add_argument(
        "--provider",
        default=DEFAULT_PROVIDER,
        help="Provider key (default: saucelabs)",
    )
    parser.add_argument(
        "--provider-config",
        default="{}",
        help="JSON configuration for the provider, overriding the environment",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run platforms one after another instead of all at once",
    )
    parser.add_argument(
        "--zero-assertions-pass",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Whether a page with 0 assertions counts as passed",
    )

    args = parser.parse_args()

    run_config = load_run_config(args.config)
    overrides: dict[str, Any] = {}
    if args.sequential:
        overrides["run_in_parallel"] = False
    if args.zero_assertions_pass is not None:
        overrides["zero_assertions_pass"] = args.zero_assertions_pass
    if overrides:
        run_config = run_config.model_copy(update=overrides)

    run_and_exit(
        run_config,
        provider_key=args.provider,
        provider_config_json=args.provider_config,
    )


if __name__ == "__main__":  # pragma: no cover
    main()

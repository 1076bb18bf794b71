#!/usr/bin/env python3
"""Consume fixtures and validate them against the Python spec.

Usage: python -m tools.consume [--fixtures DIR] [--verbose]
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from multisend_spec.balance_changes import check_multisend
from multisend_spec.config import FIXTURE_FORMAT_VERSION
from tools.config import ToolConfig
from tools.fixtures_io import balances_to_json, case_from_json, changes_key

logger = logging.getLogger(__name__)


def check_case(case: dict[str, Any]) -> str | None:
    """Replay one case; return a failure reason or None."""
    balances, definitions, tx, strict = case_from_json(case)
    result = check_multisend(balances, definitions, tx, strict_denoms=strict)

    expected = case["expected"]
    if result.ok != expected["ok"]:
        return "ok_mismatch"

    actual_err = result.error.code.name if result.error else None
    if actual_err != expected["error"]:
        return f"error_mismatch ({actual_err} != {expected['error']})"

    if changes_key(balances_to_json(result.changes)) != changes_key(expected.get("changes", [])):
        return "changes_mismatch"
    return None


def check_fixture_file(path: Path, stop_on_first_failure: bool = False) -> list[str]:
    failures: list[str] = []
    data = json.loads(path.read_text())

    for case in data.get("cases", []):
        reason = check_case(case)
        if reason is None:
            logger.debug(f"PASS {path.name}::{case['name']}")
            continue
        failures.append(f"{path.name}::{case['name']}: {reason}")
        logger.error(f"FAIL {path.name}::{case['name']}: {reason}")
        if stop_on_first_failure:
            break

    return failures


@click.command()
@click.option("--fixtures", "fixtures_dir", type=click.Path(path_type=Path), default=None,
              help="Fixtures directory (default: $FIXTURES_DIR or ./fixtures)")
@click.option("--verbose", "-v", is_flag=True, help="Log every case")
@click.option("--stop-on-first-failure", is_flag=True, help="Stop at the first failing case")
def main(fixtures_dir: Path | None, verbose: bool, stop_on_first_failure: bool) -> None:
    """Replay every fixture file and compare against expected results."""
    config = ToolConfig.from_env()
    if fixtures_dir is not None:
        config.fixtures_dir = fixtures_dir
    config.verbose = config.verbose or verbose
    config.stop_on_first_failure = config.stop_on_first_failure or stop_on_first_failure

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if not config.fixtures_dir.exists():
        raise click.ClickException(f"fixtures dir not found: {config.fixtures_dir}")

    failures: list[str] = []
    checked = 0
    for path in sorted(config.fixtures_dir.rglob("*.json")):
        data = json.loads(path.read_text())
        if data.get("format_version") != FIXTURE_FORMAT_VERSION:
            logger.warning(f"Skipping {path}: not a multisend fixture file")
            continue
        checked += 1
        failures.extend(check_fixture_file(path, config.stop_on_first_failure))
        if failures and config.stop_on_first_failure:
            break

    if failures:
        logger.error(f"{len(failures)} case(s) failed")
        sys.exit(1)

    logger.info(f"All fixtures passed ({checked} files)")


if __name__ == "__main__":
    main()

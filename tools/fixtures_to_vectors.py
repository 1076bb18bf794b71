#!/usr/bin/env python3
"""Convert multisend fixtures into client-consumable YAML vectors.

Each fixture case becomes a vector carrying the numeric error code and the
digest of the expected balance changes, so other implementations can
compare results without re-serializing them.

Usage: python -m tools.fixtures_to_vectors [--fixtures DIR] [--vectors DIR]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from multisend_spec.changes_digest import compute_changes_digest
from multisend_spec.config import FIXTURE_FORMAT_VERSION
from multisend_spec.errors import ErrorCode
from tools.config import ToolConfig
from tools.yaml_dump import write_yaml

logger = logging.getLogger(__name__)


def _map_error_code(name: str | None) -> int:
    if not name:
        return int(ErrorCode.SUCCESS)
    return int(ErrorCode[name])


def case_to_vector(case: dict[str, Any]) -> dict[str, Any]:
    expected = case.get("expected", {})
    changes = expected.get("changes", [])
    vector: dict[str, Any] = {
        "name": case.get("name", ""),
        "description": case.get("description", ""),
        "input": {
            "original_balances": case.get("original_balances", []),
            "definitions": case.get("definitions", []),
            "tx": case.get("tx", {}),
            "strict_denoms": bool(case.get("strict_denoms", False)),
        },
        "expected": {
            "success": bool(expected.get("ok", False)),
            "error_code": _map_error_code(expected.get("error")),
            "changes_digest": compute_changes_digest(changes),
            "changes": changes,
        },
    }
    return vector


def convert(fixtures: Path, vectors: Path) -> int:
    """Write one YAML vector file per fixture file; return the file count."""
    count = 0
    for path in sorted(fixtures.rglob("*.json")):
        data = json.loads(path.read_text())
        if data.get("format_version") != FIXTURE_FORMAT_VERSION:
            logger.warning(f"Skipping {path}: not a multisend fixture file")
            continue

        dest = (vectors / path.relative_to(fixtures)).with_suffix(".yaml")
        dest.parent.mkdir(parents=True, exist_ok=True)
        write_yaml(
            dest,
            {
                "format_version": FIXTURE_FORMAT_VERSION,
                "test_vectors": [case_to_vector(c) for c in data.get("cases", [])],
            },
        )
        logger.debug(f"Wrote {dest}")
        count += 1
    return count


@click.command()
@click.option("--fixtures", "fixtures_dir", type=click.Path(path_type=Path), default=None)
@click.option("--vectors", "vectors_dir", type=click.Path(path_type=Path), default=None)
@click.option("--verbose", "-v", is_flag=True)
def main(fixtures_dir: Path | None, vectors_dir: Path | None, verbose: bool) -> None:
    """Convert fixtures to vectors."""
    config = ToolConfig.from_env()
    fixtures = (fixtures_dir or config.fixtures_dir).resolve()
    vectors = (vectors_dir or config.vectors_dir).resolve()

    logging.basicConfig(
        level=logging.DEBUG if (verbose or config.verbose) else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if not fixtures.exists():
        raise click.ClickException(f"fixtures dir not found: {fixtures}")

    vectors.mkdir(parents=True, exist_ok=True)
    count = convert(fixtures, vectors)
    logger.info(f"Written {count} vector files into {vectors}")


if __name__ == "__main__":
    main()

"""Pytest hooks that collect multisend cases into fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest

from multisend_spec.balance_changes import CheckResult, check_multisend
from multisend_spec.config import FIXTURE_FORMAT_VERSION
from multisend_spec.types import Balance, DenomDefinition, MultiSend
from tools.fixtures_io import case_to_json

_CASES: dict[str, list[dict[str, Any]]] = {}


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--output",
        action="store",
        default=None,
        help="Output directory for generated fixtures",
    )


@pytest.fixture
def balance_test() -> Callable[..., CheckResult]:
    """Run a multisend case, record it under ``rel_path`` and return the result."""

    def _balance_test(
        rel_path: str,
        name: str,
        original_balances: Sequence[Balance],
        definitions: Sequence[DenomDefinition],
        tx: MultiSend,
        *,
        strict_denoms: bool = False,
        description: str = "",
    ) -> CheckResult:
        result = check_multisend(original_balances, definitions, tx, strict_denoms=strict_denoms)
        _CASES.setdefault(rel_path, []).append(
            case_to_json(
                name,
                original_balances,
                definitions,
                tx,
                result,
                description=description,
                strict_denoms=strict_denoms,
            )
        )
        return result

    return _balance_test


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    output_dir = session.config.getoption("--output")
    if not output_dir:
        return

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    for rel_path, cases in _CASES.items():
        if not cases:
            continue
        target = out / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            json.dumps({"format_version": FIXTURE_FORMAT_VERSION, "cases": cases}, indent=2)
        )

"""YAML helpers for the test vector files.

Vectors are the language-neutral form of the pytest fixtures: each case
carries its inputs plus the expected error code and changes digest, so other
implementations can replay them without this package.
"""

from __future__ import annotations

from pathlib import Path

import yaml


class PlainDumper(yaml.SafeDumper):
    pass


def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=None)


PlainDumper.add_representer(str, _str_representer)


def dump_yaml(data: dict) -> str:
    return yaml.dump(data, Dumper=PlainDumper, sort_keys=False, width=4096)


def write_yaml(path: Path, data: dict) -> None:
    path.write_text(dump_yaml(data))


def load_yaml(path: Path) -> dict:
    return yaml.safe_load(path.read_text())

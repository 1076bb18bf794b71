"""Run pytest and generate multisend fixtures."""

from __future__ import annotations

import os
import subprocess
import sys

from tools.config import ROOT, ToolConfig


def main() -> int:
    config = ToolConfig.from_env()
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join([str(ROOT / "src"), str(ROOT)])

    cmd = [
        sys.executable,
        "-m",
        "pytest",
        str(ROOT / "tests"),
        "-q",
        "--output",
        str(config.fixtures_dir),
    ]
    print("Running:", " ".join(cmd))
    return subprocess.call(cmd, env=env, cwd=str(ROOT))


if __name__ == "__main__":
    raise SystemExit(main())

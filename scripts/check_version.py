#!/usr/bin/env python3
"""Check that opensearch_otel.__version__ matches pyproject.toml.

The package version is reported as the instrumentation version on every
span, so it must not drift from the released distribution version.

Exit codes:
    0: Versions match
    1: Version mismatch or error
"""

from __future__ import annotations

import re
import sys
import tomllib
from pathlib import Path

_VERSION_PATTERN = re.compile(r'^__version__\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def read_package_version(init_file: Path) -> str | None:
    """Return the __version__ declared in a package __init__.py."""
    match = _VERSION_PATTERN.search(init_file.read_text(encoding="utf-8"))
    return match.group(1) if match else None


def read_project_version(pyproject_file: Path) -> str | None:
    """Return the [project] version declared in pyproject.toml."""
    try:
        data = tomllib.loads(pyproject_file.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return None
    return data.get("project", {}).get("version")


def main() -> int:
    root = Path(__file__).parent.parent
    init_file = root / "opensearch_otel" / "__init__.py"
    pyproject_file = root / "pyproject.toml"

    for path in (init_file, pyproject_file):
        if not path.exists():
            print(f"error: {path} not found", file=sys.stderr)
            return 1

    package_version = read_package_version(init_file)
    project_version = read_project_version(pyproject_file)
    if package_version is None or project_version is None:
        print("error: could not read both versions", file=sys.stderr)
        return 1

    if package_version != project_version:
        print(
            f"version mismatch: opensearch_otel/__init__.py={package_version} "
            f"pyproject.toml={project_version}",
            file=sys.stderr,
        )
        return 1

    print(f"version {package_version} is consistent")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""README file discovery."""

from __future__ import annotations

from pathlib import Path

from pushrm import log
from pushrm.errors import ReadmeNotFound

# Checked in this order before falling back to any readme* file.
PREFERRED_NAMES = ("README-containers.md", "README.md")


def find(base: Path) -> Path:
    """Return the README file to push from directory *base*.

    ``README-containers.md`` wins over ``README.md`` so a repo can ship a
    different README for the registry than for git.  Otherwise the first
    file (sorted) whose name starts with ``readme`` in any case is used.
    """
    for name in PREFERRED_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate

    fallback = sorted(
        p for p in base.iterdir()
        if p.is_file() and p.name.lower().startswith("readme")
    )
    if fallback:
        return fallback[0]

    raise ReadmeNotFound(
        "README file not found in the current working directory. Create a file "
        '"README-containers.md" or "README.md" or "cd" into a directory that '
        "contains a README file."
    )


def read(path: str | Path) -> str:
    """Return the content of the README at *path*, line endings untouched."""
    try:
        return Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.debug(f"reading {path} failed: {exc}")
        raise ReadmeNotFound(f"could not read README file: {path}") from exc

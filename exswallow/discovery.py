"""
File discovery and exclusion.
"""
import fnmatch
import logging
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

_SKIP_DIRS = {"venv", ".venv", "__pycache__", "build", "dist", "node_modules"}


def _skipped_dir(part: str) -> bool:
    return part.startswith(".") or part in _SKIP_DIRS


def is_excluded(path: Path, patterns: Iterable[str], root: Optional[Path] = None) -> bool:
    """Match exclusion globs against the POSIX path (relative to root when possible) and the file name."""
    candidates = {path.as_posix(), path.name}
    if root is not None:
        try:
            candidates.add(path.resolve().relative_to(root.resolve()).as_posix())
        except ValueError:
            pass

    return any(
        fnmatch.fnmatch(candidate, pattern)
        for pattern in patterns
        for candidate in candidates
    )


def discover_files(paths: Iterable, exclude: Iterable[str] = (), root: Optional[Path] = None) -> List[Path]:
    """
    Expand files and directories into a sorted list of Python files.

    Explicitly named files are kept even when they are not *.py;
    exclusion globs apply to everything.
    """
    exclude = tuple(exclude)
    if root is None:
        root = Path.cwd()

    found = set()
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            found.add(path)
            continue
        if not path.is_dir():
            raise ValueError(f"Path does not exist: {path}")

        for file_path in path.rglob("*.py"):
            parts = file_path.relative_to(path).parts
            if any(_skipped_dir(p) for p in parts[:-1]):
                continue
            found.add(file_path)

    files = sorted(p for p in found if not is_excluded(p, exclude, root))
    logger.debug("Discovered %d file(s), %d excluded", len(files), len(found) - len(files))
    return files

"""
Changed-file discovery from Git.

Uses the git executable through subprocess (no GitPython dependency at
runtime). Only the file list is read; history is never rewritten.
"""

import subprocess
from pathlib import Path
from typing import List, Tuple


class GitWorkspace:
    """Lists Python files touched in a Git working tree."""

    def __init__(self, repo_path: str):
        self.repo_path = Path(repo_path).resolve()

        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if result.returncode != 0:
            raise ValueError(f"Not a Git repository: {repo_path}")
        self.toplevel = Path(result.stdout.strip()).resolve()

    def _run_git(self, args: List[str], check: bool = True) -> Tuple[int, str, str]:
        result = subprocess.run(
            ["git"] + args,
            cwd=self.toplevel,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if check and result.returncode != 0:
            raise RuntimeError(
                f"Git command failed: {' '.join(args)}\n{result.stderr}"
            )
        return result.returncode, result.stdout, result.stderr

    def changed_files(self, since: str) -> List[Path]:
        """
        Python files changed between `since` and the working tree,
        plus untracked ones. Deleted files are left out.

        Returns absolute paths, sorted.
        """
        _, diff_output, _ = self._run_git(
            ["diff", "--name-only", "--diff-filter=d", since, "--"]
        )
        _, untracked, _ = self._run_git(
            ["ls-files", "--others", "--exclude-standard"]
        )

        names = set(diff_output.splitlines()) | set(untracked.splitlines())
        files = [
            self.toplevel / name
            for name in names
            if name.endswith(".py")
        ]
        return sorted(path for path in files if path.is_file())


def changed_python_files(repo_path: str, since: str) -> List[Path]:
    return GitWorkspace(repo_path).changed_files(since)

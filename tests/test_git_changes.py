import shutil
import tempfile
import time
from pathlib import Path

import git
import pytest

from exswallow.git_changes import GitWorkspace, changed_python_files


def _cleanup(path):
    try:
        shutil.rmtree(path)
    except PermissionError:
        time.sleep(0.1)
        shutil.rmtree(path, ignore_errors=True)


class TestGitWorkspace:
    @staticmethod
    def create_test_repo():
        temp_dir = tempfile.mkdtemp()
        repo = git.Repo.init(temp_dir)

        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        return temp_dir, repo

    @staticmethod
    def add_commit(repo, filename, content, message):
        path = Path(repo.working_dir) / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

        repo.index.add([filename])
        return repo.index.commit(message, author=git.Actor("Test User", "test@example.com"))

    def test_lists_changed_and_untracked_python_files(self):
        temp_dir, repo = self.create_test_repo()
        try:
            base = self.add_commit(repo, "app/a.py", "a = 1\n", "Initial")
            self.add_commit(repo, "app/b.py", "b = 1\n", "Add b")
            self.add_commit(repo, "README.md", "# readme\n", "Docs")
            (Path(temp_dir) / "app" / "a.py").write_text("a = 2\n")
            (Path(temp_dir) / "new.py").write_text("n = 1\n")

            files = changed_python_files(temp_dir, base.hexsha)
            names = [p.relative_to(Path(temp_dir).resolve()).as_posix() for p in files]

            assert names == ["app/a.py", "app/b.py", "new.py"]
        finally:
            _cleanup(temp_dir)

    def test_deleted_files_are_left_out(self):
        temp_dir, repo = self.create_test_repo()
        try:
            base = self.add_commit(repo, "gone.py", "x = 1\n", "Initial")
            self.add_commit(repo, "kept.py", "y = 1\n", "Second")
            repo.index.remove(["gone.py"], working_tree=True)
            repo.index.commit("Remove gone")

            files = GitWorkspace(temp_dir).changed_files(base.hexsha)
            assert [p.name for p in files] == ["kept.py"]
        finally:
            _cleanup(temp_dir)

    def test_works_from_subdirectory(self):
        temp_dir, repo = self.create_test_repo()
        try:
            base = self.add_commit(repo, "pkg/mod.py", "x = 1\n", "Initial")
            (Path(temp_dir) / "pkg" / "mod.py").write_text("x = 2\n")

            files = changed_python_files(str(Path(temp_dir) / "pkg"), base.hexsha)
            assert [p.name for p in files] == ["mod.py"]
        finally:
            _cleanup(temp_dir)

    def test_unknown_revision_raises(self):
        temp_dir, repo = self.create_test_repo()
        try:
            self.add_commit(repo, "a.py", "a = 1\n", "Initial")
            with pytest.raises(RuntimeError):
                changed_python_files(temp_dir, "no-such-ref")
        finally:
            _cleanup(temp_dir)

    def test_not_a_repository(self):
        temp_dir = tempfile.mkdtemp()
        try:
            with pytest.raises(ValueError) as exc_info:
                GitWorkspace(temp_dir)
            assert "Not a Git repository" in str(exc_info.value)
        finally:
            _cleanup(temp_dir)

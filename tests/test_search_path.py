import os
import stat

import pytest

from devsetup.core.errors import ConfigurationFailure
from devsetup.core.search_path import DurableSearchPath


def _make_executable(directory, name):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text("#!/bin/sh\necho 1.2.3\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


def test_missing_path_file_has_no_entries(tmp_path):
    assert DurableSearchPath(tmp_path / "path").persisted_entries() == []


def test_add_persists_entry_once(tmp_path):
    search_path = DurableSearchPath(tmp_path / "cfg" / "path")
    assert search_path.add(tmp_path / "bin") is True
    assert search_path.add(tmp_path / "bin") is False
    assert search_path.persisted_entries() == [str(tmp_path / "bin")]


def test_entries_reread_after_external_change(tmp_path, monkeypatch):
    """An entry written by another writer is visible to the next lookup."""
    monkeypatch.setenv("PATH", "")
    path_file = tmp_path / "path"
    search_path = DurableSearchPath(path_file)
    _make_executable(tmp_path / "tools", "mytool")

    assert search_path.which("mytool") is None
    path_file.write_text(str(tmp_path / "tools") + "\n")
    assert search_path.which("mytool") == str(tmp_path / "tools" / "mytool")


def test_extra_dirs_are_searched(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", "")
    _make_executable(tmp_path / "local-bin", "jupyter-lab")
    search_path = DurableSearchPath(tmp_path / "path", extra_dirs=[tmp_path / "local-bin"])

    assert search_path.which("jupyter-lab") is not None


def test_entries_are_deduplicated(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", os.pathsep.join(["/usr/bin", "/usr/bin"]))
    path_file = tmp_path / "path"
    path_file.write_text("/usr/bin\n# comment\n\n/opt/bin\n")

    assert DurableSearchPath(path_file).entries() == ["/usr/bin", "/opt/bin"]


def test_unwritable_path_file_is_configuration_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    search_path = DurableSearchPath(blocker / "path")

    with pytest.raises(ConfigurationFailure):
        search_path.add(tmp_path / "bin")

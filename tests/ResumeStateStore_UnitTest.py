# ----------------------------------------------------------------------
# |
# |  ResumeStateStore_UnitTest.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-07 10:22:04
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""Unit tests for ResumeStateStore.py"""

from pathlib import Path
from unittest import mock

import pytest

from DirBackup.BackupJob import BackupJob, BackupMode
from DirBackup.Paths import Paths
from DirBackup.ResumeStateStore import *


# ----------------------------------------------------------------------
@pytest.fixture
def store(tmp_path) -> ResumeStateStore:
    return ResumeStateStore(Paths.Create(tmp_path / "state", tmp_path / "logs"))


# ----------------------------------------------------------------------
def test_Empty(store):
    assert store.HasRecoverableJob() is False
    assert store.HasPendingJob() is False
    assert store.LoadRecoverableJob() is None
    assert store.ReadPendingRecord() is None


# ----------------------------------------------------------------------
class TestBeginPendingJob:
    # ----------------------------------------------------------------------
    def test_Standard(self, store):
        assert store.BeginPendingJob(Path("/source/dir"), Path("/dest/dir"), BackupMode.mirror)

        assert store.ReadPendingRecord() == ("/source/dir", "/dest/dir", "mirror")
        assert store.HasPendingJob()
        assert not store.paths.recoverable.exists()

    # ----------------------------------------------------------------------
    def test_FieldOrder(self, store):
        store.BeginPendingJob(Path("/b"), Path("/a"))

        lines = store.ReadPendingRecord()

        assert lines is not None
        assert lines[:2] == ("/b", "/a")

    # ----------------------------------------------------------------------
    def test_Overwrite(self, store):
        store.BeginPendingJob(Path("/first/source"), Path("/first/dest"))
        store.BeginPendingJob(Path("/second/source"), Path("/second/dest"), BackupMode.mirror)

        assert store.ReadPendingRecord() == ("/second/source", "/second/dest", "mirror")

    # ----------------------------------------------------------------------
    def test_PendingIsRecoverable(self, store):
        # A pending record without a recoverable one means that the process terminated during the copy
        store.BeginPendingJob(Path("/source"), Path("/dest"), BackupMode.mirror)

        assert store.HasRecoverableJob()
        assert store.LoadRecoverableJob() == BackupJob(Path("/source"), Path("/dest"), BackupMode.mirror)

    # ----------------------------------------------------------------------
    def test_WriteError(self, store):
        with mock.patch.object(Path, "write_text", side_effect=PermissionError("Access is denied")):
            assert store.BeginPendingJob(Path("/source"), Path("/dest")) is False

        assert store.HasRecoverableJob() is False

    # ----------------------------------------------------------------------
    def test_StateDirBlocked(self, tmp_path):
        (tmp_path / "state").write_text("not a directory")

        store = ResumeStateStore(Paths.Create(tmp_path / "state", tmp_path / "logs"))

        assert store.BeginPendingJob(Path("/source"), Path("/dest")) is False


# ----------------------------------------------------------------------
class TestPromoteToRecoverable:
    # ----------------------------------------------------------------------
    def test_Standard(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"))

        assert store.PromoteToRecoverable()

        assert not store.paths.pending.exists()
        assert store.paths.recoverable.is_file()
        assert store.HasRecoverableJob()
        assert store.HasPendingJob() is False

        assert store.LoadRecoverableJob() == BackupJob(Path("/source"), Path("/dest"), BackupMode.full)

    # ----------------------------------------------------------------------
    def test_Twice(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"), BackupMode.mirror)

        assert store.PromoteToRecoverable() is True
        assert store.PromoteToRecoverable() is False

        assert store.LoadRecoverableJob() == BackupJob(Path("/source"), Path("/dest"), BackupMode.mirror)

    # ----------------------------------------------------------------------
    def test_NothingPending(self, store):
        assert store.PromoteToRecoverable() is False
        assert store.HasRecoverableJob() is False

    # ----------------------------------------------------------------------
    def test_ReplacesExisting(self, store):
        store.BeginPendingJob(Path("/old/source"), Path("/old/dest"))
        store.PromoteToRecoverable()

        store.BeginPendingJob(Path("/new/source"), Path("/new/dest"))
        store.PromoteToRecoverable()

        assert store.LoadRecoverableJob() == BackupJob(Path("/new/source"), Path("/new/dest"), BackupMode.full)

    # ----------------------------------------------------------------------
    def test_RenameError(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"))

        with mock.patch.object(Path, "replace", side_effect=PermissionError("Access is denied")):
            assert store.PromoteToRecoverable() is False

        # Nothing is lost
        assert store.ReadPendingRecord() == ("/source", "/dest", "full")


# ----------------------------------------------------------------------
class TestLoadRecoverableJob:
    # ----------------------------------------------------------------------
    def test_LegacyTwoLineRecord(self, store):
        store.paths.state_dir.mkdir(parents=True)
        store.paths.recoverable.write_text("C:\\Data\nD:\\Backup\n")

        job = store.LoadRecoverableJob()

        assert job is not None
        assert str(job.source) == "C:\\Data"
        assert str(job.destination) == "D:\\Backup"
        assert job.mode == BackupMode.full
        assert job.log_path is None

    # ----------------------------------------------------------------------
    def test_WindowsLineEndings(self, store):
        store.paths.state_dir.mkdir(parents=True)
        store.paths.recoverable.write_bytes(b"/source\r\n/dest\r\nmirror\r\n")

        assert store.LoadRecoverableJob() == BackupJob(Path("/source"), Path("/dest"), BackupMode.mirror)

    # ----------------------------------------------------------------------
    def test_RecoverableWins(self, store):
        store.BeginPendingJob(Path("/old/source"), Path("/old/dest"), BackupMode.mirror)
        store.PromoteToRecoverable()

        store.BeginPendingJob(Path("/new/source"), Path("/new/dest"))

        assert store.LoadRecoverableJob() == BackupJob(Path("/old/source"), Path("/old/dest"), BackupMode.mirror)

    # ----------------------------------------------------------------------
    @pytest.mark.parametrize(
        "content",
        [
            "",
            "\n\n",
            "/only/one/line\n",
            "/source\n/dest\nmirror\nextra\n",
            "/source\n/dest\nunknown_mode\n",
            "/same\n/same\n",
            "\n/data/Backup\nmirror\n",  # Empty source
            "/data/Photos\n\nmirror\n",  # Empty destination
            "/data/Photos\n/data/Backup\n\n",  # Empty mode
            "/data/Photos\n   \n",
        ],
    )
    def test_Invalid(self, store, content):
        store.paths.state_dir.mkdir(parents=True)
        store.paths.recoverable.write_text(content)

        assert store.HasRecoverableJob()
        assert store.LoadRecoverableJob() is None

    # ----------------------------------------------------------------------
    def test_NotText(self, store):
        store.paths.state_dir.mkdir(parents=True)
        store.paths.recoverable.write_bytes(b"\xff\xfe\xfa\x00")

        assert store.LoadRecoverableJob() is None

    # ----------------------------------------------------------------------
    def test_ReadError(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"))
        store.PromoteToRecoverable()

        with mock.patch.object(Path, "read_text", side_effect=PermissionError("Access is denied")):
            assert store.LoadRecoverableJob() is None

    # ----------------------------------------------------------------------
    def test_ResolveError(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"))

        with mock.patch.object(Path, "resolve", side_effect=OSError("The filename syntax is incorrect")):
            assert store.LoadRecoverableJob() is None

    # ----------------------------------------------------------------------
    def test_NoTrailingNewline(self, store):
        store.paths.state_dir.mkdir(parents=True)
        store.paths.recoverable.write_text("/source\n/dest\nmirror")

        assert store.LoadRecoverableJob() == BackupJob(Path("/source"), Path("/dest"), BackupMode.mirror)


# ----------------------------------------------------------------------
class TestDiscardPending:
    # ----------------------------------------------------------------------
    def test_Standard(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"))

        assert store.DiscardPending()

        assert store.HasRecoverableJob() is False

    # ----------------------------------------------------------------------
    def test_RecoverableUntouched(self, store):
        store.BeginPendingJob(Path("/old/source"), Path("/old/dest"))
        store.PromoteToRecoverable()

        store.BeginPendingJob(Path("/new/source"), Path("/new/dest"))
        store.DiscardPending()

        assert store.HasPendingJob() is False
        assert store.LoadRecoverableJob() == BackupJob(Path("/old/source"), Path("/old/dest"), BackupMode.full)

    # ----------------------------------------------------------------------
    def test_NothingPending(self, store):
        assert store.DiscardPending()


# ----------------------------------------------------------------------
class TestClear:
    # ----------------------------------------------------------------------
    def test_Recoverable(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"))
        store.PromoteToRecoverable()

        assert store.Clear()

        assert store.HasRecoverableJob() is False

    # ----------------------------------------------------------------------
    def test_PendingAndRecoverable(self, store):
        store.BeginPendingJob(Path("/old/source"), Path("/old/dest"))
        store.PromoteToRecoverable()
        store.BeginPendingJob(Path("/new/source"), Path("/new/dest"))

        assert store.Clear()

        assert store.HasRecoverableJob() is False
        assert not store.paths.pending.exists()
        assert not store.paths.recoverable.exists()

    # ----------------------------------------------------------------------
    def test_Empty(self, store):
        assert store.Clear()
        assert store.HasRecoverableJob() is False

    # ----------------------------------------------------------------------
    def test_RemoveError(self, store):
        store.BeginPendingJob(Path("/source"), Path("/dest"))
        store.PromoteToRecoverable()

        with mock.patch.object(Path, "unlink", side_effect=PermissionError("Access is denied")):
            assert store.Clear() is False

        assert store.HasRecoverableJob()


# ----------------------------------------------------------------------
def test_Lifecycle(store):
    assert store.HasRecoverableJob() is False

    assert store.BeginPendingJob(Path("/source"), Path("/dest"))
    assert store.HasRecoverableJob()

    assert store.PromoteToRecoverable()
    assert store.HasRecoverableJob()

    assert store.Clear()
    assert store.HasRecoverableJob() is False

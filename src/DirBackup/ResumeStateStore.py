# ----------------------------------------------------------------------
# |
# |  ResumeStateStore.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-05 11:18:26
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""\
Persists information about the backup job being processed so that it can be resumed if the job is
interrupted.

The information is stored in one of two files:

    pending:        Written before the copy begins. If this file exists when the application
                    starts, the process terminated while the copy was in progress.

    recoverable:    The pending file is renamed to this file once the copy returns. The file is
                    removed when the job is confirmed complete; if it exists when the application
                    starts, the job either failed or its completion was never confirmed.

Renaming is the only operation that moves a record from one state to the other, so the state on
disk is always one of these values even if the process is killed at any point.
"""

from pathlib import Path
from typing import Optional

from DirBackup.BackupJob import BackupJob, BackupMode
from DirBackup.Paths import Paths


# ----------------------------------------------------------------------
class ResumeStateStore:
    """Reads and writes the resume record for a single backup job"""

    # ----------------------------------------------------------------------
    def __init__(
        self,
        paths: Paths,
    ):
        self.paths = paths

    # ----------------------------------------------------------------------
    def HasRecoverableJob(self) -> bool:
        return self.paths.recoverable.is_file() or self.paths.pending.is_file()

    # ----------------------------------------------------------------------
    def HasPendingJob(self) -> bool:
        return self.paths.pending.is_file()

    # ----------------------------------------------------------------------
    def LoadRecoverableJob(self) -> Optional[BackupJob]:
        """Returns the job described by the resume record, or None if the record is missing or invalid."""

        # The recoverable record wins when both exist, as that means that a resumed job was interrupted
        for filename in [self.paths.recoverable, self.paths.pending]:
            if not filename.is_file():
                continue

            lines = self._ReadLines(filename)
            if lines is None:
                return None

            return _CreateJob(lines)

        return None

    # ----------------------------------------------------------------------
    def ReadPendingRecord(self) -> Optional[tuple[str, ...]]:
        if not self.paths.pending.is_file():
            return None

        return self._ReadLines(self.paths.pending)

    # ----------------------------------------------------------------------
    def BeginPendingJob(
        self,
        source: Path,
        destination: Path,
        mode: BackupMode = BackupMode.full,
    ) -> bool:
        """Writes the pending record (overwriting any existing one); returns False if it couldn't be written."""

        try:
            self.paths.state_dir.mkdir(parents=True, exist_ok=True)

            self.paths.pending.write_text(
                "{}\n{}\n{}\n".format(source, destination, mode.value),
                encoding="utf-8",
            )
        except OSError:
            return False

        return True

    # ----------------------------------------------------------------------
    def PromoteToRecoverable(self) -> bool:
        """Converts the pending record into a recoverable one; returns False if there was nothing to promote."""

        if not self.paths.pending.is_file():
            return False

        try:
            # `replace` is atomic and overwrites an existing recoverable record
            self.paths.pending.replace(self.paths.recoverable)
        except OSError:
            return False

        return True

    # ----------------------------------------------------------------------
    def DiscardPending(self) -> bool:
        return self._Remove(self.paths.pending)

    # ----------------------------------------------------------------------
    def Clear(self) -> bool:
        """Removes all resume information; returns False if a record could not be removed."""

        # Both removals are attempted even if the first one fails
        recoverable_removed = self._Remove(self.paths.recoverable)
        pending_removed = self._Remove(self.paths.pending)

        return recoverable_removed and pending_removed

    # ----------------------------------------------------------------------
    # |
    # |  Private Methods
    # |
    # ----------------------------------------------------------------------
    @staticmethod
    def _ReadLines(
        filename: Path,
    ) -> Optional[tuple[str, ...]]:
        try:
            content = filename.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

        lines = [line.rstrip("\r") for line in content.split("\n")]

        # The record ends with a newline
        if lines and not lines[-1]:
            lines.pop()

        return tuple(lines)

    # ----------------------------------------------------------------------
    @staticmethod
    def _Remove(
        filename: Path,
    ) -> bool:
        try:
            filename.unlink(missing_ok=True)
        except OSError:
            return False

        return True


# ----------------------------------------------------------------------
# |
# |  Private Functions
# |
# ----------------------------------------------------------------------
def _CreateJob(
    lines: tuple[str, ...],
) -> Optional[BackupJob]:
    # Fields are positional, so an empty line means that the record is corrupt
    if any(not line.strip() for line in lines):
        return None

    if len(lines) == 2:
        # Records written before the mode was persisted are always processed as full copies
        mode = BackupMode.full
    elif len(lines) == 3:
        try:
            mode = BackupMode(lines[2])
        except ValueError:
            return None
    else:
        return None

    try:
        return BackupJob(Path(lines[0]), Path(lines[1]), mode)
    except (ValueError, OSError):
        return None

# ----------------------------------------------------------------------
# |
# |  BackupJobRunner.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-05 13:47:09
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""Executes a BackupJob with an external copy tool"""

import shutil

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import auto, Enum
from pathlib import Path, PurePath
from typing import Optional

from dbrownell_Common.Streams.DoneManager import DoneManager  # type: ignore[import-untyped]
from dbrownell_Common import SubprocessEx  # type: ignore[import-untyped]
from dbrownell_Common.Types import override  # type: ignore[import-untyped]

from DirBackup.BackupJob import BackupJob, BackupMode


# ----------------------------------------------------------------------
# |
# |  Public Types
# |
# ----------------------------------------------------------------------
NUM_RETRIES = 3
RETRY_WAIT_SECONDS = 5

# robocopy exit codes are a bitmask; values of 8 and above indicate that at least one failure occurred
ROBOCOPY_FAILURE_THRESHOLD = 8


# ----------------------------------------------------------------------
class CopyToolError(Exception):
    """Raised when the copy tool can't be started"""


# ----------------------------------------------------------------------
class JobOutcome(Enum):
    """Result of executing a BackupJob"""

    succeeded = auto()
    failed = auto()  # The copy tool ran but reported failure
    not_started = auto()  # The copy tool could not be started


# ----------------------------------------------------------------------
@dataclass(frozen=True)
class CopyResult:
    """Result of a copy tool invocation"""

    succeeded: bool
    exit_code: int


# ----------------------------------------------------------------------
class CopyExecutor(ABC):
    """Abstraction for tools that are able to copy a directory tree"""

    # ----------------------------------------------------------------------
    @abstractmethod
    def Execute(
        self,
        dm: DoneManager,
        source: Path,
        destination: Path,
        options: list[str],
    ) -> CopyResult:
        """Copies source to destination; raises CopyToolError if the tool can't be started."""
        raise Exception("Abstract method")  # pragma: no cover


# ----------------------------------------------------------------------
class RobocopyExecutor(CopyExecutor):
    """Copies content with robocopy"""

    # ----------------------------------------------------------------------
    def __init__(
        self,
        binary_name: str = "robocopy",
        failure_threshold: int = ROBOCOPY_FAILURE_THRESHOLD,
    ):
        self.binary_name = binary_name
        self.failure_threshold = failure_threshold

    # ----------------------------------------------------------------------
    @override
    def Execute(
        self,
        dm: DoneManager,
        source: Path,
        destination: Path,
        options: list[str],
    ) -> CopyResult:
        if shutil.which(self.binary_name) is None:
            raise CopyToolError(
                f"'{self.binary_name}' is not available; please make sure it exists in the path and run the script again."
            )

        command_line = CreateCommandLine(self.binary_name, source, destination, options)

        dm.WriteVerbose(f"Command Line: {command_line}\n\n")

        with dm.YieldVerboseStream() as stream:
            exit_code = SubprocessEx.Stream(command_line, stream)

        return CopyResult(exit_code < self.failure_threshold, exit_code)


# ----------------------------------------------------------------------
class BackupJobRunner:
    """Executes BackupJobs with a CopyExecutor"""

    # ----------------------------------------------------------------------
    def __init__(
        self,
        executor: Optional[CopyExecutor] = None,
    ):
        self.executor = executor or RobocopyExecutor()

    # ----------------------------------------------------------------------
    def Execute(
        self,
        dm: DoneManager,
        job: BackupJob,
    ) -> JobOutcome:
        assert job.log_path is not None, job

        options = CreateOptions(job.mode, job.log_path)

        with dm.Nested(
            f"Copying '{job.source}' to '{job.destination}'...",
            suffix="\n",
        ) as copy_dm:
            try:
                result = self.executor.Execute(copy_dm, job.source, job.destination, options)
            except CopyToolError as ex:
                copy_dm.WriteError(f"The copy could not be started ({ex}).\n")
                return JobOutcome.not_started

            if not result.succeeded:
                copy_dm.WriteError(
                    f"The copy failed with the exit code {result.exit_code}; see '{job.log_path}' for more information.\n"
                )
                return JobOutcome.failed

            copy_dm.WriteVerbose(f"The copy completed with the exit code {result.exit_code}.\n")

        return JobOutcome.succeeded


# ----------------------------------------------------------------------
# |
# |  Public Functions
# |
# ----------------------------------------------------------------------
def CreateOptions(
    mode: BackupMode,
    log_path: Path,
) -> list[str]:
    if mode == BackupMode.full:
        recurse_flag = "/E"  # Subdirectories, including empty ones
    elif mode == BackupMode.mirror:
        recurse_flag = "/MIR"  # Subdirectories, removing destination items that don't exist in source
    else:
        assert False, mode  # pragma: no cover

    return [
        recurse_flag,
        "/COPYALL",  # Data, attributes, timestamps, security, owner, and auditing info
        "/DCOPY:T",  # Directory timestamps
        "/Z",  # Restartable mode
        "/NP",  # No per-file progress
        f"/R:{NUM_RETRIES}",
        f"/W:{RETRY_WAIT_SECONDS}",
        "/LOG:{}".format(QuotePath(log_path)),
    ]


# ----------------------------------------------------------------------
def CreateCommandLine(
    binary_name: str,
    source: PurePath,
    destination: PurePath,
    options: list[str],
) -> str:
    return "{} {} {} {}".format(binary_name, QuotePath(source), QuotePath(destination), " ".join(options))


# ----------------------------------------------------------------------
def QuotePath(
    path: PurePath,
) -> str:
    """Quotes a path so that Windows command line parsing doesn't read a trailing backslash as an escaped quote ("D:\\")."""

    value = str(path)
    num_trailing_backslashes = len(value) - len(value.rstrip("\\"))

    return '"{}{}"'.format(value, "\\" * num_trailing_backslashes)

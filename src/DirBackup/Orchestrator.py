# ----------------------------------------------------------------------
# |
# |  Orchestrator.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-06 08:55:30
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""\
Sequences the components used to backup a directory: resume detection, job selection, logging,
size reporting, and execution. The Orchestrator owns no state beyond the job being processed;
everything that must survive the process is written to the ResumeStateStore.
"""

import textwrap

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from dbrownell_Common import PathEx  # type: ignore[import-untyped]
from dbrownell_Common.Streams.DoneManager import DoneManager  # type: ignore[import-untyped]

from DirBackup.BackupJob import BackupJob, BackupMode
from DirBackup.BackupJobRunner import BackupJobRunner, JobOutcome
from DirBackup import LogPathAllocator
from DirBackup.Paths import Paths
from DirBackup.ResumeStateStore import ResumeStateStore
from DirBackup import SizeReporter


# ----------------------------------------------------------------------
# |
# |  Public Types
# |
# ----------------------------------------------------------------------
class Interaction(ABC):
    """Abstraction for the user-facing prompts used by the Orchestrator"""

    # ----------------------------------------------------------------------
    @abstractmethod
    def PickFolder(
        self,
        description: str,
    ) -> Optional[Path]:
        """Returns the selected folder or None if a folder wasn't selected."""
        raise Exception("Abstract method")  # pragma: no cover

    # ----------------------------------------------------------------------
    @abstractmethod
    def Confirm(
        self,
        question: str,
    ) -> bool:
        """Returns True if the user answered yes."""
        raise Exception("Abstract method")  # pragma: no cover

    # ----------------------------------------------------------------------
    @abstractmethod
    def SelectMode(self) -> Optional[BackupMode]:
        """Returns the selected mode or None if the selection was invalid."""
        raise Exception("Abstract method")  # pragma: no cover

    # ----------------------------------------------------------------------
    @abstractmethod
    def ShowSummary(
        self,
        dm: DoneManager,
        job: BackupJob,
        size_display: str,
        file_count: Optional[int],
    ) -> None:
        """Displays information about a job before it is executed."""
        raise Exception("Abstract method")  # pragma: no cover


# ----------------------------------------------------------------------
class Orchestrator:
    """Runs backup jobs until the user decides to stop"""

    # ----------------------------------------------------------------------
    def __init__(
        self,
        paths: Paths,
        interaction: Interaction,
        runner: Optional[BackupJobRunner] = None,
    ):
        self.paths = paths
        self.interaction = interaction
        self.runner = runner or BackupJobRunner()

        self.store = ResumeStateStore(paths)

    # ----------------------------------------------------------------------
    def Run(
        self,
        dm: DoneManager,
    ) -> None:
        while True:
            if not self.RunOnce(dm):
                return

            if not self.interaction.Confirm("Would you like to backup another folder?"):
                return

            dm.WriteLine("")

    # ----------------------------------------------------------------------
    def RunOnce(
        self,
        dm: DoneManager,
    ) -> bool:
        """Processes a single job; returns False if a fatal error was encountered."""

        job = self._GetResumedJob(dm)
        is_resumed = job is not None

        if job is None:
            job = self._GetNewJob(dm)
            if job is None:
                return True

        log_path = LogPathAllocator.AllocateLogPath(dm, self.paths.log_root, job.source)
        if log_path is None:
            return False

        return ExecuteJob(
            dm,
            self.store,
            self.runner,
            job.WithLogPath(log_path),
            self.interaction,
            is_resumed=is_resumed,
        )

    # ----------------------------------------------------------------------
    # |
    # |  Private Methods
    # |
    # ----------------------------------------------------------------------
    def _GetResumedJob(
        self,
        dm: DoneManager,
    ) -> Optional[BackupJob]:
        if not self.store.HasRecoverableJob():
            return None

        job = LoadResumableJob(dm, self.store)
        if job is None:
            return None

        dm.WriteInfo(
            textwrap.dedent(
                f"""\
                A previous backup did not complete.

                    Source:         {job.source}
                    Destination:    {job.destination}
                    Mode:           {job.mode.value}

                """,
            ),
        )

        if self.interaction.Confirm("Would you like to resume this backup?"):
            return job

        if not self.store.Clear():
            dm.WriteWarning("The previous backup information could not be removed.\n")

        return None

    # ----------------------------------------------------------------------
    def _GetNewJob(
        self,
        dm: DoneManager,
    ) -> Optional[BackupJob]:
        source = self.interaction.PickFolder("Select the folder to backup")
        if source is None:
            dm.WriteWarning("A source folder was not selected.\n")
            return None

        destination = self.interaction.PickFolder("Select the backup destination folder")
        if destination is None:
            dm.WriteWarning("A destination folder was not selected.\n")
            return None

        mode = self.interaction.SelectMode()
        if mode is None:
            dm.WriteWarning("A valid backup mode was not selected.\n")
            return None

        return CreateJob(dm, source, destination, mode)


# ----------------------------------------------------------------------
# |
# |  Public Functions
# |
# ----------------------------------------------------------------------
def CreateJob(
    dm: DoneManager,
    source: Path,
    destination: Path,
    mode: BackupMode,
) -> Optional[BackupJob]:
    """Returns a validated job, or None (after writing an error) if the folders can't be used."""

    if not source.is_dir():
        dm.WriteError(f"'{source}' is not a valid directory.\n")
        return None

    try:
        job = BackupJob(source.resolve(), destination.resolve(), mode)
    except ValueError as ex:
        dm.WriteError(f"{ex}\n")
        return None

    if PathEx.IsDescendant(job.destination, job.source):
        dm.WriteError(f"The destination '{job.destination}' is within the source '{job.source}'.\n")
        return None

    return job


# ----------------------------------------------------------------------
def LoadResumableJob(
    dm: DoneManager,
    store: ResumeStateStore,
) -> Optional[BackupJob]:
    """Returns the job in the resume record; invalid records are reported and removed."""

    job = store.LoadRecoverableJob()

    if job is None:
        dm.WriteWarning("The previous backup information is not valid and will be ignored.\n")
    elif not job.source.is_dir():
        dm.WriteWarning(
            f"The previous backup can't be resumed because the source '{job.source}' no longer exists.\n"
        )
        job = None

    if job is None:
        store.Clear()

    return job


# ----------------------------------------------------------------------
def ExecuteJob(
    dm: DoneManager,
    store: ResumeStateStore,
    runner: BackupJobRunner,
    job: BackupJob,
    interaction: Optional[Interaction],
    *,
    is_resumed: bool,
) -> bool:
    """\
    Confirms and executes a job that has been assigned a log path.

    `interaction` is None when the job should run without confirmation. Returns False if the
    application should not process additional jobs.
    """

    assert job.log_path is not None, job

    if not store.BeginPendingJob(job.source, job.destination, job.mode):
        dm.WriteWarning("Backup information could not be saved; this backup will not be resumable.\n")

    if interaction is not None:
        confirmed = False

        try:
            with dm.Nested("Calculating the size of the source...") as size_dm:
                size_display = SizeReporter.ComputeSize(job.source)
                file_count = SizeReporter.GetFileCount(job.source)

                if size_display == SizeReporter.UNKNOWN_SIZE:
                    size_dm.WriteVerbose("The size of the source could not be calculated.\n")

            interaction.ShowSummary(dm, job, size_display, file_count)

            if job.mode == BackupMode.mirror:
                dm.WriteInfo("Files in the destination that do not exist in the source will be DELETED.\n")

            confirmed = interaction.Confirm("Would you like to start the backup?")

        finally:
            # Also reached when the prompt is aborted (Ctrl+C); the copy never started
            if not confirmed:
                if not is_resumed:
                    store.DiscardPending()
                else:
                    # Keep the record so that the job can be resumed later
                    store.PromoteToRecoverable()

        if not confirmed:
            dm.WriteInfo("The backup was cancelled.\n")
            return True

    dm.WriteVerbose(f"Log file: {job.log_path}\n")

    outcome = runner.Execute(dm, job)

    store.PromoteToRecoverable()

    if outcome == JobOutcome.succeeded:
        if not store.Clear():
            dm.WriteWarning("The backup information could not be removed.\n")

        dm.WriteInfo(f"The backup completed successfully; the log file is '{job.log_path}'.\n")
    else:
        dm.WriteInfo("The backup did not complete and can be resumed the next time this application is run.\n")

    return True

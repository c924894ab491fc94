# ----------------------------------------------------------------------
# |
# |  Copyright (c) 2024 David Brownell
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""Backs up directories with logging and support for resuming interrupted backups."""

import datetime
import sys
import textwrap

from pathlib import Path
from typing import Annotated, Optional

import typer

from dbrownell_Common.Streams.DoneManager import DoneManager, Flags as DoneManagerFlags  # type: ignore [import-untyped]
from typer.core import TyperGroup  # type: ignore [import-untyped]

from DirBackup import __version__
from DirBackup.BackupJob import BackupMode
from DirBackup.BackupJobRunner import BackupJobRunner
from DirBackup.CommandLine import CommandLineArguments
from DirBackup.Interaction import ConsoleInteraction, DialogInteraction
from DirBackup import LogPathAllocator
from DirBackup import Orchestrator
from DirBackup.Paths import Paths
from DirBackup.ResumeStateStore import ResumeStateStore


# ----------------------------------------------------------------------
class NaturalOrderGrouper(TyperGroup):
    # pylint: disable=missing-class-docstring
    # ----------------------------------------------------------------------
    def list_commands(self, *args, **kwargs):  # pylint: disable=unused-argument
        return self.commands.keys()  # pragma: no cover


# ----------------------------------------------------------------------
app = typer.Typer(
    cls=NaturalOrderGrouper,
    help=__doc__,
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
)


# ----------------------------------------------------------------------
@app.command("interactive", no_args_is_help=False)
def Interactive(
    gui: Annotated[bool, CommandLineArguments.gui_option] = CommandLineArguments.gui_option_default,
    state_dir: Annotated[
        Optional[Path], CommandLineArguments.state_dir_option
    ] = CommandLineArguments.state_dir_option_default,
    log_dir: Annotated[
        Optional[Path], CommandLineArguments.log_dir_option
    ] = CommandLineArguments.log_dir_option_default,
    verbose: Annotated[
        bool, CommandLineArguments.verbose_option
    ] = CommandLineArguments.verbose_option_default,
    debug: Annotated[bool, CommandLineArguments.debug_option] = CommandLineArguments.debug_option_default,
) -> None:
    """Prompts for folders and backs them up until you choose to stop; interrupted backups are offered for resume."""

    with DoneManager.CreateCommandLine(
        flags=DoneManagerFlags.Create(verbose=verbose, debug=debug),
    ) as dm:
        dm.WriteVerbose(str(datetime.datetime.now()) + "\n\n")

        Orchestrator.Orchestrator(
            Paths.Create(state_dir, log_dir),
            DialogInteraction() if gui else ConsoleInteraction(),
        ).Run(dm)


# ----------------------------------------------------------------------
@app.command("backup", no_args_is_help=True)
def Backup(
    source: Annotated[Path, CommandLineArguments.source_argument],
    destination: Annotated[Path, CommandLineArguments.destination_argument],
    mode: Annotated[BackupMode, CommandLineArguments.mode_option] = CommandLineArguments.mode_option_default,
    yes: Annotated[bool, CommandLineArguments.yes_option] = CommandLineArguments.yes_option_default,
    state_dir: Annotated[
        Optional[Path], CommandLineArguments.state_dir_option
    ] = CommandLineArguments.state_dir_option_default,
    log_dir: Annotated[
        Optional[Path], CommandLineArguments.log_dir_option
    ] = CommandLineArguments.log_dir_option_default,
    verbose: Annotated[
        bool, CommandLineArguments.verbose_option
    ] = CommandLineArguments.verbose_option_default,
    debug: Annotated[bool, CommandLineArguments.debug_option] = CommandLineArguments.debug_option_default,
) -> None:
    """Backs up a directory."""

    with DoneManager.CreateCommandLine(
        flags=DoneManagerFlags.Create(verbose=verbose, debug=debug),
    ) as dm:
        dm.WriteVerbose(str(datetime.datetime.now()) + "\n\n")

        paths = Paths.Create(state_dir, log_dir)

        store = ResumeStateStore(paths)

        job = Orchestrator.CreateJob(dm, source, destination, mode)
        if job is None:
            return

        if store.HasRecoverableJob():
            previous_job = store.LoadRecoverableJob()

            if previous_job is None:
                previous_desc = "A previous backup did not complete.\n"
            else:
                previous_desc = textwrap.dedent(
                    f"""\
                    A previous backup did not complete and can be resumed with the 'resume' command.

                        Source:         {previous_job.source}
                        Destination:    {previous_job.destination}
                        Mode:           {previous_job.mode.value}
                    """,
                )

            if yes:
                dm.WriteWarning(previous_desc + "Its backup information will be replaced.\n")
            else:
                dm.WriteInfo(previous_desc)

                if not ConsoleInteraction().Confirm(
                    "Would you like to discard that information and start this backup?",
                ):
                    dm.WriteInfo("The backup was cancelled.\n")
                    return

        log_path = LogPathAllocator.AllocateLogPath(dm, paths.log_root, job.source)
        if log_path is None:
            return

        Orchestrator.ExecuteJob(
            dm,
            store,
            BackupJobRunner(),
            job.WithLogPath(log_path),
            None if yes else ConsoleInteraction(),
            is_resumed=False,
        )


# ----------------------------------------------------------------------
@app.command("resume", no_args_is_help=False)
def Resume(
    yes: Annotated[bool, CommandLineArguments.yes_option] = CommandLineArguments.yes_option_default,
    state_dir: Annotated[
        Optional[Path], CommandLineArguments.state_dir_option
    ] = CommandLineArguments.state_dir_option_default,
    log_dir: Annotated[
        Optional[Path], CommandLineArguments.log_dir_option
    ] = CommandLineArguments.log_dir_option_default,
    verbose: Annotated[
        bool, CommandLineArguments.verbose_option
    ] = CommandLineArguments.verbose_option_default,
    debug: Annotated[bool, CommandLineArguments.debug_option] = CommandLineArguments.debug_option_default,
) -> None:
    """Resumes a backup that was interrupted or did not complete successfully."""

    with DoneManager.CreateCommandLine(
        flags=DoneManagerFlags.Create(verbose=verbose, debug=debug),
    ) as dm:
        dm.WriteVerbose(str(datetime.datetime.now()) + "\n\n")

        paths = Paths.Create(state_dir, log_dir)
        store = ResumeStateStore(paths)

        if not store.HasRecoverableJob():
            dm.WriteError("There is no backup to resume.\n")
            return

        job = Orchestrator.LoadResumableJob(dm, store)
        if job is None:
            return

        log_path = LogPathAllocator.AllocateLogPath(dm, paths.log_root, job.source)
        if log_path is None:
            return

        Orchestrator.ExecuteJob(
            dm,
            store,
            BackupJobRunner(),
            job.WithLogPath(log_path),
            None if yes else ConsoleInteraction(),
            is_resumed=True,
        )


# ----------------------------------------------------------------------
@app.command("status", no_args_is_help=False)
def Status(
    state_dir: Annotated[
        Optional[Path], CommandLineArguments.state_dir_option
    ] = CommandLineArguments.state_dir_option_default,
    verbose: Annotated[
        bool, CommandLineArguments.verbose_option
    ] = CommandLineArguments.verbose_option_default,
    debug: Annotated[bool, CommandLineArguments.debug_option] = CommandLineArguments.debug_option_default,
) -> None:
    """Displays information about a backup that can be resumed."""

    with DoneManager.CreateCommandLine(
        flags=DoneManagerFlags.Create(verbose=verbose, debug=debug),
    ) as dm:
        store = ResumeStateStore(Paths.Create(state_dir))

        if not store.HasRecoverableJob():
            dm.WriteLine("There is no backup to resume.\n")
            return

        job = store.LoadRecoverableJob()
        if job is None:
            dm.WriteWarning("Backup information exists but is not valid.\n")
            return

        if store.HasPendingJob():
            state_desc = "interrupted while copying"
        else:
            state_desc = "not confirmed as complete"

        dm.WriteLine(
            textwrap.dedent(
                f"""\
                A backup can be resumed ({state_desc}).

                    Source:         {job.source}
                    Destination:    {job.destination}
                    Mode:           {job.mode.value}
                """,
            ),
        )

        dm.WriteVerbose(f"Pending record: {store.ReadPendingRecord()}\n")


# ----------------------------------------------------------------------
@app.command("clear", no_args_is_help=False)
def Clear(
    state_dir: Annotated[
        Optional[Path], CommandLineArguments.state_dir_option
    ] = CommandLineArguments.state_dir_option_default,
    verbose: Annotated[
        bool, CommandLineArguments.verbose_option
    ] = CommandLineArguments.verbose_option_default,
    debug: Annotated[bool, CommandLineArguments.debug_option] = CommandLineArguments.debug_option_default,
) -> None:
    """Removes information about a backup that can be resumed."""

    with DoneManager.CreateCommandLine(
        flags=DoneManagerFlags.Create(verbose=verbose, debug=debug),
    ) as dm:
        with dm.Nested("Removing backup information..."):
            if not ResumeStateStore(Paths.Create(state_dir)).Clear():
                dm.WriteError("The backup information could not be removed.\n")


# ----------------------------------------------------------------------
@app.command("version", no_args_is_help=False)
def Version():
    """Displays the current version and exits."""

    sys.stdout.write(f"DirBackup v{__version__}\n")


# ----------------------------------------------------------------------
# ----------------------------------------------------------------------
# ----------------------------------------------------------------------
if __name__ == "__main__":
    app()  # pragma: no cover

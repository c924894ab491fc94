# ----------------------------------------------------------------------
# |
# |  Interaction.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-06 11:23:48
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""Implementations of the Interaction interface"""

from pathlib import Path
from typing import Optional

import typer

from dbrownell_Common.InflectEx import inflect  # type: ignore[import-untyped]
from dbrownell_Common.Streams.Capabilities import Capabilities  # type: ignore[import-untyped]
from dbrownell_Common.Streams.DoneManager import DoneManager  # type: ignore[import-untyped]
from dbrownell_Common.Types import override  # type: ignore[import-untyped]
from rich.table import Table

from DirBackup.BackupJob import BackupJob, BackupMode
from DirBackup.Orchestrator import Interaction


# ----------------------------------------------------------------------
MODE_CHOICES: dict[str, BackupMode] = {
    "1": BackupMode.full,
    "2": BackupMode.mirror,
}


# ----------------------------------------------------------------------
class ConsoleInteraction(Interaction):
    """Prompts for all information on the console"""

    # ----------------------------------------------------------------------
    @override
    def PickFolder(
        self,
        description: str,
    ) -> Optional[Path]:
        value = self._Prompt(f"{description} (leave empty to cancel)").strip().strip('"')
        if not value:
            return None

        return Path(value).expanduser()

    # ----------------------------------------------------------------------
    @override
    def Confirm(
        self,
        question: str,
    ) -> bool:
        return IsYes(self._Prompt(f"{question} (Y/N)"))

    # ----------------------------------------------------------------------
    @override
    def SelectMode(self) -> Optional[BackupMode]:
        value = self._Prompt(
            "Select the backup mode:\n"
            "    1) Full copy (files are added and updated; nothing is deleted)\n"
            "    2) Mirror (files in the destination that are not in the source are DELETED)\n"
            "Mode",
        )

        return MODE_CHOICES.get(value.strip(), None)

    # ----------------------------------------------------------------------
    @override
    def ShowSummary(
        self,
        dm: DoneManager,
        job: BackupJob,
        size_display: str,
        file_count: Optional[int],
    ) -> None:
        table = Table(show_header=False, title="Backup Summary", title_justify="left")

        table.add_column(style="bold")
        table.add_column()

        table.add_row("Source", str(job.source))
        table.add_row("Destination", str(job.destination))
        table.add_row("Mode", job.mode.value)
        table.add_row(
            "Size",
            size_display
            if file_count is None
            else "{} ({})".format(size_display, inflect.no("file", file_count)),
        )
        table.add_row("Log", str(job.log_path))

        with dm.YieldStdout() as stdout_context:
            Capabilities.Get(stdout_context.stream).CreateRichConsole(stdout_context.stream).print(table)

    # ----------------------------------------------------------------------
    # |
    # |  Private Methods
    # |
    # ----------------------------------------------------------------------
    @staticmethod
    def _Prompt(
        text: str,
    ) -> str:
        return typer.prompt(text, default="", show_default=False)


# ----------------------------------------------------------------------
class DialogInteraction(ConsoleInteraction):
    """Selects folders with a dialog and prompts for all other information on the console"""

    # ----------------------------------------------------------------------
    @override
    def PickFolder(
        self,
        description: str,
    ) -> Optional[Path]:
        # Imported here so that tkinter is only required when dialogs are used
        import tkinter
        from tkinter import filedialog

        root = tkinter.Tk()
        root.withdraw()

        try:
            value = filedialog.askdirectory(title=description, mustexist=False)
        finally:
            root.destroy()

        if not value:
            return None

        return Path(value)


# ----------------------------------------------------------------------
def IsYes(
    value: str,
) -> bool:
    return value.strip().upper() in ["Y", "YES"]

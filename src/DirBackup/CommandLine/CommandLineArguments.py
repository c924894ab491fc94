# ----------------------------------------------------------------------
# |
# |  CommandLineArguments.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-06 13:05:12
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------

from pathlib import Path
from typing import Optional

import typer

from DirBackup.BackupJob import BackupMode


# ----------------------------------------------------------------------
source_argument = typer.Argument(
    ..., exists=True, file_okay=False, resolve_path=True, help="Directory to backup."
)

destination_argument = typer.Argument(
    ..., file_okay=False, resolve_path=True, help="Backup destination directory; it will be created if necessary."
)

mode_option = typer.Option(
    "--mode",
    case_sensitive=False,
    help="'full' copies new and modified files; 'mirror' also deletes files in the destination that do not exist in the source.",
)
mode_option_default = BackupMode.full

yes_option = typer.Option("--yes", help="Do not prompt for confirmation before the backup begins.")
yes_option_default = False

gui_option = typer.Option("--gui", help="Select folders with a dialog rather than on the console.")
gui_option_default = False

state_dir_option = typer.Option(
    "--state-dir",
    file_okay=False,
    resolve_path=True,
    help="Directory used to store information about interrupted backups (defaults to the user directory).",
)
state_dir_option_default: Optional[Path] = None

log_dir_option = typer.Option(
    "--log-dir",
    file_okay=False,
    resolve_path=True,
    help="Directory where log files are written (defaults to 'DirBackupLogs' in the user directory).",
)
log_dir_option_default: Optional[Path] = None

verbose_option = typer.Option("--verbose", help="Write verbose information to the terminal.")
verbose_option_default = False

debug_option = typer.Option("--debug", help="Write debug information to the terminal.")
debug_option_default = False

# ----------------------------------------------------------------------
# |
# |  BackupJob.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-05 09:12:41
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""Contains the BackupMode and BackupJob objects"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Optional


# ----------------------------------------------------------------------
class BackupMode(str, Enum):
    """Controls how content is copied to the destination"""

    full = "full"  # Files are copied; nothing at the destination is removed
    mirror = "mirror"  # Destination becomes an exact copy of the source (extra files are deleted)


# ----------------------------------------------------------------------
@dataclass(frozen=True)
class BackupJob:
    """A single source/destination copy operation"""

    # ----------------------------------------------------------------------
    source: Path
    destination: Path
    mode: BackupMode
    log_path: Optional[Path] = None

    # ----------------------------------------------------------------------
    def __post_init__(self):
        if self.source == Path():
            raise ValueError("The source directory must not be empty.")

        if self.destination == Path():
            raise ValueError("The destination directory must not be empty.")

        if self.source.resolve() == self.destination.resolve():
            raise ValueError(f"The source and destination directories are the same ('{self.source}').")

    # ----------------------------------------------------------------------
    def WithLogPath(
        self,
        log_path: Path,
    ) -> "BackupJob":
        if self.log_path is not None:
            raise ValueError(f"The log path has already been assigned ('{self.log_path}').")

        return replace(self, log_path=log_path)

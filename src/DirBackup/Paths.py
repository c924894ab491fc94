# ----------------------------------------------------------------------
# |
# |  Paths.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-05 09:31:17
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""Contains the Paths object"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dbrownell_Common import PathEx  # type: ignore[import-untyped]


# ----------------------------------------------------------------------
RESUME_RECORD_NAME = "DirBackup.resume"
RESUME_RECORD_EXTENSION = ".txt"
PENDING_EXTENSION = ".__pending__"

DEFAULT_LOG_DIR_NAME = "DirBackupLogs"


# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Paths:
    """Locations of the resume record and log files."""

    pending: Path
    recoverable: Path
    log_root: Path

    # ----------------------------------------------------------------------
    @classmethod
    def Create(
        cls,
        state_dir: Optional[Path] = None,
        log_root: Optional[Path] = None,
    ) -> "Paths":
        if state_dir is None:
            state_dir = PathEx.GetUserDirectory()

        if log_root is None:
            log_root = PathEx.GetUserDirectory() / DEFAULT_LOG_DIR_NAME

        recoverable = state_dir / f"{RESUME_RECORD_NAME}{RESUME_RECORD_EXTENSION}"

        return cls(
            recoverable.parent / f"{RESUME_RECORD_NAME}{PENDING_EXTENSION}{RESUME_RECORD_EXTENSION}",
            recoverable,
            log_root,
        )

    # ----------------------------------------------------------------------
    @property
    def state_dir(self) -> Path:
        return self.recoverable.parent

# ----------------------------------------------------------------------
# |
# |  SizeReporter.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-05 10:02:55
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""\
Calculates the size of directory trees for display before a backup begins. Failures are not
errors, as the size is informational only.
"""

import os

from pathlib import Path
from typing import Generator, Optional


# ----------------------------------------------------------------------
# |
# |  Public Types
# |
# ----------------------------------------------------------------------
UNKNOWN_SIZE = "Unknown size"

# Largest unit first
_UNITS: list[tuple[str, int]] = [
    ("TB", 1024**4),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
]


# ----------------------------------------------------------------------
# |
# |  Public Functions
# |
# ----------------------------------------------------------------------
def ComputeSize(
    path: Path,
) -> str:
    """Returns the formatted size of all files under `path` or UNKNOWN_SIZE if it can't be calculated."""

    try:
        return FormatSize(GetDirectorySize(path))
    except OSError:
        return UNKNOWN_SIZE


# ----------------------------------------------------------------------
def FormatSize(
    num_bytes: int,
) -> str:
    # The unit is selected before rounding; 1073741823 bytes is displayed as "1024.00 MB".
    for unit, unit_size in _UNITS:
        if num_bytes >= unit_size:
            return "{:.2f} {}".format(num_bytes / unit_size, unit)

    return f"{num_bytes} bytes"


# ----------------------------------------------------------------------
def GetDirectorySize(
    path: Path,
) -> int:
    return sum(os.lstat(filename).st_size for filename in _EnumFiles(path))


# ----------------------------------------------------------------------
def GetFileCount(
    path: Path,
) -> Optional[int]:
    try:
        return sum(1 for _ in _EnumFiles(path))
    except OSError:
        return None


# ----------------------------------------------------------------------
# |
# |  Private Functions
# |
# ----------------------------------------------------------------------
def _EnumFiles(
    path: Path,
) -> Generator[Path, None, None]:
    if not path.is_dir():
        raise NotADirectoryError(f"'{path}' is not a valid directory.")

    # ----------------------------------------------------------------------
    def OnError(ex: OSError) -> None:
        raise ex

    # ----------------------------------------------------------------------

    for root_str, _, filenames in os.walk(path, onerror=OnError):
        root = Path(root_str)

        for filename in filenames:
            yield root / filename

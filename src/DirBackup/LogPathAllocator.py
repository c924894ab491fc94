# ----------------------------------------------------------------------
# |
# |  LogPathAllocator.py
# |
# |  David Brownell <db@DavidBrownell.com>
# |      2024-08-05 10:40:03
# |
# ----------------------------------------------------------------------
# |
# |  Copyright David Brownell 2024
# |  Distributed under the MIT License.
# |
# ----------------------------------------------------------------------
"""\
Creates the name of the log file written by the copy tool. Logging is mandatory; a backup must not
run if the log directory can't be created.
"""

import datetime
import re

from pathlib import Path, PurePath
from typing import Optional

from dbrownell_Common.Streams.DoneManager import DoneManager  # type: ignore[import-untyped]


# ----------------------------------------------------------------------
LOG_FILENAME_TEMPLATE = "Copy-{name}-{timestamp}.log"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


# ----------------------------------------------------------------------
def AllocateLogPath(
    dm: DoneManager,
    log_root: Path,
    source: Path,
    now: Optional[datetime.datetime] = None,
) -> Optional[Path]:
    """\
    Returns the log filename for a backup of `source`.

    None is returned and an error is written to `dm` if the log directory can't be created; callers
    must not continue with the backup when this happens.

    Names have a resolution of one second, so two calls made within the same second for the same
    source will produce the same filename.
    """

    try:
        log_root.mkdir(parents=True, exist_ok=True)
    except OSError as ex:
        dm.WriteError(f"The log directory '{log_root}' could not be created ({ex}).\n")
        return None

    return log_root / CreateLogFilename(source, now or datetime.datetime.now())


# ----------------------------------------------------------------------
def CreateLogFilename(
    source: PurePath,
    now: datetime.datetime,
) -> str:
    name = source.name

    if not name:
        # Drive roots ("C:\\", "/") don't have a leaf name
        name = re.sub(r"[:\\/]", "", source.anchor) or "root"

    return LOG_FILENAME_TEMPLATE.format(
        name=name,
        timestamp=now.strftime(TIMESTAMP_FORMAT),
    )

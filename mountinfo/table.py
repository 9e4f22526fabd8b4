# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Readers for the live mount table of the current host."""

import logging
import os
import sys
from pathlib import Path
from typing import List, Protocol, Union

from mountinfo.errors import MountTableError
from mountinfo.schemas.mount import MountRecord

logger = logging.getLogger(__name__)

PROC_MOUNTS = "/proc/mounts"

_FIELD_COUNT = 4


class MountTableReader(Protocol):
    """Produces the mount records of the host, in the order the OS reports them."""

    def read(self) -> List[MountRecord]:
        """Take one snapshot of the mount table."""


def as_mount_record(line: str) -> MountRecord:
    """Parse the four leading fields of a mount table line.

    Trailing fields (dump frequency, pass number) are ignored. Short lines are
    kept with the missing fields left empty.
    """
    fields = line.split(maxsplit=_FIELD_COUNT)[:_FIELD_COUNT]
    fields += [""] * (_FIELD_COUNT - len(fields))
    source, target, fstype, options = fields
    return MountRecord(source=source, target=target, fstype=fstype, options=options)


class ProcMountsReader:
    """Reads a line-oriented table such as /proc/mounts."""

    def __init__(self, path: Union[str, Path] = PROC_MOUNTS) -> None:
        self.path = Path(path)

    def read(self) -> List[MountRecord]:
        try:
            with self.path.open("rb") as f:
                records = [as_mount_record(os.fsdecode(line)) for line in f]
        except OSError as e:
            raise MountTableError(f"{self.path}: {e.strerror or e}") from e
        logger.debug(f"Read {len(records)} records from {self.path}")
        return records


def default_reader(mount_table: Union[str, Path, None] = None) -> MountTableReader:
    """Pick the mount table strategy for the running platform.

    Linux exposes the table as a file. The BSDs only offer getmntinfo(3).
    """
    if sys.platform.startswith("linux"):
        return ProcMountsReader(PROC_MOUNTS if mount_table is None else mount_table)
    if mount_table is not None:
        return ProcMountsReader(mount_table)
    if sys.platform.startswith("freebsd"):
        from mountinfo.getmntinfo import GetmntinfoReader

        return GetmntinfoReader()
    raise MountTableError(f"Operating system not supported: {sys.platform}")

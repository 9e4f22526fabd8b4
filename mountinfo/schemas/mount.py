# Copyright (c) The mountinfo authors.
# All rights reserved.
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class MountRecord:
    """One active mount as reported by the OS mount table.

    https://man7.org/linux/man-pages/man5/proc_pid_mounts.5.html
    """

    source: str
    target: str
    fstype: str
    options: str


class FieldSelector(Enum):
    """The MountRecord field printed for every matching mount."""

    SOURCE = "source"
    TARGET = "target"
    FSTYPE = "fstype"
    OPTIONS = "options"

# Copyright (c) The mountinfo authors.
# All rights reserved.
import errno
import os
from typing import List

import pytest

from mountinfo.errors import MountTableError
from mountinfo.getmntinfo import (
    decode_mount_flags,
    GetmntinfoReader,
    MountFlag,
    StatfsEntry,
)
from mountinfo.schemas.mount import MountRecord


@pytest.mark.parametrize(
    "flags, expected",
    [
        (0, ""),
        (MountFlag.RDONLY, "read-only"),
        (MountFlag.LOCAL | MountFlag.NOATIME, "local,noatime"),
        # names come out in table order, not bit order
        (
            MountFlag.RDONLY | MountFlag.NOSUID | MountFlag.ASYNC | MountFlag.LOCAL,
            "asynchronous,local,nosuid,read-only",
        ),
        (MountFlag.EXPORTED | MountFlag.QUOTA, "NFS exported,with quotas"),
        (
            MountFlag.SOFTDEP | MountFlag.MULTILABEL | MountFlag.ACLS,
            "soft-updates,multilabel,acls",
        ),
        (MountFlag.GJOURNAL | MountFlag.SUIDDIR, "suiddir,gjournal"),
        (MountFlag.NOCLUSTERR | MountFlag.NOCLUSTERW, "noclusterr,noclusterw"),
        # visible flags without a name and unknown bits are dropped
        (MountFlag.ROOTFS | MountFlag.LOCAL, "local"),
        (MountFlag.NFS4ACLS, ""),
        (0x1_0000_0000 | MountFlag.NOEXEC, "noexec"),
    ],
)
def test_decode_mount_flags(flags: int, expected: str) -> None:
    assert decode_mount_flags(flags) == expected


def test_getmntinfo_reader() -> None:
    entries = [
        StatfsEntry(
            "/dev/ada0p2", "/", "ufs", MountFlag.LOCAL | MountFlag.SOFTDEP
        ),
        StatfsEntry("devfs", "/dev", "devfs", MountFlag.LOCAL | MountFlag.MULTILABEL),
        StatfsEntry("zroot/tmp", "/tmp", "zfs", MountFlag.LOCAL | MountFlag.NOSUID),
    ]

    def fake_getmntinfo() -> List[StatfsEntry]:
        return entries

    records = GetmntinfoReader(getmntinfo=fake_getmntinfo).read()

    assert records == [
        MountRecord("/dev/ada0p2", "/", "ufs", "local,soft-updates"),
        MountRecord("devfs", "/dev", "devfs", "local,multilabel"),
        MountRecord("zroot/tmp", "/tmp", "zfs", "local,nosuid"),
    ]


def test_getmntinfo_reader_failure() -> None:
    def failing_getmntinfo() -> List[StatfsEntry]:
        raise OSError(errno.EFAULT, os.strerror(errno.EFAULT))

    with pytest.raises(MountTableError, match="getmntinfo"):
        GetmntinfoReader(getmntinfo=failing_getmntinfo).read()

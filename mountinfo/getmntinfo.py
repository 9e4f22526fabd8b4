# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Mount table reader for FreeBSD, backed by getmntinfo(3).

The flag names follow the table used by FreeBSD's mount(8).
"""

import ctypes
import ctypes.util
import logging
import os
from dataclasses import dataclass
from enum import IntFlag
from typing import Callable, List, Tuple

from mountinfo.errors import MountTableError
from mountinfo.schemas.mount import MountRecord

logger = logging.getLogger(__name__)

# sys/mount.h
MNT_NOWAIT = 2
MFSNAMELEN = 16
MNAMELEN = 1024


class MountFlag(IntFlag):
    RDONLY = 0x00000001
    SYNCHRONOUS = 0x00000002
    NOEXEC = 0x00000004
    NOSUID = 0x00000008
    NFS4ACLS = 0x00000010
    UNION = 0x00000020
    ASYNC = 0x00000040
    EXRDONLY = 0x00000080
    EXPORTED = 0x00000100
    DEFEXPORTED = 0x00000200
    EXPORTANON = 0x00000400
    EXKERB = 0x00000800
    LOCAL = 0x00001000
    QUOTA = 0x00002000
    ROOTFS = 0x00004000
    USER = 0x00008000
    SUIDDIR = 0x00100000
    SOFTDEP = 0x00200000
    NOSYMFOLLOW = 0x00400000
    IGNORE = 0x00800000
    GJOURNAL = 0x02000000
    MULTILABEL = 0x04000000
    ACLS = 0x08000000
    NOATIME = 0x10000000
    EXPUBLIC = 0x20000000
    NOCLUSTERR = 0x40000000
    NOCLUSTERW = 0x80000000


MNT_VISFLAGMASK = (
    MountFlag.RDONLY
    | MountFlag.SYNCHRONOUS
    | MountFlag.NOEXEC
    | MountFlag.NOSUID
    | MountFlag.UNION
    | MountFlag.SUIDDIR
    | MountFlag.ASYNC
    | MountFlag.EXRDONLY
    | MountFlag.EXPORTED
    | MountFlag.DEFEXPORTED
    | MountFlag.EXPORTANON
    | MountFlag.EXKERB
    | MountFlag.EXPUBLIC
    | MountFlag.LOCAL
    | MountFlag.USER
    | MountFlag.QUOTA
    | MountFlag.ROOTFS
    | MountFlag.NOATIME
    | MountFlag.NOCLUSTERR
    | MountFlag.NOCLUSTERW
    | MountFlag.SOFTDEP
    | MountFlag.IGNORE
    | MountFlag.NOSYMFOLLOW
    | MountFlag.GJOURNAL
    | MountFlag.MULTILABEL
    | MountFlag.ACLS
    | MountFlag.NFS4ACLS
)

OPTION_NAMES: List[Tuple[MountFlag, str]] = [
    (MountFlag.ASYNC, "asynchronous"),
    (MountFlag.EXPORTED, "NFS exported"),
    (MountFlag.LOCAL, "local"),
    (MountFlag.NOATIME, "noatime"),
    (MountFlag.NOEXEC, "noexec"),
    (MountFlag.NOSUID, "nosuid"),
    (MountFlag.NOSYMFOLLOW, "nosymfollow"),
    (MountFlag.QUOTA, "with quotas"),
    (MountFlag.RDONLY, "read-only"),
    (MountFlag.SYNCHRONOUS, "synchronous"),
    (MountFlag.UNION, "union"),
    (MountFlag.NOCLUSTERR, "noclusterr"),
    (MountFlag.NOCLUSTERW, "noclusterw"),
    (MountFlag.SUIDDIR, "suiddir"),
    (MountFlag.SOFTDEP, "soft-updates"),
    (MountFlag.MULTILABEL, "multilabel"),
    (MountFlag.ACLS, "acls"),
    (MountFlag.GJOURNAL, "gjournal"),
]


def decode_mount_flags(flags: int) -> str:
    """Translate a statfs f_flags bitmask into comma-joined option names.

    Bits without a name are dropped.

    Examples:
    >>> decode_mount_flags(MountFlag.LOCAL | MountFlag.NOSUID | MountFlag.RDONLY)
    'local,nosuid,read-only'
    >>> decode_mount_flags(0)
    ''
    """
    flags &= MNT_VISFLAGMASK
    return ",".join(name for flag, name in OPTION_NAMES if flags & flag)


class Statfs(ctypes.Structure):
    """struct statfs, STATFS_VERSION 0x20140518 (FreeBSD 12 and later)."""

    _fields_ = [
        ("f_version", ctypes.c_uint32),
        ("f_type", ctypes.c_uint32),
        ("f_flags", ctypes.c_uint64),
        ("f_bsize", ctypes.c_uint64),
        ("f_iosize", ctypes.c_uint64),
        ("f_blocks", ctypes.c_uint64),
        ("f_bfree", ctypes.c_uint64),
        ("f_bavail", ctypes.c_int64),
        ("f_files", ctypes.c_uint64),
        ("f_ffree", ctypes.c_int64),
        ("f_syncwrites", ctypes.c_uint64),
        ("f_asyncwrites", ctypes.c_uint64),
        ("f_syncreads", ctypes.c_uint64),
        ("f_asyncreads", ctypes.c_uint64),
        ("f_spare", ctypes.c_uint64 * 10),
        ("f_namemax", ctypes.c_uint32),
        ("f_owner", ctypes.c_uint32),
        ("f_fsid", ctypes.c_int32 * 2),
        ("f_charspare", ctypes.c_char * 80),
        ("f_fstypename", ctypes.c_char * MFSNAMELEN),
        ("f_mntfromname", ctypes.c_char * MNAMELEN),
        ("f_mntonname", ctypes.c_char * MNAMELEN),
    ]


@dataclass(frozen=True)
class StatfsEntry:
    mntfromname: str
    mntonname: str
    fstypename: str
    flags: int


def libc_getmntinfo() -> List[StatfsEntry]:
    """Call getmntinfo(3) once. The returned buffer is owned by libc.

    Raises:
        OSError: If getmntinfo reports no entries.
    """
    libc = ctypes.CDLL(ctypes.util.find_library("c"), use_errno=True)
    getmntinfo = libc.getmntinfo
    getmntinfo.argtypes = [ctypes.POINTER(ctypes.POINTER(Statfs)), ctypes.c_int]
    getmntinfo.restype = ctypes.c_int

    buf = ctypes.POINTER(Statfs)()
    count = getmntinfo(ctypes.byref(buf), MNT_NOWAIT)
    if count == 0:
        errno = ctypes.get_errno()
        raise OSError(errno, os.strerror(errno))

    return [
        StatfsEntry(
            mntfromname=os.fsdecode(buf[i].f_mntfromname),
            mntonname=os.fsdecode(buf[i].f_mntonname),
            fstypename=os.fsdecode(buf[i].f_fstypename),
            flags=buf[i].f_flags,
        )
        for i in range(count)
    ]


class GetmntinfoReader:
    def __init__(
        self, getmntinfo: Callable[[], List[StatfsEntry]] = libc_getmntinfo
    ) -> None:
        self._getmntinfo = getmntinfo

    def read(self) -> List[MountRecord]:
        try:
            entries = self._getmntinfo()
        except OSError as e:
            raise MountTableError(f"getmntinfo: {e.strerror or e}") from e
        logger.debug(f"getmntinfo returned {len(entries)} entries")
        return [
            MountRecord(
                source=entry.mntfromname,
                target=entry.mntonname,
                fstype=entry.fstypename,
                options=decode_mount_flags(entry.flags),
            )
            for entry in entries
        ]

# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Record-level and point-level filters applied to the mount table."""

import sys
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, Iterator, Optional, Pattern, Sequence

from mountinfo.schemas.mount import MountRecord

# Linux lists the initial ramfs root as "rootfs"; it never names a real mount.
PSEUDO_ROOT_FSTYPES: FrozenSet[str] = (
    frozenset({"rootfs"}) if sys.platform.startswith("linux") else frozenset()
)


@dataclass(frozen=True)
class FilterConfig:
    node_include: Optional[Pattern[str]] = None
    node_exclude: Optional[Pattern[str]] = None
    fstype_include: Optional[Pattern[str]] = None
    fstype_exclude: Optional[Pattern[str]] = None
    options_include: Optional[Pattern[str]] = None
    options_exclude: Optional[Pattern[str]] = None
    allowed_targets: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class PointFilterConfig:
    point_include: Optional[Pattern[str]] = None
    point_skip: Optional[Pattern[str]] = None


def _included(pattern: Optional[Pattern[str]], value: str) -> bool:
    return pattern is None or pattern.search(value) is not None


def _excluded(pattern: Optional[Pattern[str]], value: str) -> bool:
    return pattern is not None and pattern.search(value) is not None


def keep(
    record: MountRecord,
    config: FilterConfig,
    skip_fstypes: AbstractSet[str] = PSEUDO_ROOT_FSTYPES,
) -> bool:
    """Decide whether a mount record survives the filter chain.

    Checks run in a fixed order and the first failing one rejects the record:
    pseudo-root fstype, node, fstype, options, then the allowed mount points.
    """
    if record.fstype in skip_fstypes:
        return False

    if not _included(config.node_include, record.source):
        return False
    if _excluded(config.node_exclude, record.source):
        return False

    if not _included(config.fstype_include, record.fstype):
        return False
    if _excluded(config.fstype_exclude, record.fstype):
        return False

    if not _included(config.options_include, record.options):
        return False
    if _excluded(config.options_exclude, record.options):
        return False

    if config.allowed_targets and record.target not in config.allowed_targets:
        return False

    return True


def filter_points(values: Sequence[str], config: PointFilterConfig) -> Iterator[str]:
    """Yield the values that pass the point include/skip patterns.

    `values` is sorted ascending; survivors are yielded in descending order.
    """
    for value in reversed(values):
        if not _included(config.point_include, value):
            continue
        if _excluded(config.point_skip, value):
            continue
        yield value

# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Runs one mountinfo query: read, filter, collect, then print the points."""

import logging
from typing import Callable, Iterable

from mountinfo.collect import ResultSet, select_field
from mountinfo.filters import filter_points, FilterConfig, keep, PointFilterConfig
from mountinfo.schemas.mount import FieldSelector, MountRecord
from mountinfo.table import MountTableReader
from mountinfo.types import ExitCode

logger = logging.getLogger(__name__)


def collect_mounts(
    records: Iterable[MountRecord],
    config: FilterConfig,
    selector: FieldSelector,
) -> ResultSet:
    """Select one field from every record that passes `config`."""
    result = ResultSet()
    accepted = 0
    for record in records:
        if not keep(record, config):
            continue
        accepted += 1
        result.add(select_field(record, selector))
    logger.debug(f"{accepted} records accepted, {len(result)} distinct values")
    return result


def run(
    reader: MountTableReader,
    filter_config: FilterConfig,
    point_config: PointFilterConfig,
    selector: FieldSelector,
    quiet: bool,
    echo: Callable[[str], None],
) -> ExitCode:
    """Print the matching values in descending order.

    Returns ExitCode.OK when at least one value passed the point filter,
    whether or not it was printed.
    """
    values = collect_mounts(reader.read(), filter_config, selector)

    exit_code = ExitCode.NO_MATCH
    for value in filter_points(values, point_config):
        if not quiet:
            echo(value)
        exit_code = ExitCode.OK

    logger.debug(f"Finished with {exit_code}")
    return exit_code

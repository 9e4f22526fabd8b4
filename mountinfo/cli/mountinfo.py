# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Print the mounted filesystems matching a set of filters.

Intended for init scripts, e.g. `mountinfo -q /var` exits 0 only if /var is mounted
and `mountinfo --fstype-regex '^ext4$'` lists every ext4 mount point.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Pattern, Tuple

import click
from mountinfo._version import __version__
from mountinfo.click import (
    get_selector,
    log_folder_option,
    log_level_option,
    mount_table_option,
    MountPoint,
    quiet_option,
    regex_option,
    selector_option,
    SelectorCommand,
    toml_config_option,
    verbose_option,
)
from mountinfo.driver import run
from mountinfo.env_variables import quiet_from_env
from mountinfo.filters import FilterConfig, PointFilterConfig
from mountinfo.schemas.mount import FieldSelector
from mountinfo.table import default_reader
from mountinfo.types import LOG_LEVEL
from mountinfo.utils.log import init_logger
from typeguard import typechecked

LOGGER_NAME = "mountinfo"


def echo_path(value: str) -> None:
    """Print a value with the bytes it had in the mount table."""
    click.echo(os.fsencode(value))


@click.command(cls=SelectorCommand, epilog=f"mountinfo version: {__version__}")
@toml_config_option("mountinfo")
@selector_option(
    "--options",
    "-i",
    selector=FieldSelector.OPTIONS,
    help="Print the mount options instead of the mount point.",
)
@selector_option(
    "--fstype",
    "-s",
    selector=FieldSelector.FSTYPE,
    help="Print the filesystem type instead of the mount point.",
)
@selector_option(
    "--node",
    "-t",
    selector=FieldSelector.SOURCE,
    help="Print the device node instead of the mount point.",
)
@regex_option(
    "--node-regex", "-n", help="Only mounts whose node matches this regex."
)
@regex_option(
    "--skip-node-regex", "-N", help="Skip mounts whose node matches this regex."
)
@regex_option(
    "--fstype-regex",
    "-f",
    help="Only mounts whose filesystem type matches this regex.",
)
@regex_option(
    "--skip-fstype-regex",
    "-F",
    help="Skip mounts whose filesystem type matches this regex.",
)
@regex_option(
    "--options-regex", "-o", help="Only mounts whose options match this regex."
)
@regex_option(
    "--skip-options-regex", "-O", help="Skip mounts whose options match this regex."
)
@regex_option(
    "--point-regex", "-p", help="Only print values matching this regex."
)
@regex_option(
    "--skip-point-regex", "-P", help="Do not print values matching this regex."
)
@quiet_option
@verbose_option
@log_level_option
@log_folder_option
@mount_table_option
@click.version_option(__version__)
@click.argument("mounts", nargs=-1, type=MountPoint())
@click.pass_context
@typechecked
def main(
    ctx: click.Context,
    node_regex: Optional[Pattern[str]],
    skip_node_regex: Optional[Pattern[str]],
    fstype_regex: Optional[Pattern[str]],
    skip_fstype_regex: Optional[Pattern[str]],
    options_regex: Optional[Pattern[str]],
    skip_options_regex: Optional[Pattern[str]],
    point_regex: Optional[Pattern[str]],
    skip_point_regex: Optional[Pattern[str]],
    quiet: bool,
    verbose: bool,
    log_level: LOG_LEVEL,
    log_folder: Optional[str],
    mount_table: Optional[Path],
    mounts: Tuple[str, ...],
) -> None:
    """Print the mounted filesystems matching the given filters.

    MOUNTS restricts the output to the given mount points. Values are printed
    one per line in descending order. Exits 0 if anything matched, 1 otherwise.
    """
    logger, _ = init_logger(
        logger_name=LOGGER_NAME,
        log_level=logging.DEBUG if verbose else getattr(logging, log_level),
        log_dir=log_folder,
    )
    selector = get_selector(ctx)
    quiet = quiet or quiet_from_env()
    logger.debug(
        f"selector: {selector.value}, quiet: {quiet}, mounts: {list(mounts)}, "
        f"mount table: {mount_table or 'platform default'}"
    )

    filter_config = FilterConfig(
        node_include=node_regex,
        node_exclude=skip_node_regex,
        fstype_include=fstype_regex,
        fstype_exclude=skip_fstype_regex,
        options_include=options_regex,
        options_exclude=skip_options_regex,
        allowed_targets=frozenset(mounts),
    )
    point_config = PointFilterConfig(
        point_include=point_regex, point_skip=skip_point_regex
    )

    exit_code = run(
        reader=default_reader(mount_table),
        filter_config=filter_config,
        point_config=point_config,
        selector=selector,
        quiet=quiet,
        echo=echo_path,
    )
    ctx.exit(exit_code.value)


if __name__ == "__main__":
    main()

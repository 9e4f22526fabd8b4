# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Helper functionality for click commands"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Pattern,
    Tuple,
    TypeVar,
    Union,
)

import click
import tomli
from click.core import ParameterSource
from mountinfo.schemas.mount import FieldSelector
from typeguard import typechecked
from typing_extensions import ParamSpec

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/mountinfo/config.toml"

SELECTOR_META_KEY = "mountinfo.selector"

_Tv = TypeVar("_Tv")
_ClickCallback = Callable[[click.Context, click.Parameter, _Tv], None]

_P = ParamSpec("_P")
_R = TypeVar("_R")


class TypedParamType(click.ParamType, ABC, Generic[_Tv]):
    """Typesafe click.ParamType which is generic in the return type of `convert`"""

    @abstractmethod
    def convert(
        self,
        value: Any,
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> _Tv:
        pass


class Regex(TypedParamType[Pattern[str]]):
    """Compile an (extended) regular expression."""

    name = "regex"

    def convert(
        self,
        value: Any,
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> Pattern[str]:
        if isinstance(value, re.Pattern):
            return value
        try:
            return re.compile(value)
        except re.error as e:
            self.fail(f"invalid regex {value!r}: {e}", param, ctx)
        except TypeError:
            self.fail(
                f"Expected string, but got {value!r} of type {type(value).__name__}",
                param,
                ctx,
            )


class MountPoint(TypedParamType[str]):
    """An absolute path naming a mount point."""

    name = "mount_point"

    def convert(
        self,
        value: Any,
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> str:
        if not isinstance(value, str) or not value.startswith("/"):
            self.fail(f"'{value}' is not a mount point", param, ctx)
        return value


@typechecked
def ensure_dict(x: Any) -> Dict[str, Any]:
    return x


def _set_default_map(name: str) -> _ClickCallback[Path]:
    @typechecked
    def cb(ctx: click.Context, param: click.Parameter, path: Path) -> None:
        if not path.exists() or path == Path("/dev/null"):
            return

        logger.info(f"Reading config from {path}...")
        with path.open("rb") as f:
            try:
                conf = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise click.BadParameter(
                    f"{path} does not contain valid TOML.",
                    ctx=ctx,
                    param=param,
                ) from e
        try:
            default_map = ensure_dict(conf[name])
        except KeyError as e:
            raise click.BadParameter(
                f"'{name}' is not a top-level table name in {path}. Valid names: {list(conf.keys())}",
                ctx=ctx,
                param=param,
            ) from e
        # a single value is accepted for a repeatable option
        for p in ctx.command.params:
            if p.multiple and isinstance(default_map.get(p.name or ""), str):
                default_map[p.name or ""] = [default_map[p.name or ""]]
        logger.info(f"Loaded table '{name}'.")

        ctx.default_map = {**(ctx.default_map or {}), **default_map}

    return cb


def toml_config_option(
    name: str,
    *,
    default_config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
) -> Callable[[Callable[_P, _R]], Callable[_P, _R]]:
    """Shared decorator for loading default option values from a TOML config file.
    Adds a `--config` option to the given command which takes a path. A non-existent
    path or `/dev/null` is treated as an empty dictionary.

    Precedence (lowest to highest):
    * `default` argument to `click.option`
    * the context's `default_map` setting
    * the value in the config file
    * value passed at the command line

    Parameters:
        name: The top-level table name in the config file containing the default values
            to use.
        default_config_path: The path from which to load the config if the option is
            omitted at the command line.
    """

    def decorator(f: Callable[_P, _R]) -> Callable[_P, _R]:
        return click.option(
            "--config",
            type=click.Path(dir_okay=False, path_type=Path),
            callback=_set_default_map(name),
            default=default_config_path,
            show_default=True,
            is_eager=True,
            expose_value=False,
            help=(
                f"Load option values from table '{name}' in the given TOML config file. "
                "A non-existent path or '/dev/null' are ignored and treated as empty tables."
            ),
        )(f)

    return decorator


class SelectorOption(click.Option):
    """A flag choosing which mount field is printed."""

    def __init__(self, *args: Any, selector: FieldSelector, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.selector = selector


class SelectorCommand(click.Command):
    """A command whose selector flags resolve to the last one on the command line.

    click processes every parameter once, at its first occurrence, so `-i -s -i`
    would otherwise select the fstype. The parser's order lists every occurrence.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        _, _, param_order = self.make_parser(ctx).parse_args(args=list(args))
        for param in param_order:
            if isinstance(param, SelectorOption):
                ctx.meta[SELECTOR_META_KEY] = param.selector
        return super().parse_args(ctx, args)


def _selector_from_config(
    ctx: click.Context, param: click.Parameter, value: bool
) -> None:
    # Command-line flags were resolved in SelectorCommand.parse_args; a selector
    # from the config file only applies when none was given there.
    if not value or not isinstance(param, SelectorOption):
        return
    assert param.name is not None
    if ctx.get_parameter_source(param.name) is ParameterSource.COMMANDLINE:
        return
    ctx.meta.setdefault(SELECTOR_META_KEY, param.selector)


def selector_option(
    *param_decls: str, selector: FieldSelector, help: str
) -> Callable[[Callable[_P, _R]], Callable[_P, _R]]:
    """Read the chosen field with `get_selector`. Requires `SelectorCommand`."""

    def decorator(f: Callable[_P, _R]) -> Callable[_P, _R]:
        return click.option(
            *param_decls,
            cls=SelectorOption,
            selector=selector,
            is_flag=True,
            default=False,
            expose_value=False,
            callback=_selector_from_config,
            help=help,
        )(f)

    return decorator


def get_selector(
    ctx: click.Context, default: FieldSelector = FieldSelector.TARGET
) -> FieldSelector:
    return ctx.meta.get(SELECTOR_META_KEY, default)


def _last_pattern(
    ctx: click.Context, param: click.Parameter, value: Tuple[Pattern[str], ...]
) -> Optional[Pattern[str]]:
    return value[-1] if value else None


def regex_option(
    *param_decls: str, help: str
) -> Callable[[Callable[_P, _R]], Callable[_P, _R]]:
    """A regex option; every occurrence is compiled and the last one is used."""
    return click.option(
        *param_decls,
        type=Regex(),
        multiple=True,
        callback=_last_pattern,
        help=help,
    )


log_level_option = click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default="WARNING",
    show_default=True,
    help="Logging verbosity level.",
)

log_folder_option = click.option(
    "--log-folder",
    type=click.Path(file_okay=False),
    default=None,
    help="The directory where logs will be stored. Logs go to stderr if omitted.",
)

verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Shorthand for --log-level DEBUG.",
)

quiet_option = click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Print nothing; only the exit status tells whether anything matched. "
    "Setting RC_QUIET=yes has the same effect.",
)

mount_table_option = click.option(
    "--mount-table",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read mounts from this table file instead of the platform default "
    "(/proc/mounts on Linux, getmntinfo(3) on FreeBSD). Other systems, including "
    "NetBSD, OpenBSD and DragonFly, have no built-in reader and need this option.",
)

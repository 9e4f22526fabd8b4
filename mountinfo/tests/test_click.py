# Copyright (c) The mountinfo authors.
# All rights reserved.
import re
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, Union

import click
import pytest
from click.testing import CliRunner

from mountinfo.click import (
    get_selector,
    MountPoint,
    Regex,
    selector_option,
    SelectorCommand,
    toml_config_option,
)
from mountinfo.schemas.mount import FieldSelector
from typeguard import typechecked


def _write_contents(path: Path, contents: str) -> Path:
    with path.open("w") as f:
        f.write(contents)
    return path


FnGetArgs = Callable[[Path, str], Sequence[str]]


def _case_different_config() -> Tuple[FnGetArgs, str]:
    return (
        lambda p, name: [
            "--config",
            str(
                _write_contents(
                    p / "other_config",
                    f"""
                    [{name}]
                    foo = "baz"
                    """,
                )
            ),
        ],
        "baz\nNone\n",
    )


class TestTomlConfigOption:
    @staticmethod
    @pytest.mark.parametrize(
        "get_args, expected_stdout",
        [
            # passing no args should use the value in the default config
            ([], "hello, world!\nNone\n"),
            # the command line wins over the default config
            (["--foo", "bar"], "bar\nNone\n"),
            # setting a different config path should ignore the default config
            _case_different_config(),
            # nonexistent config should be ignored and treated as an empty table
            (
                lambda p, name: ["--config", str(p / "does_not_exist")],
                "foo default\nNone\n",
            ),
            # /dev/null is the same as a nonexistent config
            (["--config", "/dev/null"], "foo default\nNone\n"),
        ],
    )
    @typechecked
    def test_uses_correct_value(
        tmp_path: Path,
        get_args: Union[Sequence[str], FnGetArgs],
        expected_stdout: str,
    ) -> None:
        name = "main"
        config_path = _write_contents(
            tmp_path / "config.toml",
            f"""
            [{name}]
            foo = "hello, world!"
            not_an_option = 42

            [not-{name}]
            foo = "oops"
            """,
        )
        runner = CliRunner()
        args = get_args(tmp_path, name) if callable(get_args) else get_args

        @click.command()
        @toml_config_option(name, default_config_path=config_path)
        @click.option("--foo", default="foo default")
        @click.option("--missing-in-config", type=int)
        def main(foo: Optional[str], missing_in_config: Optional[int]) -> None:
            print(foo)
            print(missing_in_config)

        r = runner.invoke(main, args, catch_exceptions=False)

        assert r.exit_code == 0
        assert r.stdout == expected_stdout

    @staticmethod
    def test_invalid_toml(tmp_path: Path) -> None:
        config_path = _write_contents(tmp_path / "config.toml", "[main\nfoo = 1\n")

        @click.command()
        @toml_config_option("main", default_config_path=config_path)
        def main() -> None:
            pass

        r = CliRunner().invoke(main, [])

        assert r.exit_code == 2
        assert "does not contain valid TOML" in r.stderr


@pytest.mark.parametrize(
    "value, expected",
    [
        ("ext[234]", re.compile("ext[234]")),
        ("^/$", re.compile("^/$")),
        ("(a|b)+", re.compile("(a|b)+")),
    ],
)
def test_regex_param(value: str, expected: "re.Pattern[str]") -> None:
    assert Regex().convert(value, None, None) == expected


@pytest.mark.parametrize("value", ["(", "[a-", "*x"])
def test_regex_param_invalid(value: str) -> None:
    with pytest.raises(click.BadParameter, match="invalid regex"):
        Regex().convert(value, None, None)


@pytest.mark.parametrize("value", ["/", "/var", "/run/user/1000"])
def test_mount_point_param(value: str) -> None:
    assert MountPoint().convert(value, None, None) == value


@pytest.mark.parametrize("value", ["var", "relative/path", "", "./var"])
def test_mount_point_param_relative(value: str) -> None:
    with pytest.raises(click.BadParameter, match="is not a mount point"):
        MountPoint().convert(value, None, None)


@click.command(cls=SelectorCommand)
@selector_option("--options", "-i", selector=FieldSelector.OPTIONS, help="options")
@selector_option("--fstype", "-s", selector=FieldSelector.FSTYPE, help="fstype")
@selector_option("--node", "-t", selector=FieldSelector.SOURCE, help="node")
@click.pass_context
def _selector_cmd(ctx: click.Context) -> None:
    click.echo(get_selector(ctx).value)


@pytest.mark.parametrize(
    "args, expected",
    [
        ([], "target"),
        (["-i"], "options"),
        (["--fstype"], "fstype"),
        (["-t"], "source"),
        (["-i", "-t"], "source"),
        (["-t", "-s", "-i"], "options"),
        (["-i", "-s", "-i"], "options"),
        (["-s", "-s"], "fstype"),
    ],
)
def test_selector_last_flag_wins(args: Sequence[str], expected: str) -> None:
    r = CliRunner().invoke(_selector_cmd, args, catch_exceptions=False)

    assert r.stdout == f"{expected}\n"

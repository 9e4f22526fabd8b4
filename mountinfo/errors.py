# Copyright (c) The mountinfo authors.
# All rights reserved.
"""Fatal errors raised while building the mount listing."""

import click


class MountInfoError(click.ClickException):
    """Base class for errors that abort the run.

    click prints the message on stderr and exits with ``exit_code``.
    """

    exit_code = 2


class MountTableError(MountInfoError):
    """The live mount table could not be read."""


class MountInfoConfigError(MountInfoError):
    """The run was configured with a value the pipeline cannot handle."""

# Copyright (c) The mountinfo authors.
# All rights reserved.
import os

QUIET_ENV = "RC_QUIET"


def is_env(variable: str, value: str) -> bool:
    """True if `variable` is set to `value`, compared case-insensitively."""
    current = os.getenv(variable)
    return current is not None and current.lower() == value.lower()


def quiet_from_env() -> bool:
    return is_env(QUIET_ENV, "yes")

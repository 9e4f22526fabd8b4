# Copyright (c) The mountinfo authors.
# All rights reserved.
from enum import Enum
from typing import Literal

LOG_LEVEL = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ExitCode(Enum):
    """Process exit status of a mountinfo run.

    Fatal usage and environment errors exit through click with status 2.
    """

    OK = 0
    NO_MATCH = 1

# topmark:header:start
#
#   project      : FormatSniff
#   file         : exit_codes.py
#   file_relpath : src/formatsniff/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Standardized exit codes used by the FormatSniff CLI.

Codes above 2 follow the BSD ``sysexits.h`` convention so that shell
scripts can tell usage, configuration and I/O problems apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by ``formatsniff``.

    Attributes:
        SUCCESS (int): Every asset was resolved.
        FAILURE (int): Generic failure.
        UNRESOLVED (int): At least one asset was read but not recognized.
        USAGE_ERROR (int): Invalid command-line usage.
        FILE_NOT_FOUND (int): An input path does not exist.
        IO_ERROR (int): An input could not be read (I/O fault, corrupt archive).
        PERMISSION_DENIED (int): An input could not be read for lack of permission.
        CONFIG_ERROR (int): The configuration is invalid.

    Usage:
        ```python
        import subprocess
        from formatsniff.cli.exit_codes import ExitCode

        result = subprocess.run(["formatsniff", "sniff", "book.epub"])
        if result.returncode == ExitCode.UNRESOLVED:
            print("Unknown format.")
        ```
    """

    SUCCESS = 0
    FAILURE = 1
    UNRESOLVED = 2
    USAGE_ERROR = 64
    FILE_NOT_FOUND = 66
    IO_ERROR = 74
    PERMISSION_DENIED = 77
    CONFIG_ERROR = 78

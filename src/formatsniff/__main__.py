# topmark:header:start
#
#   project      : FormatSniff
#   file         : __main__.py
#   file_relpath : src/formatsniff/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running FormatSniff via ``python -m formatsniff``.

Delegates to `formatsniff.cli.main.cli`, the same entry point as the
``formatsniff`` console script.

Examples:
    Sniff a file using the module interface::

        python -m formatsniff sniff book.epub
"""

from __future__ import annotations

from formatsniff.cli.main import cli

if __name__ == "__main__":
    cli()

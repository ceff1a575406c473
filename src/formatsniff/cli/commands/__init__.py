# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatSniff CLI subcommands."""

# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/sniffers/builtins/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in format detectors.

Each submodule groups the detectors of one family and exports them in a
``SNIFFERS`` list of [`FormatSniffer`][formatsniff.sniffers.base.FormatSniffer]
instances. [`formatsniff.sniffers.default`][] collects these lists and
arranges the detectors in resolution order.
"""

from __future__ import annotations

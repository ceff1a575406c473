# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/sniffers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Format detectors and their composition.

Submodules:
    base: the `FormatSniffer` interface and detector helpers.
    composite: `CompositeFormatSniffer`, the fixed-point refinement loop.
    default: `DefaultFormatSniffer`, every built-in detector in priority order.
    builtins: the built-in detectors, grouped by family.
"""

from __future__ import annotations

from formatsniff.sniffers.base import FormatSniffer
from formatsniff.sniffers.composite import CompositeFormatSniffer, RefinementError
from formatsniff.sniffers.default import DefaultFormatSniffer

__all__ = [
    "CompositeFormatSniffer",
    "DefaultFormatSniffer",
    "FormatSniffer",
    "RefinementError",
]

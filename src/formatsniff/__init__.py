# topmark:header:start
#
#   project      : FormatSniff
#   file         : __init__.py
#   file_relpath : src/formatsniff/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""FormatSniff package.

FormatSniff resolves the format of publication files, archives and media
(EPUB, Readium packages, OPDS feeds, comics, audiobooks, PDF, images and
audio) from progressively more expensive evidence: file extension and
declared media type hints, content bytes, then archive entries.

Entry points:
    * [`formatsniff.api.resolve`][] and `resolve_async` for hints, content and
      containers you already hold;
    * [`formatsniff.asset.AssetSniffer`][] for files, directories and resources;
    * the ``formatsniff`` command line (``python -m formatsniff``).
"""

from __future__ import annotations

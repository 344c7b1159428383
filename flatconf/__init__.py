"""Top-level package for flatconf.

This package flattens brace-nested configuration text into a mapping from
slash-joined key paths to string values. The main entry point is
`ParsedConfig`; `load_file` reads a document from disk first.
"""

from .document import ParsedConfig
from .loader import load_file, loads
from .parser import iter_statements, parse

__all__ = [
    "ParsedConfig",
    "__version__",
    "iter_statements",
    "load_file",
    "loads",
    "parse",
]

__version__ = "0.1.0"

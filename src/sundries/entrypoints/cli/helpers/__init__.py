"""CLI helpers for SUNDRIES.

Utilities used by the command-line interface: OSC-8 terminal hyperlinks when
supported, an error emitter that writes to stderr with emoji→ASCII fallbacks,
and the NAME=LEVEL logger option parser.
"""

from .hyperlinks import hyperlink
from .log_level_parser import parse_log_level
from .messages import error

__all__ = ["error", "hyperlink", "parse_log_level"]

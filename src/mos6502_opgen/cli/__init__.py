"""
Opcode Generator Command-Line Interface
=======================================

This package provides the command-line tools:

- **m6502gen**: Opcode table source generator
- **m6502dis**: Table-driven 6502 disassembler

Each tool is a Click application; both share the error handling and
logging setup defined here and in ``errors``.
"""

import logging

__all__ = ["m6502gen", "m6502dis", "setup_logging"]


def setup_logging(verbose: bool) -> None:
    """Configure logging on stderr based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )

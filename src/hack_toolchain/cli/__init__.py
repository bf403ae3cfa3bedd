"""
Hack Toolchain Command-Line Interface
=====================================

This package provides command-line tools for the toolchain:

- **hackvm**: VM translator (.vm → .asm)
- **hackasm**: Hack assembler (.asm → .hack)

Each tool is implemented as a Click-based CLI application. Both read
their whole input, run the translation, and only then write output, so
a failed run never leaves a partial output file behind.
"""

import logging

__all__ = ["hackasm", "hackvm", "setup_logging"]


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )

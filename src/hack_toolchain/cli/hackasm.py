"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly (writes Add.hack):
    $ hackasm Add.asm

With output file:
    $ hackasm Add.asm -o out/Add.hack

With symbol table and listing:
    $ hackasm Pong.asm -s Pong.sym -l Pong.lst

Verbose mode:
    $ hackasm -v Add.asm
"""

from pathlib import Path
from typing import Optional

import click

from hack_toolchain import __version__
from hack_toolchain.assembler import Assembler
from hack_toolchain.cli import setup_logging
from hack_toolchain.cli.errors import handle_cli_exception


def format_symbols(symbols: dict[str, int]) -> str:
    """Render a symbol table as `name address` lines sorted by address."""
    rows = sorted(symbols.items(), key=lambda item: (item[1], item[0]))
    return "".join(f"{name} {address}\n" for name, address in rows)


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hack file (default: input.hack)",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the resolved symbol table",
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a listing (address, word, source)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output: Optional[Path],
    symbols: Optional[Path],
    listing: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly into binary machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.

    \b
    Examples:
        hackasm Add.asm              # Outputs Add.hack
        hackasm Add.asm -o out.hack  # Specify output file
        hackasm Pong.asm -s Pong.sym # Also write symbols
    """
    setup_logging(verbose)
    output_file = output if output is not None else input_file.with_suffix(".hack")

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        source = input_file.read_text()
        asm = Assembler()
        binary = asm.assemble_string(source, str(input_file))

        output_file.write_text(binary)
        if verbose:
            click.echo(f"Wrote {len(asm.get_instructions())} words to {output_file}")

        if symbols:
            symbols.write_text(format_symbols(asm.get_symbols()))
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if listing:
            listing.write_text(asm.get_listing() + "\n")
            if verbose:
                click.echo(f"Wrote listing to {listing}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()

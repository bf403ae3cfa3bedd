"""
hackvm - VM Translator Command-Line Interface
=============================================

This module implements the command-line interface for the VM translator.

Usage Examples
--------------
Basic translation (writes SimpleAdd.asm):
    $ hackvm SimpleAdd.vm

Translate and assemble in one go (writes SimpleAdd.asm and SimpleAdd.hack):
    $ hackvm --assemble SimpleAdd.vm

Keep the VM source as comments in the output:
    $ hackvm --comments FibonacciSeries.vm
"""

from pathlib import Path
from typing import Optional

import click

from hack_toolchain import __version__
from hack_toolchain.assembler import Assembler
from hack_toolchain.cli import setup_logging
from hack_toolchain.cli.errors import handle_cli_exception
from hack_toolchain.vm import TranslatorOptions, VMTranslator
from hack_toolchain.vm.codegen import DEFAULT_STATIC_NAMESPACE


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .asm file (default: input.asm)",
)
@click.option(
    "--static-namespace",
    default=DEFAULT_STATIC_NAMESPACE,
    show_default=True,
    help="Prefix for static segment symbols (<prefix>.<index>)",
)
@click.option(
    "--comments/--no-comments",
    default=False,
    help="Precede each command's assembly with the VM command as a comment",
)
@click.option(
    "-a", "--assemble",
    "assemble_output",
    is_flag=True,
    help="Also assemble the result to a .hack file next to the .asm output",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackvm")
def main(
    input_file: Path,
    output: Optional[Path],
    static_namespace: str,
    comments: bool,
    assemble_output: bool,
    verbose: bool,
) -> None:
    """
    Translate VM code into Hack assembly.

    INPUT_FILE is the VM source file (.vm) to translate.

    \b
    Examples:
        hackvm SimpleAdd.vm              # Outputs SimpleAdd.asm
        hackvm SimpleAdd.vm -o out.asm   # Specify output file
        hackvm -a SimpleAdd.vm           # Also write SimpleAdd.hack
    """
    setup_logging(verbose)
    output_file = output if output is not None else input_file.with_suffix(".asm")

    options = TranslatorOptions(
        static_namespace=static_namespace,
        emit_comments=comments,
    )

    try:
        if verbose:
            click.echo(f"Translating {input_file}...")

        source = input_file.read_text()
        result = VMTranslator(options).translate_source(source, str(input_file))

        binary = None
        if assemble_output:
            binary = Assembler().assemble_string(result.assembly, str(output_file))

        output_file.write_text(result.assembly)
        if verbose:
            click.echo(
                f"Wrote {result.line_count} lines for {len(result.commands)} "
                f"commands to {output_file}"
            )

        if binary is not None:
            hack_file = output_file.with_suffix(".hack")
            hack_file.write_text(binary)
            if verbose:
                click.echo(f"Wrote {hack_file}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Translation")


if __name__ == "__main__":
    main()

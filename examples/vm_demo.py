#!/usr/bin/env python3
"""
Hack Toolchain Demo
===================

This script demonstrates how to use the toolchain to:
1. Translate a VM program to Hack assembly
2. Assemble it to binary words
3. Run it on the reference Hack CPU
4. Inspect the stack and symbol table

Usage:
    python examples/vm_demo.py
"""

from hack_toolchain import Assembler, HackCPU, TranslatorOptions, VMTranslator


# Computes Fib(n) recursively and leaves it on the stack
FIBONACCI_VM = """
push constant 10
call Main.fibonacci 1
label HALT
goto HALT

function Main.fibonacci 0
push argument 0
push constant 2
lt
if-goto BASE_CASE
push argument 0
push constant 2
sub
call Main.fibonacci 1
push argument 0
push constant 1
sub
call Main.fibonacci 1
add
return
label BASE_CASE
push argument 0
return
"""


def main():
    # ==========================================================================
    # 1. Translate
    # ==========================================================================
    print("Translating Fibonacci program...")
    translator = VMTranslator(TranslatorOptions(static_namespace="Main"))
    result = translator.translate_source(FIBONACCI_VM, "Fibonacci.vm")

    print(f"  Commands: {len(result.commands)}")
    print(f"  Assembly lines: {result.line_count}")

    # ==========================================================================
    # 2. Assemble
    # ==========================================================================
    print("\nAssembling...")
    assembler = Assembler()
    words = assembler.assemble_lines(result.assembly.splitlines(), "Fibonacci.asm")
    print(f"  Words: {len(words)}")

    # ==========================================================================
    # 3. Run
    # ==========================================================================
    # Set up the VM memory map: stack at 256, segments above it
    cpu = HackCPU(words)
    cpu.poke(0, 256)   # SP
    cpu.poke(1, 300)   # LCL
    cpu.poke(2, 400)   # ARG
    cpu.poke(3, 3000)  # THIS
    cpu.poke(4, 3010)  # THAT

    halt = assembler.get_label_address("HALT")
    print(f"\nRunning until HALT ({halt})...")
    reason = cpu.run(max_steps=5_000_000, breakpoint=halt)

    # ==========================================================================
    # 4. Inspect
    # ==========================================================================
    print(f"  Stopped: {reason.name} after {cpu.steps} steps")
    print(f"  SP: {cpu.sp}")
    print(f"  Fib(10) = {cpu.stack_top()}")

    labels = {
        name: address for name, address in assembler.get_symbols().items()
        if name.startswith(("RETURN_LABEL", "LT"))
    }
    print(f"  Internal labels: {len(labels)}")


if __name__ == "__main__":
    main()

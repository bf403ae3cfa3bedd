# =============================================================================
# test_translator.py - VM Translator Execution Tests
# =============================================================================
# End-to-end tests: VM source is translated, assembled and executed on the
# reference Hack CPU, and the resulting machine state is checked.
#
# Test coverage includes:
#   - Stack arithmetic and comparisons
#   - Push/pop through every segment
#   - Branching (label, goto, if-goto)
#   - Function call/return frame protocol, nested and recursive calls
#   - Determinism across independent runs
# =============================================================================

import pytest

from hack_toolchain.assembler import Assembler
from hack_toolchain.emulator import HackCPU, StopReason
from hack_toolchain.vm import TranslatorOptions, VMTranslator, translate


# =============================================================================
# Helper Functions
# =============================================================================

SP_BASE = 256
LCL_BASE = 300
ARG_BASE = 400
THIS_BASE = 3000
THAT_BASE = 3010


class VMRun:
    """Translate, assemble and execute a VM program."""

    def __init__(self, source: str, stop_label: str | None = None,
                 max_steps: int = 100_000, ram: dict[int, int] | None = None):
        self.assembly = translate(source)
        self.assembler = Assembler()
        words = self.assembler.assemble_lines(self.assembly.splitlines())
        self.cpu = HackCPU(words)

        self.cpu.poke(0, SP_BASE)
        self.cpu.poke(1, LCL_BASE)
        self.cpu.poke(2, ARG_BASE)
        self.cpu.poke(3, THIS_BASE)
        self.cpu.poke(4, THAT_BASE)
        for address, value in (ram or {}).items():
            self.cpu.poke(address, value)

        breakpoint = None
        if stop_label is not None:
            breakpoint = self.assembler.get_label_address(stop_label)
        self.reason = self.cpu.run(max_steps=max_steps, breakpoint=breakpoint)

    @property
    def sp(self) -> int:
        return self.cpu.sp

    def stack(self) -> list[int]:
        """Signed stack contents from SP_BASE up to SP."""
        return [self.cpu.peek_signed(a) for a in range(SP_BASE, self.cpu.sp)]

    def symbol(self, name: str) -> int:
        return self.assembler.get_symbols()[name]


# =============================================================================
# Arithmetic
# =============================================================================

class TestArithmetic:
    """Test stack arithmetic by execution."""

    def test_simple_add(self):
        """7 + 8 leaves 15 on top with SP one past it."""
        run = VMRun("push constant 7\npush constant 8\nadd")
        assert run.reason == StopReason.END_OF_PROGRAM
        assert run.cpu.stack_top() == 15
        assert run.sp == SP_BASE + 1

    @pytest.mark.parametrize("source,expected", [
        ("push constant 10\npush constant 3\nsub", 7),
        ("push constant 3\npush constant 10\nsub", -7),
        ("push constant 5\nneg", -5),
        ("push constant 12\npush constant 10\nand", 8),
        ("push constant 12\npush constant 10\nor", 14),
        ("push constant 0\nnot", -1),
    ])
    def test_operations(self, source, expected):
        run = VMRun(source)
        assert run.stack() == [expected]

    @pytest.mark.parametrize("x,y,op,expected", [
        (5, 5, "eq", -1),
        (5, 6, "eq", 0),
        (6, 5, "gt", -1),
        (5, 6, "gt", 0),
        (5, 5, "gt", 0),
        (5, 6, "lt", -1),
        (6, 5, "lt", 0),
        (5, 5, "lt", 0),
    ])
    def test_comparisons(self, x, y, op, expected):
        """Comparisons push all-ones for true and zero for false."""
        run = VMRun(f"push constant {x}\npush constant {y}\n{op}")
        assert run.stack() == [expected]

    def test_repeated_comparisons(self):
        """Several uses of the same comparison do not collide."""
        source = """
            push constant 1
            push constant 1
            eq
            push constant 2
            push constant 1
            eq
            push constant 1
            push constant 2
            lt
        """
        run = VMRun(source)
        assert run.stack() == [-1, 0, -1]

    def test_comparison_against_negative(self):
        run = VMRun("push constant 0\npush constant 1\nsub\npush constant 0\nlt")
        assert run.stack() == [-1]


# =============================================================================
# Memory Segments
# =============================================================================

class TestSegments:
    """Test push/pop through each segment by execution."""

    def test_push_pop_roundtrip_is_noop(self):
        """push X i; pop X i leaves X[i] and SP unchanged."""
        run = VMRun("push local 2\npop local 2", ram={LCL_BASE + 2: 42})
        assert run.cpu.peek(LCL_BASE + 2) == 42
        assert run.sp == SP_BASE

    @pytest.mark.parametrize("segment,base", [
        ("local", LCL_BASE),
        ("argument", ARG_BASE),
        ("this", THIS_BASE),
        ("that", THAT_BASE),
    ])
    def test_pop_based_segment(self, segment, base):
        run = VMRun(f"push constant 9\npop {segment} 3")
        assert run.cpu.peek(base + 3) == 9
        assert run.sp == SP_BASE

    @pytest.mark.parametrize("segment,base", [
        ("local", LCL_BASE),
        ("argument", ARG_BASE),
        ("this", THIS_BASE),
        ("that", THAT_BASE),
    ])
    def test_push_based_segment(self, segment, base):
        run = VMRun(f"push {segment} 1", ram={base + 1: 77})
        assert run.stack() == [77]

    def test_temp(self):
        run = VMRun("push constant 31\npop temp 6\npush temp 6\npush temp 6\nadd")
        assert run.cpu.peek(11) == 31
        assert run.stack() == [62]

    def test_pointer_moves_this_and_that(self):
        source = """
            push constant 3030
            pop pointer 0
            push constant 3040
            pop pointer 1
            push constant 32
            pop this 2
            push constant 46
            pop that 6
        """
        run = VMRun(source)
        assert run.cpu.peek(3) == 3030
        assert run.cpu.peek(4) == 3040
        assert run.cpu.peek(3032) == 32
        assert run.cpu.peek(3046) == 46

    def test_static(self):
        run = VMRun("push constant 12\npop static 3\npush constant 5\npop static 1\n"
                    "push static 3\npush static 1\nsub")
        assert run.cpu.peek(run.symbol("Foo.3")) == 12
        assert run.cpu.peek(run.symbol("Foo.1")) == 5
        assert run.symbol("Foo.3") != run.symbol("Foo.1")
        assert run.stack() == [7]

    def test_static_namespace_option(self):
        options = TranslatorOptions(static_namespace="Main")
        asm = VMTranslator(options).translate_source("push static 0").assembly
        assert "@Main.0" in asm.splitlines()


# =============================================================================
# Branching
# =============================================================================

class TestBranching:
    """Test label, goto and if-goto by execution."""

    IF_SOURCE = """
        push constant {value}
        if-goto SKIP
        push constant 111
        label SKIP
        push constant 222
    """

    @pytest.mark.parametrize("value", [1, 5, 32767])
    def test_if_goto_any_nonzero(self, value):
        """Any non-zero value takes the branch."""
        run = VMRun(self.IF_SOURCE.format(value=value))
        assert run.stack() == [222]

    def test_if_goto_zero_falls_through(self):
        run = VMRun(self.IF_SOURCE.format(value=0))
        assert run.stack() == [111, 222]

    def test_if_goto_negative(self):
        run = VMRun("push constant 1\nneg\nif-goto T\npush constant 1\nlabel T")
        assert run.stack() == []

    def test_goto(self):
        run = VMRun("goto OVER\npush constant 1\nlabel OVER\npush constant 2")
        assert run.stack() == [2]

    def test_loop_sums_to_n(self):
        """sum = 5 + 4 + 3 + 2 + 1."""
        source = """
            push constant 0
            pop temp 0
            push constant 5
            pop temp 1
            label LOOP
            push temp 0
            push temp 1
            add
            pop temp 0
            push temp 1
            push constant 1
            sub
            pop temp 1
            push temp 1
            if-goto LOOP
        """
        run = VMRun(source)
        assert run.cpu.peek(5) == 15
        assert run.sp == SP_BASE


# =============================================================================
# Function Call Protocol
# =============================================================================

class TestFunctionCalls:
    """Test the call/return frame protocol by execution."""

    def test_call_and_return(self):
        """Arguments are replaced by one return value; bases are restored."""
        source = """
            push constant 3
            push constant 4
            call Add2 2
            label END
            goto END
            function Add2 1
            push constant 5000
            pop pointer 0
            push constant 6000
            pop pointer 1
            push argument 0
            push argument 1
            add
            pop local 0
            push local 0
            push constant 10
            add
            return
        """
        run = VMRun(source, stop_label="END")
        assert run.reason == StopReason.BREAKPOINT
        assert run.stack() == [17]
        assert run.sp == SP_BASE + 1
        assert [run.cpu.peek(r) for r in (1, 2, 3, 4)] == [
            LCL_BASE, ARG_BASE, THIS_BASE, THAT_BASE,
        ]

    def test_depth_after_call_is_depth_before_plus_one(self):
        """Existing stack contents below the arguments survive the call."""
        source = """
            push constant 100
            push constant 200
            push constant 1
            call Id 1
            label END
            goto END
            function Id 0
            push argument 0
            return
        """
        run = VMRun(source, stop_label="END")
        assert run.stack() == [100, 200, 1]

    def test_call_without_arguments(self):
        source = """
            push constant 8
            call Seven 0
            label END
            goto END
            function Seven 0
            push constant 7
            return
        """
        run = VMRun(source, stop_label="END")
        assert run.stack() == [8, 7]

    def test_locals_are_zeroed(self):
        """function f k initializes its k locals to zero."""
        source = """
            call F 0
            label END
            goto END
            function F 2
            push local 0
            push local 1
            add
            return
        """
        # F's locals land at SP_BASE + 5 and SP_BASE + 6
        run = VMRun(source, stop_label="END",
                    ram={SP_BASE + 5: 99, SP_BASE + 6: 77})
        assert run.stack() == [0]

    def test_callee_sees_its_frame(self):
        """Inside the callee ARG points at the arguments, LCL past the frame."""
        source = """
            push constant 1
            push constant 2
            call Probe 2
            function Probe 0
            label HERE
            goto HERE
        """
        run = VMRun(source, stop_label="HERE")
        assert run.cpu.peek(2) == SP_BASE
        assert run.cpu.peek(1) == SP_BASE + 2 + 5
        assert run.sp == SP_BASE + 2 + 5
        saved = [run.cpu.peek(SP_BASE + 2 + i) for i in range(1, 5)]
        assert saved == [LCL_BASE, ARG_BASE, THIS_BASE, THAT_BASE]

    def test_nested_calls(self):
        source = """
            push constant 40
            call Twice 1
            label END
            goto END
            function Twice 0
            push argument 0
            call Inc 1
            call Inc 1
            return
            function Inc 0
            push argument 0
            push constant 1
            add
            return
        """
        run = VMRun(source, stop_label="END")
        assert run.stack() == [42]
        assert run.cpu.peek(1) == LCL_BASE
        assert run.cpu.peek(2) == ARG_BASE

    def test_recursion(self):
        """Sum(n) = n + Sum(n - 1), Sum(0) = 0."""
        source = """
            push constant 6
            call Sum 1
            label END
            goto END
            function Sum 0
            push argument 0
            if-goto RECURSE
            push constant 0
            return
            label RECURSE
            push argument 0
            push argument 0
            push constant 1
            sub
            call Sum 1
            add
            return
        """
        run = VMRun(source, stop_label="END")
        assert run.reason == StopReason.BREAKPOINT
        assert run.stack() == [21]
        assert [run.cpu.peek(r) for r in (1, 2, 3, 4)] == [
            LCL_BASE, ARG_BASE, THIS_BASE, THAT_BASE,
        ]


# =============================================================================
# Translator Facade
# =============================================================================

class TestTranslator:
    """Test VMTranslator results and determinism."""

    SOURCE = """
        function Main.main 0
        push constant 1
        push constant 2
        lt
        call Main.main 0
        eq
        return
    """

    def test_independent_runs_identical(self):
        assert translate(self.SOURCE) == translate(self.SOURCE)

    def test_same_translator_twice(self):
        translator = VMTranslator()
        first = translator.translate_source(self.SOURCE).assembly
        second = translator.translate_source(self.SOURCE).assembly
        assert first == second

    def test_result_fields(self):
        result = VMTranslator().translate_source(self.SOURCE, "Main.vm")
        assert result.filename == "Main.vm"
        assert len(result.commands) == 7
        assert result.line_count == len(result.assembly.splitlines())

    def test_translate_commands(self):
        translator = VMTranslator()
        result = translator.translate_source(self.SOURCE)
        assert translator.translate_commands(result.commands) == result.assembly

    def test_comments_option(self):
        options = TranslatorOptions(emit_comments=True)
        asm = VMTranslator(options).translate_source("push constant 1").assembly
        assert asm.startswith("// push constant 1\n@1\n")

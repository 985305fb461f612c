"""Tests for the interpreter."""

import io
import logging

import pytest

from cix._errors import EvaluationError, FunctionNotFoundError
from cix._interp import CONTINUE, Environment, Interpreter, Returned, StructValue, apply_binary_op, execute
from cix._ir import (
    Assign,
    BinaryOp,
    BinOp,
    Call,
    FieldAccess,
    Literal,
    Return,
    StructNew,
    Var,
    add_function,
    add_module,
    add_struct,
    add_variable,
    function,
    new,
    variable,
)


def _binop(op: BinOp, left: str, right: str) -> BinaryOp:
    return BinaryOp(op, Var(left), Var(right))


# =============================================================================
# Tests for arithmetic
# =============================================================================


class TestArithmetic:
    @pytest.mark.parametrize(
        ("op", "a", "b", "expected"),
        [
            (BinOp.ADD, 10, 3, 13),
            (BinOp.SUB, 10, 3, 7),
            (BinOp.MUL, 10, 3, 30),
            (BinOp.DIV, 10, 3, 3),
            (BinOp.DIV, 9, 3, 3),
        ],
    )
    def test_binary_op_through_function(self, op: BinOp, a: int, b: int, expected: int) -> None:
        program = add_function(new(), "f", "int", [("a", "int"), ("b", "int")], [Return(_binop(op, "a", "b"))])
        assert execute(program, "f", [a, b]) == expected

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [(-7, 2, -3), (7, -2, -3), (-7, -2, 3), (1, 2, 0)],
    )
    def test_division_truncates_toward_zero(self, a: int, b: int, expected: int) -> None:
        assert apply_binary_op(BinOp.DIV, a, b) == expected

    def test_division_by_zero(self) -> None:
        with pytest.raises(EvaluationError, match="Division by zero"):
            apply_binary_op(BinOp.DIV, 1, 0)

    def test_non_integer_operands(self) -> None:
        with pytest.raises(EvaluationError, match="integer operands"):
            apply_binary_op(BinOp.ADD, "a", 1)


# =============================================================================
# Tests for statements and control flow
# =============================================================================


class TestStatements:
    def test_return_stops_execution(self) -> None:
        out = io.StringIO()
        program = add_function(
            new(),
            "main",
            "int",
            body=[
                Return(Literal(1)),
                Call("printf", (Literal("unreachable"),)),
                Return(Literal(2)),
            ],
        )
        assert execute(program, stdout=out) == 1
        assert out.getvalue() == ""

    def test_function_without_return_yields_none(self) -> None:
        program = add_function(new(), "main", "void", body=[Assign("x", Literal(1))])
        assert execute(program) is None

    def test_assign_then_use(self) -> None:
        program = add_function(
            new(),
            "main",
            "int",
            body=[
                Assign("width", Literal(10)),
                Assign("height", Literal(5)),
                Return(_binop(BinOp.MUL, "width", "height")),
            ],
        )
        assert execute(program) == 50

    def test_unbound_variable_defaults_to_zero(self) -> None:
        program = add_function(new(), "main", "int", body=[Return(Var("nothing"))])
        assert execute(program) == 0

    def test_execute_statement_flow(self) -> None:
        interpreter = Interpreter(new())
        assert interpreter.execute_statement(Assign("x", Literal(1))) is CONTINUE
        assert interpreter.execute_statement(Return(Literal(5))) == Returned(5)


# =============================================================================
# Tests for function resolution
# =============================================================================


class TestCalls:
    def test_entry_not_found(self) -> None:
        with pytest.raises(FunctionNotFoundError) as exc_info:
            execute(new(), "missing")
        assert exc_info.value.name == "missing"

    def test_default_entry_is_main(self) -> None:
        program = add_function(new(), "main", "int", body=[Return(Literal(7))])
        assert execute(program) == 7

    def test_nested_calls(self) -> None:
        program = add_function(
            new(),
            "add",
            "int",
            [("x", "int"), ("y", "int")],
            [Return(_binop(BinOp.ADD, "x", "y"))],
        )
        program = add_function(
            program,
            "main",
            "int",
            body=[Return(Call("add", (Literal(1), Call("add", (Literal(2), Literal(3))))))],
        )
        assert execute(program) == 6

    def test_unknown_inner_call_yields_zero(self, caplog: pytest.LogCaptureFixture) -> None:
        # Compatibility behaviour: an unresolved call inside an expression is 0, not an error.
        program = add_function(
            new(),
            "main",
            "int",
            body=[Return(BinaryOp(BinOp.ADD, Call("nowhere", ()), Literal(5)))],
        )
        with caplog.at_level(logging.WARNING, logger="cix._interp._engine"):
            assert execute(program) == 5
        assert "nowhere" in caplog.text

    def test_unknown_inner_call_strict(self) -> None:
        program = add_function(new(), "main", "int", body=[Return(Call("nowhere", ()))])
        with pytest.raises(FunctionNotFoundError, match="nowhere"):
            execute(program, strict=True)

    def test_unknown_call_statement_is_skipped(self) -> None:
        program = add_function(new(), "main", "int", body=[Call("nowhere", ()), Return(Literal(1))])
        assert execute(program) == 1

    def test_call_to_void_function_yields_none(self) -> None:
        program = add_function(new(), "noop", "void")
        program = add_function(program, "main", "int", body=[Assign("x", Call("noop", ())), Return(Var("x"))])
        assert execute(program) is None

    def test_missing_arguments_bind_zero(self) -> None:
        program = add_function(new(), "f", "int", [("a", "int"), ("b", "int")], [Return(_binop(BinOp.ADD, "a", "b"))])
        assert execute(program, "f", [4]) == 4

    def test_module_function_resolution(self) -> None:
        program = add_module(
            new(),
            "math",
            exports=["triple"],
            functions=[function("triple", "int", [("x", "int")], [Return(BinaryOp(BinOp.MUL, Var("x"), Literal(3)))])],
        )
        assert execute(program, "triple", [5]) == 15

    def test_global_functions_shadow_module_functions(self) -> None:
        program = add_module(new(), "m", functions=[function("f", "int", body=[Return(Literal(1))])])
        program = add_function(program, "f", "int", body=[Return(Literal(2))])
        assert execute(program, "f") == 2


# =============================================================================
# Tests for variable scoping
# =============================================================================


class TestScoping:
    def test_calls_do_not_clobber_caller_parameters(self) -> None:
        # inner(x) writes its own x; outer's x must survive the call.
        program = add_function(
            new(),
            "inner",
            "int",
            [("x", "int")],
            [Assign("tmp", BinaryOp(BinOp.MUL, Var("x"), Literal(100))), Return(Var("tmp"))],
        )
        program = add_function(
            program,
            "outer",
            "int",
            [("x", "int")],
            [
                Assign("tmp", Literal(1)),
                Assign("ignored", Call("inner", (BinaryOp(BinOp.ADD, Var("x"), Literal(1)),))),
                Return(BinaryOp(BinOp.ADD, Var("x"), Var("tmp"))),
            ],
        )
        assert execute(program, "outer", [5]) == 6

    def test_locals_do_not_leak_between_calls(self) -> None:
        program = add_function(new(), "set_local", "void", body=[Assign("leak", Literal(99))])
        program = add_function(program, "main", "int", body=[Call("set_local", ()), Return(Var("leak"))])
        assert execute(program) == 0

    def test_assignment_to_global_updates_global(self) -> None:
        program = add_variable(new(), "counter", "int", 0)
        program = add_function(
            program,
            "bump",
            "void",
            body=[Assign("counter", BinaryOp(BinOp.ADD, Var("counter"), Literal(1)))],
        )
        program = add_function(program, "main", "int", body=[Call("bump", ()), Call("bump", ()), Return(Var("counter"))])
        assert execute(program) == 2

    def test_parameter_shadows_global(self) -> None:
        program = add_variable(new(), "x", "int", 100)
        program = add_function(program, "f", "int", [("x", "int")], [Assign("x", Literal(1)), Return(Var("x"))])
        program = add_function(program, "main", "int", body=[Assign("y", Call("f", (Literal(5),))), Return(Var("x"))])
        assert execute(program) == 100

    def test_module_variables_share_global_namespace(self) -> None:
        program = add_module(new(), "config", variables=[variable("limit", "int", 10)])
        program = add_function(program, "main", "int", body=[Return(Var("limit"))])
        assert execute(program) == 10

    def test_global_initializers_see_earlier_globals(self) -> None:
        program = add_variable(new(), "a", "int", 2)
        program = add_variable(program, "b", "int", BinaryOp(BinOp.MUL, Var("a"), Literal(21)))
        program = add_function(program, "main", "int", body=[Return(Var("b"))])
        assert execute(program) == 42

    def test_executions_are_independent(self) -> None:
        program = add_variable(new(), "counter", "int", 0)
        program = add_function(
            program,
            "main",
            "int",
            body=[
                Assign("counter", BinaryOp(BinOp.ADD, Var("counter"), Literal(1))),
                Return(Var("counter")),
            ],
        )
        assert execute(program) == 1
        assert execute(program) == 1


class TestEnvironment:
    def test_lookup_order(self) -> None:
        env = Environment(globals={"g": 1, "x": 2})
        with env.call_frame({"x": 3}):
            assert env.lookup("x") == 3
            assert env.lookup("g") == 1
            assert env.lookup("missing") == 0
        assert env.lookup("x") == 2

    def test_assign_outside_call_is_global(self) -> None:
        env = Environment()
        env.assign("x", 1)
        assert env.globals == {"x": 1}

    def test_frames_popped_after_error(self) -> None:
        env = Environment()
        with pytest.raises(RuntimeError), env.call_frame({}):
            assert env.depth == 1
            raise RuntimeError
        assert env.depth == 0


# =============================================================================
# Tests for structs
# =============================================================================


class TestStructs:
    def test_field_access_on_new_struct(self) -> None:
        point = StructNew("Point", (("x", Literal(3)), ("y", Literal(4))))
        program = add_struct(new(), "Point", [("x", "int"), ("y", "int")])
        program = add_function(program, "main", "int", body=[Return(FieldAccess(point, "y"))])
        assert execute(program) == 4

    def test_struct_value(self) -> None:
        program = add_function(
            new(),
            "main",
            "Point",
            body=[Return(StructNew("Point", (("x", Literal(1)),)))],
        )
        result = execute(program)
        assert isinstance(result, StructValue)
        assert result.struct_name == "Point"
        assert dict(result.fields) == {"x": 1}

    def test_missing_field_defaults_to_zero(self) -> None:
        program = add_function(
            new(),
            "main",
            "int",
            body=[Return(FieldAccess(StructNew("Point", (("x", Literal(1)),)), "z"))],
        )
        assert execute(program) == 0

    def test_field_access_on_non_struct_is_zero(self) -> None:
        program = add_function(new(), "main", "int", body=[Return(FieldAccess(Literal(5), "x"))])
        assert execute(program) == 0

    def test_struct_through_variables(self) -> None:
        program = add_variable(new(), "origin", "Point", StructNew("Point", (("x", Literal(7)), ("y", Literal(8)))))
        program = add_function(
            program,
            "main",
            "int",
            body=[Assign("p", Var("origin")), Return(FieldAccess(Var("p"), "x"))],
        )
        assert execute(program) == 7


# =============================================================================
# Tests for printf
# =============================================================================


class TestPrintf:
    def test_formats_and_writes(self) -> None:
        out = io.StringIO()
        program = add_function(
            new(),
            "main",
            "int",
            body=[
                Assign("width", Literal(10)),
                Call("printf", (Literal("Area: %d x %d = %d\\n"), Var("width"), Literal(5), Literal(50))),
                Call("printf", (Literal("done\\n"),)),
                Return(Literal(0)),
            ],
        )
        assert execute(program, stdout=out) == 0
        assert out.getvalue() == "Area: 10 x 5 = 50\ndone\n"

    def test_printf_as_expression_returns_length(self) -> None:
        out = io.StringIO()
        program = add_function(new(), "main", "int", body=[Return(Call("printf", (Literal("abc"),)))])
        assert execute(program, stdout=out) == 3
        assert out.getvalue() == "abc"

    def test_string_arguments_are_decoded(self) -> None:
        out = io.StringIO()
        program = add_variable(new(), "greeting", "char*", "hi\\tthere")
        program = add_function(
            program,
            "main",
            "int",
            body=[
                Call("printf", (Literal("%s|%s\\n"), Literal("a\\tb\\n"), Var("greeting"))),
                Return(Literal(0)),
            ],
        )
        execute(program, stdout=out)
        assert out.getvalue() == "a\tb\n|hi\tthere\n"

    def test_returned_string_is_decoded(self) -> None:
        program = add_function(new(), "main", "char*", body=[Return(Literal("line\\n"))])
        assert execute(program) == "line\n"

    def test_literal_percent_before_length_modifier(self) -> None:
        out = io.StringIO()
        program = add_function(new(), "main", "int", body=[Return(Call("printf", (Literal("%%ld\\n"),)))])
        assert execute(program, stdout=out) == 4
        assert out.getvalue() == "%ld\n"

    def test_bad_format_arguments(self) -> None:
        program = add_function(new(), "main", "int", body=[Call("printf", (Literal("%d %d"), Literal(1)))])
        with pytest.raises(EvaluationError, match="printf"):
            execute(program, stdout=io.StringIO())


def test_execute_does_not_modify_program() -> None:
    program = add_variable(new(), "g", "int", 1)
    program = add_function(program, "main", "int", body=[Assign("g", Literal(2)), Return(Var("g"))])
    before = program
    assert execute(program) == 2
    assert program == before
    assert program.variables[0].value == Literal(1)

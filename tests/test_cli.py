"""Tests for the command-line front-end."""

import pytest

from exprcc.cli import EXIT_COMPILE_ERROR, EXIT_INTERNAL_ERROR, EXIT_OK, main


class TestModes:
    """Each --mode prints its artifact to stdout."""

    def test_default_mode_prints_assembly(self, capsys):
        assert main(["42"]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.splitlines()[:3] == [".intel_syntax noprefix", ".globl main", "main:"]
        assert "  push 42" in out

    def test_token_mode(self, capsys):
        assert main(["--mode", "token", "1+2"]) == EXIT_OK
        assert capsys.readouterr().out.splitlines() == [
            "NUM 1 @ 0:0",
            "PLUS @ 0:1",
            "NUM 2 @ 0:2",
            "EOF @ 0:3",
        ]

    def test_ast_mode(self, capsys):
        assert main(["--mode", "ast", "-5"]) == EXIT_OK
        assert capsys.readouterr().out.splitlines() == [
            "Sub @ 0:0",
            "  Num(0) @ 0:0",
            "  Num(5) @ 0:1",
        ]

    def test_dot_mode(self, capsys):
        assert main(["--mode", "dot", "1"]) == EXIT_OK
        assert capsys.readouterr().out == 'digraph G {\n0[label="Num(1)"];\n}\n'

    def test_run_mode(self, capsys):
        assert main(["--mode", "run", "(3+5)/2 - 10"]) == EXIT_OK
        assert capsys.readouterr().out == "-6\n"

    def test_entry_point_option(self, capsys):
        assert main(["--entry-point", "calc", "1"]) == EXIT_OK
        assert ".globl calc" in capsys.readouterr().out

    def test_overflow_option(self, capsys):
        assert main(["--mode", "run", "--overflow", "wrap", "18446744073709551617"]) == EXIT_OK
        assert capsys.readouterr().out == "1\n"


class TestErrors:
    """Errors go to stderr with a diagnostic and a non-zero status."""

    def test_tokenize_error_diagnostic(self, capsys):
        assert main(["--no-color", "1 & 2"]) == EXIT_COMPILE_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == [
            "E-LEX-001: compile error at 0:2",
            "1 & 2",
            "  ^ unrecognized character '&'",
        ]

    def test_parse_error_diagnostic(self, capsys):
        assert main(["--no-color", "1+"]) == EXIT_COMPILE_ERROR
        err = capsys.readouterr().err
        assert "  ^ expected number, found end of input" in err

    def test_very_long_literal_diagnostic(self, capsys):
        source = "9" * 5000
        assert main(["--no-color", source]) == EXIT_COMPILE_ERROR
        err = capsys.readouterr().err.splitlines()
        assert err[0] == "E-LEX-002: compile error at 0:0"
        assert err[2].startswith("^ ")

    def test_color_flag_reaches_diagnostics(self, capsys):
        assert main(["--color", "1 & 2"]) == EXIT_COMPILE_ERROR
        assert "\033[91m" in capsys.readouterr().err

    def test_internal_value_error_is_not_a_user_error(self, monkeypatch):
        from exprcc.environment.core import Environment

        def broken(self, source):
            raise ValueError("bug")

        monkeypatch.setattr(Environment, "compile", broken)
        with pytest.raises(ValueError, match="bug"):
            main(["1"])

    def test_runtime_fault(self, capsys):
        assert main(["--mode", "run", "1/0"]) == EXIT_COMPILE_ERROR
        assert "division by zero" in capsys.readouterr().err

    def test_invalid_entry_point(self, capsys):
        assert main(["--entry-point", "1x", "1"]) == EXIT_COMPILE_ERROR
        assert "invalid entry point" in capsys.readouterr().err

    def test_internal_error_exit_status(self, capsys, monkeypatch):
        from exprcc.environment.exceptions import InternalCompilerError
        from exprcc.environment.core import Environment

        def broken(self, source):
            raise InternalCompilerError("Add node has no left operand")

        monkeypatch.setattr(Environment, "compile", broken)
        assert main(["1+2"]) == EXIT_INTERNAL_ERROR
        assert "E-INT-001" in capsys.readouterr().err

    def test_unknown_mode(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--mode", "llvm", "1"])
        assert exc_info.value.code == 2

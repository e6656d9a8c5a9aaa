# =============================================================================
# actorgen - GameActor code generation for Rust-style declarations
#
# Made with ❤️
#
# This project is genuinely built on love, dedication, and care.
#
# “What is made with love is never made in vain.”
# “Love is the reason this code exists; logic is how it survives.”
#
# -----------------------------------------------------------------------------
# Author: M1778
# Profile: https://github.com/M1778M/
#
# -----------------------------------------------------------------------------
# Copyright (C) 2025 M1778
#
# This file is part of actorgen.
#
# actorgen is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# actorgen is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with actorgen.  If not, see <https://www.gnu.org/licenses/>.
#
# -----------------------------------------------------------------------------
# “Code fades. Love leaves a signature.”
# =============================================================================
import sys


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[38;5;196m"
    BLUE = "\033[38;5;39m"
    CYAN = "\033[38;5;51m"
    GRAY = "\033[38;5;240m"


class CompileError(Exception):
    """Stops expansion or compilation of the enclosing unit."""

    def __init__(self, message, hint=None, lineno=0, col=0, filename=None, type_name=None):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.lineno = lineno
        self.col = col
        self.filename = filename
        self.type_name = type_name
        self.reported = False


class MalformedSyntax(CompileError):
    """The fragment is not a valid declaration in the host grammar."""


class NotARecordType(CompileError):
    """Field injection was requested on something other than a struct with named fields."""


class MissingRequiredField(CompileError):
    """`health`/`mana` are missing (or mistyped) where the capability interface needs them."""


class UndefinedField(CompileError):
    """Generated code refers to a field the type does not declare."""


class ErrorHandler:
    def __init__(self, source_code: str = "", filename: str = "<input>", color: bool = True, stream=None, quiet: bool = False):
        self.source_code = source_code
        self.lines = source_code.splitlines()
        self.filename = filename
        self.color = color
        self.stream = stream
        self.quiet = quiet
        self.had_error = False

    def _c(self, code):
        return code if self.color else ""

    def _print(self, text):
        print(text, file=self.stream or sys.stderr)

    def locate(self, node):
        lineno = getattr(node, 'lineno', 0) or 0
        col = getattr(node, 'col_offset', 0) or 0
        return lineno, col

    def render(self, message, lineno=0, col=0, hint=None):
        c = self._c
        self._print(f"\n{c(Colors.RED)}{c(Colors.BOLD)}error:{c(Colors.RESET)} {message}")

        if 0 < lineno <= len(self.lines):
            line_content = self.lines[lineno - 1]

            self._print(f"{c(Colors.BLUE)}   -->{c(Colors.RESET)} {self.filename}:{lineno}:{col}")

            line_str = str(lineno)
            padding = " " * len(line_str)

            self._print(f"{c(Colors.BLUE)} {padding} |{c(Colors.RESET)}")
            self._print(f"{c(Colors.BLUE)} {line_str} |{c(Colors.RESET)} {line_content.replace(chr(9), ' ')}")

            pointer_pad = " " * max(col - 1, 0)
            self._print(f"{c(Colors.BLUE)} {padding} |{c(Colors.RESET)} {pointer_pad}{c(Colors.RED)}{c(Colors.BOLD)}^ here{c(Colors.RESET)}")
        else:
            self._print(f"{c(Colors.BLUE)}   -->{c(Colors.RESET)} {self.filename}:[Unknown Location]")

        if hint:
            self._print(f"{c(Colors.CYAN)}   = help:{c(Colors.RESET)} {hint}")

    def report(self, exc: CompileError):
        """Renders an error raised elsewhere, once."""
        self.had_error = True
        if exc.reported or self.quiet:
            return
        if exc.filename is None:
            exc.filename = self.filename
        self.render(exc.message, exc.lineno, exc.col, exc.hint)
        exc.reported = True

    def error(self, node, message, hint=None, kind=CompileError, type_name=None):
        """
        Reports a compile-time error pointing to the AST node.
        """
        lineno, col = self.locate(node)
        exc = kind(message, hint=hint, lineno=lineno, col=col, filename=self.filename, type_name=type_name)
        self.report(exc)
        raise exc

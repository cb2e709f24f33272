"""Session control for the lceval language: runs program files (or shell input) statement by statement against a
namespace, either in command line mode or file interpretation mode.

A program file is a JSON array of statements (see statement.py for their encoding).
"""

import json
import os

from lceval.lang.error import GenericException
from lceval.lang.numerical import number
from lceval.lang.prelude import PRELUDE, standard_environment
from lceval.lang.statement import ExecStmt, ImportStmt, NamedFunc, Statement
from lceval.pure.environment import Environment
from lceval.pure.evaluator import Closure, Unbound


class Session:
    """Governs a lceval session, with control over the namespace that statements are evaluated in."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, bare=False, numerals=True, _importing=()):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages and relative imports
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.numerals = numerals  # whether or not to read closures back as Church numerals
        self.bare = bare          # whether or not to start without the prelude

        self.namespace = Environment() if bare else standard_environment()
        self.to_exec = {}  # dict of line num: ExecStmts to execute
        self.results = []  # formatted results of executed statements, oldest first

        self._importing = _importing + (os.path.abspath(path),)

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            try:
                objs = json.loads(source)
            except json.JSONDecodeError as exc:
                raise GenericException(f"'{{}}' is not valid JSON (line {exc.lineno}): {exc.msg}", path,
                                       diagnosis=False)

            if not isinstance(objs, list):
                raise GenericException("'{}' must contain a JSON array of statements", path, diagnosis=False)

            for line_num, obj in enumerate(objs):
                self.add(obj, line_num + 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command-line. Returns the stripped line and whether or not a line continuation
        is necessary (brackets outside of JSON strings are unbalanced).
        """
        line = line.strip()

        balance = 0
        in_string = escaped = False
        for char in line:
            if escaped:
                escaped = False
            elif in_string:
                if char == "\\":
                    escaped = True
                elif char == "\"":
                    in_string = False
            elif char == "\"":
                in_string = True
            elif char in "[{":
                balance += 1
            elif char in "]}":
                balance -= 1

        return line, balance > 0

    def add(self, stmt, line_num, original_expr=None):
        """Adds a statement (a Statement, or its JSON encoding) to the current session. Named funcs are bound
        immediately, but executable statements are delayed until run is called.
        """
        if original_expr is None:
            original_expr = str(stmt) if isinstance(stmt, Statement) else json.dumps(stmt, ensure_ascii=False)
        self.error_handler.register_line(self.path, original_expr, line_num)  # in case error is raised

        if not isinstance(stmt, Statement):
            stmt = Statement.infer(stmt, original_expr)

        if isinstance(stmt, ImportStmt):
            self.namespace = self._import(stmt.path).update(self.namespace)
            # local namespace takes precedence over the loaded module's namespace

        elif isinstance(stmt, NamedFunc):
            self.namespace = stmt.bind(self.namespace)

        elif isinstance(stmt, ExecStmt):
            self.to_exec[line_num] = stmt

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs this session's executable statements by evaluating them in the session namespace. Will raise any
        errors that are encountered.
        """
        for line_num, exec_stmt in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, str(exec_stmt), line_num)

            try:
                value = exec_stmt.execute(self.namespace)
            finally:
                if self.cmd_line:
                    del self.to_exec[line_num]

            if isinstance(value, Unbound):
                self.error_handler.warn("'{}' is unbound", value.name)

            self.results.append(self.format_value(value))
            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)

    def format_value(self, value):
        """Returns str representation of value: closures are shown as their abstraction (or as a number if they read
        back as a Church numeral and numerals is set), everything else by str.
        """
        if isinstance(value, Closure) and self.numerals:
            num = number(value)
            if num is not None:
                return str(num)
        return str(value)

    def _import(self, path):
        """Returns the namespace of the session loaded from path (resolved relative to this session's file)."""
        if path == PRELUDE:
            return standard_environment()

        if self.path != Session.SH_FILE:
            path = os.path.join(os.path.dirname(os.path.abspath(self.path)), path)
        path = os.path.abspath(path)

        if path in self._importing:
            raise GenericException("'{}' is imported circularly", path, diagnosis=False)

        loaded = Session(self.error_handler, path, self.cmd_line, self.bare, self.numerals, self._importing)
        return loaded.namespace  # on import, ExecStmts from the loaded module are not run

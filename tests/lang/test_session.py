import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from lceval.lang.error import ErrorHandler, GenericException, InapplicableValue
from lceval.lang.session import Session
from lceval.lang.statement import Statement

COMMON = os.path.join(os.path.dirname(__file__), "..", "..", "common")


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, stmts):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as file:
            if isinstance(stmts, str):
                file.write(stmts)
            else:
                json.dump(stmts, file, ensure_ascii=False)
        return path

    def run_file(self, path, **kwargs):
        out = io.StringIO()
        with redirect_stdout(out):
            sess = Session(ErrorHandler(), path, cmd_line=False, **kwargs)
            sess.run()
        return sess, out.getvalue()

    def test_common(self):
        sess, out = self.run_file(os.path.join(COMMON, "church.json"))
        self.assertEqual(["5", "6", "5", "5", "yes"], sess.results)
        self.assertIn("warning: ", out)
        self.assertIn("is unbound", out)

    def test_no_numerals(self):
        path = self.write("plus.json", [["PLUS", 2, 3]])
        sess, __ = self.run_file(path, numerals=False)
        self.assertEqual(["λf.λx.((m f) ((n f) x))"], sess.results)

    def test_bare(self):
        path = self.write("bare.json", [{"name": "id", "term": {"λ": "x", "body": "x"}}, ["id", "a"], ["PLUS", 2, 3]])
        with redirect_stdout(io.StringIO()):
            sess = Session(ErrorHandler(), path, cmd_line=False, bare=True)
            self.assertNotIn("PLUS", sess.namespace)
            self.assertRaises(InapplicableValue, sess.run)
        self.assertEqual(["a"], sess.results)

    def test_named_funcs_see_earlier_names(self):
        path = self.write("named.json", [
            {"name": "two", "term": 2},
            {"name": "four", "term": ["PLUS", "two", "two"]},
            {"name": "two", "term": 3},
            "four",
            "two",
        ])
        sess, __ = self.run_file(path)
        self.assertEqual(["4", "3"], sess.results)

    def test_import(self):
        self.write("lib.json", [
            {"name": "id", "term": {"λ": "x", "body": "x"}},
            {"name": "one", "term": 1},
            ["id", "not_run"],
        ])
        path = self.write("main.json", [
            {"import": "lib.json"},
            {"name": "one", "term": 7},
            ["id", "one"],
        ])
        sess, out = self.run_file(path)
        self.assertEqual(["7"], sess.results)
        self.assertNotIn("not_run", out)

    def test_local_names_take_precedence_over_imports(self):
        self.write("lib.json", [{"name": "one", "term": 1}])
        path = self.write("main.json", [{"name": "one", "term": 2}, {"import": "lib.json"}, "one"])
        sess, __ = self.run_file(path)
        self.assertEqual(["2"], sess.results)

    def test_import_prelude(self):
        path = self.write("prelude.json", [{"import": "prelude"}, ["SUCC", 1]])
        sess, __ = self.run_file(path, bare=True)
        self.assertEqual(["2"], sess.results)

    def test_circular_import(self):
        self.write("a.json", [{"import": "b.json"}])
        path = self.write("b.json", [{"import": "a.json"}])
        self.assertRaises(GenericException, Session, ErrorHandler(), path, False)

    def test_invalid_files(self):
        should_raise = [
            os.path.join(self.tmp.name, "missing.json"),
            self.write("bad.json", "[\"x\""),
            self.write("object.json", {"term": "x"}),
            self.write("stmt.json", [{"name": "x"}]),
        ]
        for case in should_raise:
            self.assertRaises(GenericException, Session, ErrorHandler(), case, False)

    def test_reserved_filename(self):
        self.assertRaises(GenericException, Session, ErrorHandler(), Session.SH_FILE, False)

    def test_cmd_line(self):
        error_handler = ErrorHandler()
        sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
        self.assertFalse(error_handler.fatal)

        sess.add(Statement.loads('{"name": "three", "term": 3}'), 1)
        sess.add(Statement.loads('["MULT", "three", "three"]'), 2)
        sess.run()

        self.assertEqual({}, sess.to_exec)
        self.assertEqual("9", sess.pop())
        self.assertEqual([], sess.results)

    def test_format_value(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)
        self.assertEqual("3", sess.format_value(3))
        self.assertEqual("K", sess.format_value(Statement.infer("K").execute(sess.namespace.bind("K", "K"))))
        self.assertEqual("λx.λy.x", Session(ErrorHandler(), Session.SH_FILE, True, numerals=False)
                         .format_value(sess.namespace["K"]))

    def test_format_value_of_closures_that_fail_when_run(self):
        sess = Session(ErrorHandler(), Session.SH_FILE, cmd_line=True)
        omega = {"λ": "y", "body": ["y", "y"]}
        cases = [
            ('{"λ": "f", "body": {"λ": "x", "body": ["add", "f", "x"]}}', "λf.λx.((add f) x)"),
            ('{"λ": "f", "body": {"λ": "x", "body": ["nope", "x"]}}', "λf.λx.(nope x)"),
        ]
        for line, expected in cases:
            value = Statement.loads(line).execute(sess.namespace)
            self.assertEqual(expected, sess.format_value(value), line)

        value = Statement.infer({"λ": "f", "body": {"λ": "x", "body": [omega, omega]}}).execute(sess.namespace)
        self.assertEqual(str(value), sess.format_value(value))

    def test_run_file_with_non_numeral_results(self):
        path = self.write("closures.json", [{"λ": "f", "body": {"λ": "x", "body": ["add", "f", "x"]}}])
        sess, __ = self.run_file(path)
        self.assertEqual(["λf.λx.((add f) x)"], sess.results)

    def test_preprocess_line(self):
        cases = {
            '["f", "x"]': ('["f", "x"]', False),
            '  "x"  ': ('"x"', False),
            '{"λ": "x", "body": ["x",': ('{"λ": "x", "body": ["x",', True),
            '': ('', False),
            '"["': ('"["', False),
            '["{", "x\\"]"': ('["{", "x\\"]"', True),
            '{"λ": "[", "body": "]"}': ('{"λ": "[", "body": "]"}', False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case), case)


if __name__ == '__main__':
    unittest.main()

import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout

from lceval.main import build_parser, main

COMMON = os.path.join(os.path.dirname(__file__), "..", "common")


class MainTestCase(unittest.TestCase):

    def test_parser(self):
        args = build_parser().parse_args([])
        self.assertIsNone(args.file)
        self.assertFalse(args.bare)
        self.assertTrue(args.numerals)
        self.assertIsNone(args.recursion_limit)

        args = build_parser().parse_args(["prog.json", "--bare", "--no-numerals", "--recursion-limit", "5000"])
        self.assertEqual(("prog.json", True, False, 5000),
                         (args.file, args.bare, args.numerals, args.recursion_limit))

    def test_run_file(self):
        out = io.StringIO()
        with redirect_stdout(out):
            main([os.path.join(COMMON, "church.json"), "--recursion-limit", str(sys.getrecursionlimit())])
        self.assertTrue(out.getvalue().endswith("5\n6\n5\n5\nyes\n"))

    def test_errors_exit(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bad.json")
            with open(path, "w", encoding="utf-8") as file:
                json.dump([["nope", "x"]], file)

            out = io.StringIO()
            with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
                main([path])

        self.assertEqual(1, ctx.exception.code)
        self.assertIn("cannot be applied to", out.getvalue())


if __name__ == '__main__':
    unittest.main()

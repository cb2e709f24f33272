"""Handles interactive/command-line mode for the lceval interpreter. Uses cmd as backend."""

import cmd

from lceval.lang.statement import Statement


class Shell(cmd.Cmd):
    """Lambda calculus evaluator shell."""
    intro = "Lambda calculus evaluator :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary lceval statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line + " "
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line:
                return

            self.sess.add(Statement.loads(line), self.line_num)
            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the lceval interpreter!\n\n"
              "Every line is one statement, written as JSON. Variables are strings, natural \n"
              "numbers are Church numerals, abstractions are {\"λ\": \"x\", \"body\": ...} and \n"
              "applications are lists: [\"f\", \"x\", \"y\"] applies f to x, then to y.\n\n"
              "Try it out by typing '{\"name\": \"id\", \"term\": {\"λ\": \"x\", \"body\": \"x\"}}'. \n"
              "This will bind 'λx.x' to the name 'id'. Next, try typing '[\"id\", \"y\"]'. \n"
              "'y' is unbound, so it evaluates to itself, and you will get a warning.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

"""Interactive read-eval-print loop for Monkey. Uses cmd as backend."""

import cmd

from .environment import Environment
from .evaluator import Evaluator
from .lexer import Lexer
from .parser import Parser


class Shell(cmd.Cmd):
    """Monkey interpreter shell. Bindings persist across lines."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = ">> "
    commands = ('help', 'exit', 'EOF')

    def __init__(self, evaluator: Evaluator, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.evaluator = evaluator
        self.env = Environment()
        self.line_num = 0

    def parseline(self, line):
        """Only a bare `help`, `exit` or `EOF` line is a shell command.

        Anything else, including `help(1)` or `exit + 1`, is Monkey source.
        """
        line = line.strip()
        if line in self.commands:
            return line, '', line
        return None, None, line

    def default(self, line):
        """Evaluates a line of Monkey source."""
        self.line_num += 1
        parser = Parser(Lexer(line, filename=f"<line {self.line_num}>"))
        program = parser.parse_program()
        if parser.errors:
            for error in parser.errors:
                print(f"parse error: {error}", file=self.stdout)
            return

        result = self.evaluator.run(program, self.env)
        if result is not None:
            print(result.inspect(), file=self.stdout)

    def do_help(self, arg):
        """Doesn't return docs, but rather a short intro."""
        print("Monkey is a small scripting language with integers, booleans, strings,\n"
              "arrays, hashes and first-class functions. Try:\n\n"
              "  let add = fn(a, b) { a + b };\n"
              "  add(1, 2)\n\n"
              "Built-ins: len, first, last, rest, puts.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

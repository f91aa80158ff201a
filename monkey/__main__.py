"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv] [program_file]
    python -m monkey [-v...] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .monkey file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive shell is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .environment import Environment
from .errors import ParseError
from .evaluator import Evaluator
from .parser import parse_program
from .repl import Shell
from .types import Error


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_file(path: Path) -> Program:
    source = read_source(path)
    try:
        return parse_program(source, filename=str(path))
    except ParseError as e:
        for message in e.errors:
            print(f"parse error: {message}", file=sys.stderr)
        sys.exit(1)


def execute(program: Program, debug_level: int) -> None:
    with Evaluator(debug_level=debug_level) as evaluator:
        result = evaluator.run(program, Environment())
    if result is None:
        return
    print(result.inspect())
    if isinstance(result, Error):
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='monkey', description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given .monkey file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file to execute (omit for a shell)')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_file(program_file)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        data = json.loads(read_source(ast_path))
        execute(ast_from_obj(data), args.v)
        return

    # Interactive shell
    if not args.program:
        with Evaluator(debug_level=args.v) as evaluator:
            Shell(evaluator).cmdloop()
        return

    # Default: execute source file
    execute(parse_file(Path(args.program)), args.v)


if __name__ == '__main__':
    main()

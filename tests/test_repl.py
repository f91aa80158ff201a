import io

from monkey.evaluator import Evaluator
from monkey.repl import Shell


def run_shell(text):
    stdout = io.StringIO()
    shell = Shell(Evaluator(), stdin=io.StringIO(text), stdout=stdout)
    shell.use_rawinput = False
    shell.cmdloop(intro='')
    return [line for line in stdout.getvalue().replace(shell.prompt, '').splitlines() if line]


def test_bindings_persist_between_lines():
    assert run_shell('let a = 5;\nlet double = fn(x) { x * 2 };\ndouble(a)\n') == ['10']


def test_parse_errors_skip_evaluation():
    lines = run_shell('let = 1;\nlet b = 2;\nb\n')
    assert lines == [
        "parse error: expected next token to be IDENT, got = '=' instead at 1:5",
        '2',
    ]


def test_runtime_errors_are_printed_and_shell_continues():
    assert run_shell('b\n!true\n"a" + "b"\n') == [
        'ERROR: identifier not found: b',
        'false',
        '"ab"',
    ]


def test_empty_lines_do_not_repeat():
    assert run_shell('1 + 1\n\n\n') == ['2']


def test_exit_stops_the_loop():
    assert run_shell('1\nexit\n2\n') == ['1']


def test_help_mentions_builtins():
    output = ' '.join(run_shell('help\n'))
    assert 'Built-ins: len, first, last, rest, puts.' in output


def test_command_words_inside_expressions_are_monkey_source():
    assert run_shell('let exit = 3;\nexit + 1\nhelp(1)\n') == [
        '4',
        'ERROR: identifier not found: help',
    ]

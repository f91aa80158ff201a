from pathlib import Path

from monkey.environment import Environment
from monkey.evaluator import Evaluator
from monkey.parser import parse_program
from monkey.types import Integer

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_early_return(capsys):
    with open(EXAMPLES / 'program_6.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    result = Evaluator().run(ast, Environment())
    out = capsys.readouterr().out.strip()
    assert out == '"fib(15) is "'
    assert result == Integer(610)

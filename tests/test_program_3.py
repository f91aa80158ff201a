from pathlib import Path

from monkey.environment import Environment
from monkey.evaluator import Evaluator
from monkey.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_closures(capsys):
    """Each adder keeps the `x` it was created with after newAdder returns."""
    with open(EXAMPLES / 'program_3.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    Evaluator().run(ast, Environment())
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['5', '13']

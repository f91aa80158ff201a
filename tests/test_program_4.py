from pathlib import Path

from monkey.environment import Environment
from monkey.evaluator import Evaluator
from monkey.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_reduce_with_builtins(capsys):
    with open(EXAMPLES / 'program_4.monkey', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    result = Evaluator().run(ast, Environment())
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['10', '4', '1', '4', '[3, 4]']
    assert result.inspect() == 'null'

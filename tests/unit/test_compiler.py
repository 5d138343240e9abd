from unittest import TestCase
from tokencap.compilation.compiler import ContractingCompiler, privatize
from tokencap.exceptions import CompilationException

CONTRACT = '''
v = Variable()
h = Hash(default_value=0)

@construct
def seed():
    v.set(1)

def helper(x):
    return x + 1

@export
def public(x: int):
    result = helper(x)
    return result
'''


class TestCompiler(TestCase):
    def setUp(self):
        self.c = ContractingCompiler(module_name='con')

    def test_private_function_renamed(self):
        code = self.c.parse_to_code(CONTRACT)

        self.assertIn('def __helper(x):', code)
        self.assertIn('result = __helper(x)', code)

    def test_exported_function_keeps_name(self):
        code = self.c.parse_to_code(CONTRACT)

        self.assertIn('def public(x: int):', code)
        self.assertNotIn('@export', code)

    def test_constructor_renamed(self):
        code = self.c.parse_to_code(CONTRACT)

        self.assertIn('def ____():', code)
        self.assertNotIn('def seed', code)

    def test_orm_declarations_bound_to_contract(self):
        code = self.c.parse_to_code(CONTRACT)

        self.assertIn("v = Variable(contract='con', name='v')", code)
        self.assertIn("h = Hash(default_value=0, contract='con', name='h')", code)

    def test_lint_failure_raises(self):
        with self.assertRaises(CompilationException) as e:
            self.c.parse_to_code('import os\n')

        self.assertIn('Line 0: S13- No valid contracting decorator found', e.exception.violations)

    def test_lint_can_be_skipped(self):
        code = self.c.parse_to_code('a = 1\n', lint=False)
        self.assertEqual(code.strip(), 'a = 1')

    def test_privatize(self):
        self.assertEqual(privatize('x'), '__x')

    def test_private_state_reset_between_parses(self):
        self.c.parse_to_code(CONTRACT)
        code = self.c.parse_to_code('helper = 1\n', lint=False)

        self.assertEqual(code.strip(), 'helper = 1')

from unittest import TestCase
from tokencap.compilation.linter import Linter
from tokencap.contracts import contract_code
import ast
from tokencap.compilation.whitelists import ALLOWED_AST_TYPES


class TestLinter(TestCase):
    def setUp(self):
        self.l = Linter()

    def lint(self, code):
        return self.l.check(ast.parse(code))

    def test_linter(self):
        data = '''
@export
def a():
    b = 10
    return b
'''
        self.assertIsNone(self.lint(data))

    def test_good_ast_type(self):
        for t in ALLOWED_AST_TYPES:
            _t = t()
            self.l.ast_types(_t, 1)
            self.assertListEqual([], self.l._violations)

    def test_bad_ast_type(self):
        err = 'Line 1: S1- Illegal contracting syntax type used : Lambda'
        self.l.ast_types(ast.Lambda(), 1)
        self.assertEqual(err, self.l._violations[0])

    def test_not_system_variable(self):
        self.l.not_system_variable('package', 1)
        self.assertListEqual([], self.l._violations)

    def test_system_variable(self):
        err = "Line 1: S2- Illicit use of '_' before variable : __package__"
        self.l.not_system_variable('__package__', 1)
        self.assertEqual(err, self.l._violations[0])

    def test_not_system_variable_ast(self):
        code = '''
@export
def a():
    __ruh_roh__ = 'shaggy'
'''
        err = "Line 4: S2- Illicit use of '_' before variable : __ruh_roh__"
        self.assertEqual(self.lint(code), [err])

    def test_async_function_rejected(self):
        code = '''
@export
async def a():
    ruh_roh = 'shaggy'
'''
        violations = self.lint(code)
        self.assertIn('Line 3: S7- Illicit use of Async functions', violations)

    def test_class_rejected(self):
        code = '''
class Scooby:
    pass

@export
def a():
    return 1
'''
        self.assertIn('Line 2: S6- Illicit use of classes', self.lint(code))

    def test_stdlib_import_rejected(self):
        code = '''
import os

@export
def a():
    return 1
'''
        self.assertEqual(self.lint(code), ['Line 2: S14- Illegal use of a builtin : os'])

    def test_other_import_rejected(self):
        code = '''
import some_other_contract

@export
def a():
    return 1
'''
        self.assertEqual(self.lint(code), ['Line 2: S5- Contract not found in lib : some_other_contract'])

    def test_import_from_rejected(self):
        code = '''
from os import path

@export
def a():
    return 1
'''
        self.assertIn('Line 2: S4- ImportFrom compilation nodes not yet supported', self.lint(code))

    def test_no_export_rejected(self):
        code = '''
def a():
    return 1
'''
        self.assertEqual(self.lint(code), ['Line 0: S13- No valid contracting decorator found'])

    def test_missing_annotation(self):
        code = '''
@export
def a(x):
    return x
'''
        self.assertEqual(self.lint(code), ['Line 3: S17- No valid argument annotation found'])

    def test_illegal_annotation(self):
        code = '''
@export
def a(x: set):
    return x
'''
        self.assertEqual(self.lint(code), ['Line 3: S16- Illegal argument annotation used : set'])

    def test_return_annotation(self):
        code = '''
@export
def a(x: int) -> int:
    return x
'''
        self.assertEqual(self.lint(code), ['Line 3: S18- Illegal use of return annotation : int'])

    def test_illegal_builtin(self):
        code = '''
@export
def a():
    exec('1 + 1')
'''
        self.assertEqual(self.lint(code), ['Line 4: S14- Illegal use of a builtin : exec'])

    def test_orm_name_reused_as_argument(self):
        code = '''
balances = Hash()

@export
def a(balances: str):
    return 1
'''
        self.assertEqual(self.lint(code),
                         ['Line 5: S15- Reuse of ORM name definition in a function definition argument name : balances'])

    def test_orm_keyword_overloading(self):
        code = '''
balances = Hash(contract='other', name='stolen')

@export
def a():
    return 1
'''
        self.assertEqual(self.lint(code), ['Line 2: S11- Illicit keyword overloading for ORM assignments'])

    def test_multiple_constructors(self):
        code = '''
@construct
def seed():
    pass

@construct
def seed2():
    pass

@export
def a():
    return 1
'''
        self.assertEqual(self.lint(code), ['Line 7: S9- Multiple use of constructors detected'])

    def test_invalid_decorator(self):
        code = '''
@staticmethod
def a():
    return 1
'''
        violations = self.lint(code)
        self.assertTrue(violations[0].startswith('Line 3: S8- Invalid decorator used'))

    def test_raise_allowed(self):
        code = '''
@export
def a(x: int):
    if x is None:
        raise NotOwner(token_id=x)
    return x
'''
        self.assertIsNone(self.lint(code))

    def test_lambda_rejected(self):
        code = '''
@export
def a():
    f = lambda y: y
'''
        self.assertIn('Line 4: S1- Illegal contracting syntax type used : Lambda', self.lint(code))

    def test_linter_resets_between_checks(self):
        self.lint('def a():\n    return 1\n')
        self.assertIsNone(self.lint('@export\ndef a():\n    return 1\n'))

    def test_bundled_capped_nft_is_clean(self):
        self.assertIsNone(self.lint(contract_code('capped_nft')))

    def test_private_return_annotation_is_linted(self):
        code = '''
def f() -> ().__class__:
    pass

@export
def a():
    return 1
'''
        self.assertIn("Line 2: S2- Illicit use of '_' before variable : __class__", self.lint(code))

    def test_private_argument_annotation_is_linted(self):
        code = '''
def f(x: ().__class__):
    return x

@export
def a():
    return 1
'''
        self.assertIn("Line 2: S2- Illicit use of '_' before variable : __class__", self.lint(code))

    def test_annotation_side_effects_are_linted(self):
        code = '''
side = Variable()

def leak() -> side.set(().__class__.__base__.__subclasses__()[0].__name__):
    pass

@export
def read():
    return side.get()
'''
        violations = self.lint(code)

        self.assertIn("Line 4: S2- Illicit use of '_' before variable : __subclasses__", violations)
        self.assertIn("Line 4: S2- Illicit use of '_' before variable : __name__", violations)

    def test_illegal_builtin_in_annotation(self):
        code = '''
def f(x: exec('1')):
    return x

@export
def a():
    return 1
'''
        self.assertIn('Line 2: S14- Illegal use of a builtin : exec', self.lint(code))

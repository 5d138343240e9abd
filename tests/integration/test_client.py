from unittest import TestCase
from tokencap.client import ContractingClient
from tokencap.exceptions import CompilationException


def guestbook():
    entries = Hash()
    count = Variable()

    @construct
    def seed():
        count.set(0)

    @export
    def sign(message: str):
        entries[ctx.caller] = message
        count.set(count.get() + 1)
        return count.get()

    @export
    def read(who: str):
        return entries[who]


def signed_book():
    Signed = LogEvent('Signed')

    def shout(message):
        return message.upper() + '!'

    @export
    def sign(message: str):
        Signed({'who': ctx.caller})
        return shout(message)


def broken():
    import os

    @export
    def a():
        return os.getcwd()


class TestClient(TestCase):
    def setUp(self):
        self.c = ContractingClient(signer='stu')
        self.c.flush()

    def tearDown(self):
        self.c.flush()

    def test_closure_to_code_string(self):
        code, name = self.c.closure_to_code_string(guestbook)

        self.assertEqual(name, 'guestbook')
        self.assertTrue(code.startswith('entries = Hash()'))

    def test_submit_closure_uses_its_name(self):
        book = self.c.submit(guestbook)

        self.assertEqual(book.name, 'guestbook')
        self.assertIsNotNone(self.c.raw_driver.get_contract('guestbook'))

    def test_calls_use_signer_override(self):
        book = self.c.submit(guestbook)

        self.assertEqual(book.sign(message='hi'), 1)
        self.assertEqual(book.sign(message='yo', signer='colin'), 2)

        self.assertEqual(book.read(who='stu'), 'hi')
        self.assertEqual(book.read(who='colin'), 'yo')

    def test_constructor_is_not_exposed(self):
        book = self.c.submit(guestbook)

        self.assertFalse(hasattr(book, 'seed'))
        self.assertFalse(hasattr(book, '____'))

    def test_lint_returns_violations(self):
        violations = self.c.lint(broken)

        self.assertIn('Line 1: S14- Illegal use of a builtin : os', violations)

    def test_lint_raise_errors(self):
        with self.assertRaises(CompilationException):
            self.c.lint(broken, raise_errors=True)

    def test_lint_clean(self):
        self.assertIsNone(self.c.lint(guestbook))

    def test_submit_broken_raises(self):
        with self.assertRaises(CompilationException):
            self.c.submit(broken)

        self.assertIsNone(self.c.get_contract('broken'))

    def test_compile(self):
        code = self.c.compile(guestbook)
        self.assertIn('def ____():', code)

    def test_get_missing_contract(self):
        self.assertIsNone(self.c.get_contract('nothing'))

    def test_exported_functions_only(self):
        book = self.c.submit(guestbook)

        self.assertEqual(sorted(book.functions), ['read', 'sign'])

    def test_failed_call_raises_contract_error(self):
        book = self.c.submit(guestbook)

        with self.assertRaises(TypeError):
            book.sign()

        self.assertEqual(book.read(who='stu'), None)

    def test_events_collected(self):
        book = self.c.submit(signed_book)
        book.sign(message='hi', signer='colin')

        self.assertEqual(book.events[0]['event'], 'Signed')
        self.assertEqual(book.events[0]['data'], {'who': 'colin'})

    def test_run_private_function(self):
        book = self.c.submit(signed_book)

        self.assertEqual(book.run_private_function('shout', message='hi'), 'HI!')
        self.assertEqual(book.run_private_function('__shout', message='yo'), 'YO!')

        with self.assertRaises(AssertionError):
            book._call('__shout', None, {'message': 'hi'})

    def test_unknown_attribute(self):
        book = self.c.submit(guestbook)

        with self.assertRaises(AttributeError):
            book.nothing_here

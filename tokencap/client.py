from tokencap.execution.executor import Executor
from tokencap.db.driver import ContractDriver
from tokencap.compilation.compiler import ContractingCompiler
from tokencap.contracts import contract_code
from tokencap.exceptions import CompilationException
import ast
import inspect
import textwrap
import astor
import autopep8
from types import FunctionType

from . import config


class AbstractContract:
    """
    A submitted contract as seen by one signer. Every exported function is an
    attribute taking the function's keyword arguments plus an optional
    ``signer=`` override. Failed calls raise the contract's error, and events
    from successful calls accumulate in ``events``.
    """
    def __init__(self, name, signer, environment, executor: Executor, functions):
        self.name = name
        self.signer = signer
        self.environment = environment
        self.executor = executor
        self.functions = functions
        self.events = []

        for function in functions:
            setattr(self, function, self._proxy(function))

    def _proxy(self, function):
        def call(signer=None, **kwargs):
            return self._call(function, signer, kwargs)

        call.__name__ = function
        return call

    def _call(self, function, signer, kwargs, bypass_privates=False):
        output = self.executor.execute(sender=signer or self.signer,
                                       contract_name=self.name,
                                       function_name=function,
                                       kwargs=kwargs,
                                       environment=self.environment,
                                       bypass_privates=bypass_privates)

        if output['status_code'] == 1:
            raise output['result']

        self.events.extend(output['events'])

        return output['result']

    def run_private_function(self, f, signer=None, **kwargs):
        if not f.startswith(config.PRIVATE_METHOD_PREFIX):
            f = '{}{}'.format(config.PRIVATE_METHOD_PREFIX, f)

        return self._call(f, signer, kwargs, bypass_privates=True)


class ContractingClient:
    def __init__(self, signer='sys',
                 driver=None,
                 compiler=None,
                 environment=None):

        self.raw_driver = driver or ContractDriver()
        self.executor = Executor(driver=self.raw_driver)
        self.signer = signer
        self.compiler = compiler or ContractingCompiler()
        self.environment = environment or {}

    def flush(self):
        self.raw_driver.flush()

    def get_contract(self, name):
        code = self.raw_driver.get_contract(name)

        if code is None:
            return None

        # The constructor and private functions carry the private prefix once stored
        exported = [node.name for node in ast.parse(code).body
                    if isinstance(node, ast.FunctionDef) and not node.name.startswith(config.PRIVATE_METHOD_PREFIX)]

        return AbstractContract(name=name,
                                signer=self.signer,
                                environment=self.environment,
                                executor=self.executor,
                                functions=exported)

    @staticmethod
    def closure_to_code_string(f):
        """
        Contracts can be written as the body of a plain Python function so they
        sit in ordinary modules and tests. Returns that body as source, plus the
        function's name to submit it under.
        """
        tree = ast.parse(autopep8.fix_code(textwrap.dedent(inspect.getsource(f))))

        assert len(tree.body) == 1 and isinstance(tree.body[0], ast.FunctionDef), \
            'Expected a single enclosing function definition.'

        enclosing = tree.body[0]
        tree.body = enclosing.body

        return astor.to_source(tree), enclosing.name

    def _source(self, f):
        if isinstance(f, FunctionType):
            return self.closure_to_code_string(f)
        return f, None

    def lint(self, f, raise_errors=False):
        source, _ = self._source(f)
        violations = self.compiler.linter.check(ast.parse(source))

        if violations is not None and raise_errors:
            raise CompilationException(violations)

        return violations

    def compile(self, f):
        source, _ = self._source(f)
        return self.compiler.parse_to_code(source)

    def submit(self, f, name=None, owner=None, constructor_args=None, signer=None):
        source, closure_name = self._source(f)
        name = name or closure_name

        assert name is not None, 'No name provided.'

        output = self.executor.submit(sender=signer or self.signer,
                                      name=name,
                                      code=source,
                                      owner=owner,
                                      constructor_args=constructor_args,
                                      environment=self.environment)

        if output['status_code'] == 1:
            raise output['result']

        return self.get_contract(name)

    def submit_bundled(self, contract, name=None, owner=None, constructor_args=None, signer=None):
        return self.submit(contract_code(contract), name=name or contract, owner=owner,
                           constructor_args=constructor_args, signer=signer)

from datetime import datetime

from tokencap.compilation.compiler import ContractingCompiler
from tokencap.exceptions import ContractExists
from tokencap.stdlib import env
from tokencap import config


class Contract:
    def __init__(self, runtime):
        self._runtime = runtime
        self._driver = runtime.driver

    def submit(self, name, code, owner=None, constructor_args=None):
        if self._driver.get_contract(name) is not None:
            raise ContractExists(contract_name=name)

        code_obj = ContractingCompiler(module_name=name).parse_to_code(code, lint=True)

        scope = env.gather(self._runtime)
        scope.update(self._runtime.env)
        scope.update({'__contract__': True})

        exec(code_obj, scope)

        constructor = scope.get(config.INIT_FUNC_NAME)
        if constructor is not None:
            constructor(**(constructor_args or {}))

        # The environment is caller supplied; only a real datetime is trusted as the submission time
        now = scope.get('now')
        if not isinstance(now, datetime):
            now = None

        self._driver.set_contract(name=name, code=code_obj, owner=owner, timestamp=now)

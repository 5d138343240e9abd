import marshal
import traceback
from copy import deepcopy
from types import FunctionType

from tokencap.db.driver import ContractDriver
from tokencap.db.contract import Contract
from tokencap.execution.runtime import Runtime
from tokencap.exceptions import ContractNotFound, FunctionNotFound, NotContractOwner, TokenError
from tokencap.logger import get_logger
from tokencap.stdlib import env
from tokencap import config

log = get_logger('Executor')


class Executor:
    def __init__(self, driver=None, bypass_privates=False):
        self.driver = driver or ContractDriver()
        self.bypass_privates = bypass_privates
        self.runtime = Runtime(driver=self.driver)

    def load(self, contract_name):
        code = self.driver.get_compiled(contract_name)
        if code is None:
            raise ContractNotFound(contract_name=contract_name)

        scope = env.gather(self.runtime)
        scope.update(self.runtime.env)
        scope.update({'__contract__': True})

        exec(marshal.loads(code), scope)

        return scope

    def _function(self, scope, contract_name, function_name):
        func = scope.get(function_name)

        # Only functions defined by the contract itself, not anything it was handed in its scope
        if not isinstance(func, FunctionType) or func.__globals__ is not scope:
            raise FunctionNotFound(contract_name=contract_name, function_name=function_name)

        return func

    def _run(self, call, auto_commit):
        events = []
        writes = {}
        try:
            result = call()
            status_code = 0

            writes = deepcopy(self.driver.pending_writes)
            events = list(self.runtime.events)

            if auto_commit:
                self.driver.commit()
        except Exception as e:
            result = e
            status_code = 1

            if isinstance(e, (TokenError, AssertionError)):
                log.warning('Call rejected: {}'.format(e))
            else:
                log.error(str(e))
                log.error(traceback.format_exc())

            if auto_commit:
                self.driver.rollback()
        finally:
            self.runtime.clean_up()

        return {
            'status_code': status_code,
            'result': result,
            'writes': writes,
            'events': events,
        }

    def execute(self, sender, contract_name, function_name, kwargs,
                environment={},
                auto_commit=True,
                bypass_privates=None) -> dict:

        if bypass_privates is None:
            bypass_privates = self.bypass_privates

        def call():
            if not bypass_privates:
                assert not function_name.startswith(config.PRIVATE_METHOD_PREFIX), 'Private method not callable.'

            owner = self.driver.get_owner(contract_name)
            self.runtime.set_up(sender=sender, contract_name=contract_name, owner=owner, environment=environment)

            if owner is not None and owner != sender:
                raise NotContractOwner(caller=sender, owner=owner)

            scope = self.load(contract_name)
            func = self._function(scope, contract_name, function_name)

            return func(**kwargs)

        return self._run(call, auto_commit)

    def submit(self, sender, name, code, owner=None, constructor_args=None,
               environment={},
               auto_commit=True) -> dict:

        def call():
            self.runtime.set_up(sender=sender, contract_name=name, owner=owner, environment=environment)
            Contract(self.runtime).submit(name=name, code=code, owner=owner, constructor_args=constructor_args)
            log.notice('Contract {} submitted by {}'.format(name, sender))

        return self._run(call, auto_commit)

from tokencap.db.encoder import encode, decode
from tokencap.logger import get_logger
from tokencap import config
from datetime import datetime, timezone
import marshal

log = get_logger('Driver')


class InMemDriver:
    """
    The backing store. Keys are stored as bytes and values as encoded JSON, so
    anything a contract writes has to survive a round trip through the encoder.
    """
    def __init__(self):
        self.db = {}

    def get(self, key: str):
        return decode(self.db.get(key.encode()))

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
            return
        self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.db.pop(key.encode(), None)

    def flush(self):
        self.db.clear()


class CacheDriver:
    """
    Buffers writes in front of a store. Reads see buffered writes first, a
    buffered None being a delete. Nothing reaches the store until commit.
    """
    def __init__(self, driver=None):
        self.driver = driver or InMemDriver()
        self.pending_writes = {}

    def get(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]
        return self.driver.get(key)

    def set(self, key: str, value):
        self.pending_writes[key] = value

    def delete(self, key: str):
        self.set(key, None)

    def commit(self):
        log.debug('Committing {} pending writes'.format(len(self.pending_writes)))
        for key, value in self.pending_writes.items():
            self.driver.set(key, value)
        self.pending_writes.clear()

    def rollback(self):
        log.debug('Dropping {} pending writes'.format(len(self.pending_writes)))
        self.pending_writes.clear()


class ContractDriver(CacheDriver):
    """
    Lays contract state out as ``contract.variable`` for variables and
    ``contract.variable:key1:key2`` for hash entries. Submitted contracts keep
    their source, compiled code, owner and submission time under reserved
    ``__dunder__`` variables.
    """

    def make_key(self, contract, variable, args=()):
        key = config.INDEX_SEPARATOR.join((contract, variable))
        if args:
            key = config.DELIMITER.join([key] + [str(a) for a in args])
        return key

    def get_var(self, contract, variable, arguments=()):
        return self.get(self.make_key(contract, variable, arguments))

    def set_var(self, contract, variable, arguments=(), value=None):
        self.set(self.make_key(contract, variable, arguments), value)

    def get_contract(self, name):
        return self.get_var(name, config.CODE_KEY)

    def get_compiled(self, name):
        return self.get_var(name, config.COMPILED_KEY)

    def get_owner(self, name):
        # Stored as '' when a contract is open to every caller
        return self.get_var(name, config.OWNER_KEY) or None

    def set_contract(self, name, code, owner=None, timestamp=None):
        if self.get_contract(name) is not None:
            return

        submitted = timestamp or datetime.now(timezone.utc)

        self.set_var(name, config.CODE_KEY, value=code)
        self.set_var(name, config.COMPILED_KEY, value=marshal.dumps(compile(code, name, 'exec')))
        self.set_var(name, config.OWNER_KEY, value=owner)
        self.set_var(name, config.TIME_KEY, value=submitted.isoformat())

    def flush(self):
        self.driver.flush()
        self.rollback()

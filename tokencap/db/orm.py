from tokencap.db.driver import ContractDriver
from tokencap import config


class Datum:
    def __init__(self, contract, name, driver: ContractDriver):
        self._driver = driver
        self._key = driver.make_key(contract, name)


class Variable(Datum):
    """ A single stored value, e.g. ``minted = Variable()``. """

    def set(self, value):
        self._driver.set(self._key, value)

    def get(self):
        return self._driver.get(self._key)


class Hash(Datum):
    """
    A stored mapping, e.g. ``owners = Hash()``. Tuple keys address several
    dimensions (``operators[owner, spender]``). Missing entries read as
    ``default_value``, and writing None removes an entry.
    """

    def __init__(self, contract, name, driver: ContractDriver, default_value=None):
        super().__init__(contract, name, driver=driver)
        self._default_value = default_value

    def _storage_key(self, key):
        parts = key if isinstance(key, tuple) else (key,)

        assert len(parts) <= config.MAX_HASH_DIMENSIONS, 'Too many dimensions ({}) for hash. Max is {}'.format(
            len(parts), config.MAX_HASH_DIMENSIONS
        )

        for part in parts:
            assert not isinstance(part, slice), 'Slices prohibited in hashes.'

            part = str(part)
            # Either character would let one key collide with another variable's layout
            assert config.DELIMITER not in part, 'Illegal delimiter in key.'
            assert config.INDEX_SEPARATOR not in part, 'Illegal separator in key.'

        joined = config.DELIMITER.join(str(p) for p in parts)
        assert len(joined) <= config.MAX_KEY_SIZE, 'Key is too long ({}). Max is {}.'.format(
            len(joined), config.MAX_KEY_SIZE
        )

        return config.DELIMITER.join((self._key, joined))

    def __setitem__(self, key, value):
        self._driver.set(self._storage_key(key), value)

    def __getitem__(self, key):
        value = self._driver.get(self._storage_key(key))
        if value is None:
            return self._default_value
        return value

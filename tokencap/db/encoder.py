import json

# Integers outside a signed 64 bit range are stored as tagged strings so other
# JSON readers of the state do not lose precision.
INT_RANGE = (-(2 ** 63), 2 ** 63 - 1)


class StateEncoder(json.JSONEncoder):
    def default(self, o):
        # Compiled contract code is kept as a marshalled blob
        if isinstance(o, bytes):
            return {'__bytes__': o.hex()}
        return super().default(o)


def tag_big_ints(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        low, high = INT_RANGE
        return value if low < value < high else {'__big_int__': str(value)}
    if isinstance(value, dict):
        return {k: tag_big_ints(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [tag_big_ints(v) for v in value]
    return value


def untag(obj):
    if '__bytes__' in obj:
        return bytes.fromhex(obj['__bytes__'])
    if '__big_int__' in obj:
        return int(obj['__big_int__'])
    return obj


def encode(value):
    return json.dumps(tag_big_ints(value), cls=StateEncoder, separators=(',', ':'))


def decode(raw):
    if raw is None:
        return None

    if isinstance(raw, bytes):
        raw = raw.decode()

    try:
        return json.loads(raw, object_hook=untag)
    except json.decoder.JSONDecodeError:
        return None

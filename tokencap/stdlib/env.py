import builtins

from tokencap.compilation.whitelists import ALLOWED_BUILTINS
from tokencap.stdlib.bridge import orm, events, access


def safe_builtins():
    return {name: getattr(builtins, name) for name in ALLOWED_BUILTINS if hasattr(builtins, name)}


def gather(runtime):
    env = {
        '__builtins__': safe_builtins()
    }

    env.update(orm.bind(runtime))
    env.update(events.bind(runtime))
    env.update(access.bind(runtime))

    return env

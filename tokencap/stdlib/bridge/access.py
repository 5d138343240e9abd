from typing import Any
from tokencap.exceptions import TOKEN_ERRORS


def bind(runtime):
    exports = {
        'ctx': runtime.context,
        'Any': Any
    }
    exports.update(TOKEN_ERRORS)

    return exports

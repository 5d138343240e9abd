"""Logging for tokencap.

LOG_LEVEL selects the level (DEBUG, INFO, WARNING, ERROR or CRITICAL, WARNING
when unset). LOG_DIR, when set, also writes each logger to ``<name>.log`` and a
colored ``<name>.log_color`` in that directory. Loggers carry an extra
``notice`` level between INFO and WARNING for contract lifecycle messages."""

import logging, coloredlogs
import os

VALID_LVLS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

NOTICE = 22
logging.addLevelName(NOTICE, 'NOTICE')

LOG_FORMAT = '%(asctime)s.%(msecs)03d %(name)s[%(process)d] %(levelname)-2s %(message)s'

LEVEL_STYLES = {
    'critical': {'color': 'white', 'bold': True, 'background': 'red'},
    'error': {'color': 'red'},
    'warning': {'color': 'yellow'},
    'notice': {'color': 'magenta'},
    'info': {'color': 'white'},
    'debug': {'color': 'green'},
}
FIELD_STYLES = {
    'asctime': {'color': 'green'},
    'levelname': {'color': 'black', 'bright': True},
    'name': {'color': 'blue'},
}


def log_level():
    name = os.getenv('LOG_LEVEL')
    if not name:
        return logging.WARNING

    assert name in VALID_LVLS, "Log level {} not in valid levels {}".format(name, VALID_LVLS)
    return getattr(logging, name)


def colored(handler):
    handler.setFormatter(coloredlogs.ColoredFormatter(LOG_FORMAT, level_styles=LEVEL_STYLES,
                                                      field_styles=FIELD_STYLES))
    return handler


def _handlers(name):
    handlers = [colored(logging.StreamHandler())]

    log_dir = os.getenv('LOG_DIR')
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        filename = os.path.join(log_dir, '{}.log'.format(name or 'tokencap'))

        plain = logging.FileHandler(filename, delay=True)
        plain.setFormatter(logging.Formatter(LOG_FORMAT))

        handlers.append(plain)
        handlers.append(colored(logging.FileHandler('{}_color'.format(filename), delay=True)))

    return handlers


def get_logger(name=''):
    log = logging.getLogger(name)

    # Handlers are attached once per named logger
    if not log.handlers:
        for handler in _handlers(name):
            log.addHandler(handler)
        log.propagate = False

        def notice(message, *args, **kwargs):
            if log.isEnabledFor(NOTICE):
                log._log(NOTICE, message, args, **kwargs)

        log.notice = notice

    log.setLevel(log_level())

    return log

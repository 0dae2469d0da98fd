# Instruction logging that can be switched on and off while a ROM is running
# (F1 in the window). Fatal errors go through `logger` directly.

import logging

logger = logging.getLogger("chip8vm")

_logs_on = False


def logs_on():
    return _logs_on


def set_logs(on):
    global _logs_on
    _logs_on = bool(on)
    logger.setLevel(logging.DEBUG if _logs_on else logging.INFO)


def toggle_logs():
    set_logs(not _logs_on)
    logger.info("logsOn: %s", _logs_on)
    return _logs_on


def log(*args):
    if _logs_on:
        logger.debug(" ".join(str(a) for a in args))


def configure(level=logging.INFO):
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)

import logging

logger = logging.getLogger("chip8emu")

# make it true if you want the logs
logs_on = False


def log(*args):
    if logs_on:
        logger.debug(" ".join(str(a) for a in args))


def enable_logs(flag=None):
    """Set the log switch, or flip it when called without an argument."""
    global logs_on
    logs_on = (not logs_on) if flag is None else bool(flag)
    return logs_on

import logging, os, sys


def get_logger(name, level=None):
    log = logging.getLogger(name)
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        h.setFormatter(fmt)
        log.addHandler(h)
        log.setLevel((level or os.getenv("LOG_LEVEL", "INFO")).upper())
    return log

import logging

logformat = "[%(asctime)s] [%(levelname)s] %(msg)s"
logging.basicConfig(level=logging.INFO, format=logformat)

# Replaced by init_logger; the library logs here until then.
logger: logging.Logger = logging.getLogger("ghissues")


def init_logger(logger_name: str) -> logging.Logger:
    global logger
    logger = logging.getLogger(logger_name)
    return logger


def get_logger() -> logging.Logger:
    return logger


def set_verbosity(verbose: bool = False, quiet: bool = False) -> None:
    """
    Debug logging shows every request sent; quiet keeps only errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.getLogger().setLevel(level)

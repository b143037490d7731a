#!/usr/bin/python3

"""Set up logging for the world editor's packages."""

import logging
import sys

PACKAGES = ('blocks', 'chunks', 'editor', 'elements', 'visualise')


def setup_logging(level=logging.INFO, log_file=None):
    """Configure the loggers of all packages of this project.

    Messages go to stderr, so that scripts can still write their output to
    stdout, and additionally to log_file if one is given.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w',
                                            encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    for name in PACKAGES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate output when called more than once.
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            logger.addHandler(handler)

# Copyright The IETF Trust 2007-2024, All Rights Reserved
# -*- coding: utf-8 -*-

import logging

from idnits import settings

formatter = logging.Formatter(settings.LOG_FORMAT, style='{')

logger = logging.getLogger(settings.LOGGER_NAME)


def configure(options):
    "Attach a stderr handler to the idnits logger, at a level given by the options"
    if options.debug:
        level = logging.DEBUG
    elif options.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    for h in logger.handlers:
        h.setLevel(level)
    logger.setLevel(level)
    return logger


def log(msg, level=logging.INFO, e=None):
    "Logs the given message, attributed to the calling point."
    if not isinstance(msg, str):
        msg = str(msg)
    if e is not None:
        msg = "%s: %s" % (msg, e)
    logger.log(level, msg, stacklevel=2)

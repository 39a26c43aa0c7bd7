#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A common interface to all configuration settings of the decoder that are available via environment
variables. This module is also host to the logging configuration. The library itself never changes
its defaults based on the environment; the settings below are consumed by the command line interface
in `rfc2047.shell` and by the logger factory.
"""
from __future__ import annotations

import os
import logging

from enum import IntEnum
from typing import Optional, TypeVar, Generic

_T = TypeVar('_T')

PACKAGE = 'rfc2047'


class LogLevel(IntEnum):
    """
    An enumeration representing the current log level:
    """
    DETACHED = logging.CRITICAL + 100
    """
    The decoder is used as a library and not attached to a terminal. This means that the only way
    to communicate problems is to throw an exception.
    """
    NONE = logging.CRITICAL + 50

    @classmethod
    def FromVerbosity(cls, verbosity: int):
        if verbosity < 0:
            return cls.DETACHED
        return {
            0: cls.WARNING,
            1: cls.INFO,
            2: cls.DEBUG
        }.get(verbosity, cls.DEBUG)

    NOTSET   = logging.NOTSET    # noqa
    CRITICAL = logging.CRITICAL  # noqa
    FATAL    = logging.FATAL     # noqa
    ERROR    = logging.ERROR     # noqa
    WARNING  = logging.WARNING   # noqa
    WARN     = logging.WARN      # noqa
    INFO     = logging.INFO      # noqa
    DEBUG    = logging.DEBUG     # noqa


class DecoderFormatter(logging.Formatter):

    NAMES = {
        logging.CRITICAL : 'failure',
        logging.ERROR    : 'failure',
        logging.WARNING  : 'warning',
        logging.INFO     : 'comment',
        logging.DEBUG    : 'verbose',
    }

    def __init__(self, format, **kwargs):
        super().__init__(format, **kwargs)

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.custom_level_name = self.NAMES.get(record.levelno, 'message')
        return super().formatMessage(record)


def logger(name: str) -> logging.Logger:
    """
    Obtain a logger which is configured with the default decoder format. All loggers of the package
    are children of the package logger, which is the only one that holds a handler. When the
    environment variable `RFC2047_VERBOSITY` is set, it determines the initial log level.
    """
    base = logging.getLogger(PACKAGE)
    if not base.handlers:
        stream = logging.StreamHandler()
        stream.setFormatter(DecoderFormatter(
            '({asctime}) {custom_level_name} in {name}: {message}',
            style='{',
            datefmt='%H:%M:%S',
        ))
        base.addHandler(stream)
        base.propagate = False
        if (level := environment.verbosity.value) is not None:
            base.setLevel(level)
    return logging.getLogger(name)


def set_log_level(level: int | LogLevel) -> None:
    """
    Change the log level of all loggers in the package.
    """
    logger(PACKAGE).setLevel(level)


class EnvironmentVariableSetting(Generic[_T]):
    key: str
    value: Optional[_T]

    def __init__(self, name: str):
        self.key = F'RFC2047_{name}'
        self.value = self.read()

    def read(self) -> Optional[_T]:
        return None


class EVInt(EnvironmentVariableSetting[int]):
    def read(self):
        try:
            return int(os.environ[self.key], 0)
        except (KeyError, ValueError):
            return None


class EVStr(EnvironmentVariableSetting[str]):
    def read(self):
        value = os.environ.get(self.key, '').strip()
        return value or None


class EVLog(EnvironmentVariableSetting[LogLevel]):
    def read(self):
        try:
            loglevel = os.environ[self.key]
        except KeyError:
            return None
        if loglevel.isdigit():
            return LogLevel.FromVerbosity(int(loglevel))
        try:
            loglevel = LogLevel[loglevel.upper()]
        except KeyError:
            levels = ', '.join(ll.name for ll in LogLevel)
            logging.getLogger(__name__).warning(
                F'ignoring unknown verbosity "{loglevel!r}"; pick from: {levels}')
            return None
        else:
            return loglevel


class environment:
    verbosity = EVLog('VERBOSITY')
    strategy = EVStr('STRATEGY')
    max_payload = EVInt('MAX_PAYLOAD')

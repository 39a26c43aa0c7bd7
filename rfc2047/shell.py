#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
# Command Line Interface

The `rfc2047` command decodes MIME message headers. Each positional argument is decoded as one
header; when no arguments are given, headers are read from standard input. Lines of the input that
begin with whitespace continue the previous header:

    $ printf 'Subject: =?ISO-8859-1?Q?a?=\\n =?ISO-8859-1?Q?b?=\\n' | rfc2047
    Subject: ab

The defaults of the `--strategy` and `--max-payload` options can be changed with the environment
variables `RFC2047_STRATEGY` and `RFC2047_MAX_PAYLOAD`, respectively.
"""
from __future__ import annotations

import argparse
import re
import sys

from typing import BinaryIO, Iterable, Sequence

from rfc2047 import __version__
from rfc2047.decoder import Decoder
from rfc2047.lib import charsets
from rfc2047.lib.enumeration import makeinstance
from rfc2047.lib.environment import LogLevel, environment, logger, set_log_level
from rfc2047.lib.words.const import MAX_PAYLOAD
from rfc2047.lib.words.model import RecoverStrategy, RFC2047Error

_log = logger(__name__)

_HEADER_BREAK = re.compile(B'\\r?\\n(?![ \\t])')


def headers(stream: BinaryIO) -> Iterable[bytes]:
    """
    Split the input stream into headers. A line break followed by whitespace is a folded header
    line and remains part of the header.
    """
    data = stream.read()
    for header in _HEADER_BREAK.split(data):
        if header:
            yield header


def _strategy(value: str) -> RecoverStrategy:
    try:
        return makeinstance(RecoverStrategy, value)
    except ValueError as E:
        raise argparse.ArgumentTypeError(str(E)) from E


def _integer(value: str) -> int:
    return int(value, 0)


def argparser() -> argparse.ArgumentParser:
    strategy = RecoverStrategy.Fail
    if (name := environment.strategy.value) is not None:
        try:
            strategy = makeinstance(RecoverStrategy, name)
        except ValueError:
            _log.warning(F'ignoring unknown strategy {name!r} from {environment.strategy.key}')
    max_payload = environment.max_payload.value or MAX_PAYLOAD
    argp = argparse.ArgumentParser(
        prog='rfc2047',
        description='Decodes MIME encoded words from RFC 2047 in message headers.',
    )
    argp.add_argument('headers', nargs='*', metavar='header',
        help='A header to decode. Standard input is read if no header is given.')
    argp.add_argument('-s', '--strategy', type=_strategy, default=strategy,
        help=(
            'How to handle malformed encoded words; one of {}. The default is {}.'.format(
                ', '.join(s.value for s in RecoverStrategy), strategy)))
    argp.add_argument('-m', '--max-payload', type=_integer, default=max_payload, metavar='N',
        help=F'The maximum size of the encoded text in any encoded word; the default is {max_payload}.')
    argp.add_argument('-l', '--list-charsets', action='store_true',
        help='Print the names of all supported charsets and exit.')
    argp.add_argument('-v', '--verbose', action='count', default=0,
        help='Increase the verbosity; specify twice for debug output.')
    argp.add_argument('-q', '--quiet', action='store_true',
        help='Do not log anything, not even errors.')
    argp.add_argument('--version', action='version', version=F'%(prog)s {__version__}')
    return argp


def main(argv: Sequence[str] | None = None, stdin: BinaryIO | None = None, stdout: BinaryIO | None = None) -> int:
    args = argparser().parse_args(argv)
    stdin = stdin or sys.stdin.buffer
    stdout = stdout or sys.stdout.buffer

    if args.quiet:
        set_log_level(LogLevel.NONE)
    elif args.verbose:
        set_log_level(LogLevel.FromVerbosity(args.verbose))

    if args.list_charsets:
        for name in charsets.supported():
            stdout.write(F'{name}\n'.encode('utf8'))
        return 0

    try:
        decoder = Decoder(args.strategy, args.max_payload)
    except ValueError as E:
        _log.error(str(E))
        return 2

    if args.headers:
        inputs = [h.encode('utf8', 'surrogateescape') for h in args.headers]
    else:
        inputs = headers(stdin)

    status = 0

    for k, header in enumerate(inputs, 1):
        try:
            decoded = decoder.decode(header)
        except RFC2047Error as E:
            _log.error(F'header {k}: {E!s}')
            status = 1
            continue
        stdout.write(decoded.encode('utf8', 'surrogateescape'))
        stdout.write(B'\n')

    stdout.flush()
    return status


if __name__ == '__main__':
    sys.exit(main())

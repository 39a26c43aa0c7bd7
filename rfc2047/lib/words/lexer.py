"""
The lexer splits raw header bytes into literal text and encoded word candidates. It does not decode
anything; the candidates retain the raw bytes of their charset, encoding, and payload fields.
"""
from __future__ import annotations

import re

from rfc2047.lib.environment import logger
from rfc2047.lib.types import asbuffer, buf, typename
from rfc2047.lib.words.const import ESPECIALS, PREFIX, SUFFIX, WHITESPACE
from rfc2047.lib.words.model import Candidate, ErrorKind, RFC2047Error, Text, Token

_log = logger(__name__)


def _bytes_class(excluded: bytes) -> bytes:
    return B'[^%s\\x00-\\x1F\\x7F]' % re.escape(excluded)


_TOKEN = _bytes_class(ESPECIALS + B' ')
_PAYLOAD = B'[^?%s]' % re.escape(WHITESPACE)

ENCODED_WORD = re.compile(
    re.escape(PREFIX)
    + B'(?P<charset>%s*)\\?' % _TOKEN
    + B'(?P<encoding>%s*)\\?' % _TOKEN
    + B'(?P<payload>%s*)' % _PAYLOAD
    + re.escape(SUFFIX)
)
"""
Matches a complete encoded word marker of the form `=?charset?encoding?payload?=`. The fields may be
empty; it is the parser's job to decide whether such a marker is acceptable.
"""


def as_bytes(data: buf | str) -> bytes:
    """
    Convert the decoder input to an immutable bytes object. Strings are encoded as UTF-8. Any input
    that can not be represented as a sequence of bytes causes an `RFC2047Error` of kind
    `rfc2047.lib.words.model.ErrorKind.ParseBytes`.
    """
    if isinstance(data, str):
        try:
            return data.encode('utf8')
        except UnicodeEncodeError as E:
            raise RFC2047Error(
                ErrorKind.ParseBytes, F'cannot parse bytes into tokens: {E!s}', E.start) from E
    if (view := asbuffer(data)) is None:
        raise RFC2047Error(
            ErrorKind.ParseBytes, F'cannot parse bytes into tokens: unsupported input of type {typename(data)}')
    with view:
        return view.tobytes()


def tokenize(data: buf | str) -> list[Token]:
    """
    Scan the input from left to right and return the list of tokens. Every byte of the input is
    part of exactly one token, and concatenating the raw bytes of all tokens yields the input.
    Adjacent literal bytes always form a single `rfc2047.lib.words.model.Text` token.
    """
    data = as_bytes(data)
    tokens: list[Token] = []
    cursor = 0
    for match in ENCODED_WORD.finditer(data):
        start, end = match.span()
        if start > cursor:
            tokens.append(Text(data[cursor:start], cursor))
        tokens.append(Candidate(
            match['charset'],
            match['encoding'],
            match['payload'],
            match[0],
            start,
        ))
        cursor = end
    if cursor < len(data):
        tokens.append(Text(data[cursor:], cursor))
    _log.debug(F'split {len(data)} bytes into {len(tokens)} tokens')
    return tokens

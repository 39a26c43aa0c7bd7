"""
The evaluator computes the decoded text of a `rfc2047.lib.words.model.Document`. Encoded words are
first decoded from their transfer encoding, which is either Base64 or Quoted-Printable, and then
converted to text using the charset lookup in `rfc2047.lib.charsets`. Whitespace between two encoded
words is discarded as required by RFC 2047.
"""
from __future__ import annotations

import base64
import binascii
import re

from rfc2047.lib import charsets
from rfc2047.lib.environment import logger
from rfc2047.lib.words.const import SPACE, UNDERSCORE
from rfc2047.lib.words.model import (
    Document,
    EncodedWord,
    Encoding,
    ErrorKind,
    Literal,
    RecoverStrategy,
    RFC2047Error,
)

_log = logger(__name__)

_B64_ALPHABET = re.compile(B'[A-Za-z0-9+/]*={0,2}')
_QP_ESCAPE = re.compile(B'=(?P<code>[0-9A-Fa-f]{2})?')


def decode_base64(payload: bytes) -> bytes:
    """
    Decode a Base64 payload using the standard alphabet. Characters outside the alphabet and
    incorrect padding or length are errors, but non-zero trailing bits are tolerated.
    """
    if not _B64_ALPHABET.fullmatch(payload):
        raise RFC2047Error(ErrorKind.DecodeBase64, 'invalid Base64 encoded text: non-alphabet character found')
    if len(payload) % 4:
        raise RFC2047Error(ErrorKind.DecodeBase64, F'invalid Base64 encoded text: length {len(payload)} is not a multiple of 4')
    try:
        return base64.b64decode(payload)
    except binascii.Error as E:
        raise RFC2047Error(ErrorKind.DecodeBase64, F'invalid Base64 encoded text: {E!s}') from E


def decode_quoted_printable(payload: bytes) -> bytes:
    """
    Decode the Q encoding from RFC 2047, which is Quoted-Printable with the additional rule that an
    underscore represents a space.
    """
    def unescape(match: re.Match[bytes]):
        if (code := match['code']) is None:
            raise RFC2047Error(
                ErrorKind.DecodeQuotedPrintable,
                F'invalid escape sequence at position {match.start()} of Q encoded text')
        return bytes((int(code, 16),))
    return _QP_ESCAPE.sub(unescape, payload.replace(UNDERSCORE, SPACE))


_TRANSFER_DECODERS = {
    Encoding.B: decode_base64,
    Encoding.Q: decode_quoted_printable,
}


class Evaluator:

    def __init__(self, strategy: RecoverStrategy = RecoverStrategy.Fail):
        self.strategy = strategy

    def literal(self, literal: Literal) -> str:
        try:
            return literal.data.decode('utf8')
        except UnicodeDecodeError as E:
            if self.strategy is RecoverStrategy.Skip:
                _log.info(F'literal text at offset {literal.offset} is not valid UTF-8; keeping raw bytes')
                return literal.data.decode('utf8', 'surrogateescape')
            raise RFC2047Error(
                ErrorKind.DecodeUtf8,
                F'literal text is not valid UTF-8: {E.reason}',
                literal.offset + E.start,
            ) from E

    def word(self, word: EncodedWord) -> str | None:
        """
        Decode the given encoded word. The return value is `None` when the word could not be
        converted to text and the strategy permits to use its raw form instead.
        """
        try:
            data = _TRANSFER_DECODERS[word.encoding](word.payload)
        except RFC2047Error as E:
            E.offset = word.offset
            E.word = word.raw
            E.words = [word.raw]
            raise
        try:
            return charsets.lookup(word.charset)(data)
        except (LookupError, UnicodeError) as E:
            error = RFC2047Error(
                ErrorKind.DecodeUtf8,
                F'cannot decode the encoded word {word.display()} as {word.charset}: {E!s}',
                word.offset,
                word.raw,
            )
            if self.strategy is not RecoverStrategy.Skip:
                raise error from E
            _log.info(F'keeping raw encoded word: {error!s}')
            return None

    def evaluate(self, document: Document) -> str:
        parts: list[str | None] = []
        for segment in document:
            if isinstance(segment, Literal):
                parts.append(None if segment.folded else self.literal(segment))
            else:
                parts.append(self.word(segment))
        output = []
        for k, (segment, part) in enumerate(zip(document, parts)):
            if part is not None:
                output.append(part)
            elif isinstance(segment, EncodedWord):
                output.append(segment.raw.decode('utf8', 'surrogateescape'))
            # a folded literal is always enclosed by two encoded words
            elif parts[k - 1] is None or parts[k + 1] is None:
                output.append(self.literal(segment))
        return ''.join(output)


def evaluate(document: Document, strategy: RecoverStrategy = RecoverStrategy.Fail) -> str:
    """
    Compute the decoded text of a document produced by `rfc2047.lib.words.parser.parse`.
    """
    return Evaluator(strategy).evaluate(document)

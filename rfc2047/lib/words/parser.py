"""
The parser turns the token stream of the lexer into a `rfc2047.lib.words.model.Document`. It
validates every encoded word candidate and, depending on the `RecoverStrategy`, either rejects
malformed words, demotes them to literal text, or lets them pass for a best effort decoding.
"""
from __future__ import annotations

from typing import Iterable

from rfc2047.lib.environment import logger
from rfc2047.lib.words.const import ASTERISK, MAX_LENGTH, MAX_PAYLOAD, WHITESPACE
from rfc2047.lib.words.model import (
    Candidate,
    Document,
    EncodedWord,
    Encoding,
    ErrorKind,
    Literal,
    RecoverStrategy,
    RFC2047Error,
    Text,
    Token,
)

_log = logger(__name__)

FALLBACK_CHARSET = 'us-ascii'


class DocumentBuilder:
    """
    Collects the segments of a document. Literal bytes that are appended directly after another
    literal are merged into it.
    """
    def __init__(self):
        self.document = Document()

    def literal(self, data: bytes, offset: int):
        segments = self.document.segments
        if segments and isinstance(last := segments[-1], Literal):
            last.data += data
        else:
            segments.append(Literal(data, offset))

    def word(self, word: EncodedWord):
        self.document.segments.append(word)

    def fold(self) -> Document:
        """
        Mark every whitespace literal that is enclosed by two encoded words as folded.
        """
        segments = self.document.segments
        for k in range(1, len(segments) - 1):
            segment = segments[k]
            if not isinstance(segment, Literal):
                continue
            if segment.data.strip(WHITESPACE):
                continue
            if isinstance(segments[k - 1], EncodedWord) and isinstance(segments[k + 1], EncodedWord):
                segment.folded = True
        return self.document


class Parser:

    def __init__(self, strategy: RecoverStrategy = RecoverStrategy.Fail, max_payload: int = MAX_PAYLOAD):
        self.strategy = strategy
        self.max_payload = max_payload

    def demote(self, error: RFC2047Error, fatal: bool = True) -> None:
        """
        Reject the candidate under the given error, which means that it has to be treated as literal
        text. The error is raised under the `RecoverStrategy.Fail` strategy, and also under the
        `RecoverStrategy.Decode` strategy if it is `fatal`.
        """
        if self.strategy is RecoverStrategy.Fail or fatal and self.strategy is RecoverStrategy.Decode:
            raise error
        _log.info(F'treating encoded word as literal text: {error!s}')
        return None

    def violation(self, candidate: Candidate, kind: ErrorKind, message: str) -> bool:
        """
        Handle a violation for the given candidate. The return value is `True` if the candidate
        should be demoted to literal text and `False` if decoding should be attempted anyway. The
        latter only happens under the `RecoverStrategy.Decode` strategy.
        """
        error = RFC2047Error(kind, message, candidate.offset, candidate.raw)
        if self.strategy is RecoverStrategy.Fail:
            raise error
        if self.strategy is RecoverStrategy.Skip:
            _log.info(F'treating encoded word as literal text: {error!s}')
            return True
        _log.info(F'decoding despite violation: {error!s}')
        return False

    def check_length(self, tokens: list[Token]):
        """
        Reject the input if it contains any encoded word that exceeds the maximum length. This
        check happens before any other validation and the error lists all such words.
        """
        too_long = [t for t in tokens if isinstance(t, Candidate) and len(t) > MAX_LENGTH]
        if too_long:
            raise RFC2047Error.TooLong(too_long)

    def charset(self, candidate: Candidate) -> str | None:
        charset, _, _ = candidate.charset.partition(ASTERISK)
        if charset:
            return charset.decode('latin1')
        if self.violation(candidate, ErrorKind.ParseEncodingEmpty,
                F'the charset of the encoded word {candidate.display()} is empty'):
            return None
        return FALLBACK_CHARSET

    def encoding(self, candidate: Candidate) -> Encoding | None:
        if (encoding := Encoding.Try(candidate.encoding)) is not None:
            return encoding
        enc = candidate.encoding.decode('latin1')
        return self.demote(RFC2047Error(
            ErrorKind.ParseEncoding,
            F'the encoding {enc!r} of the encoded word {candidate.display()} is neither B nor Q',
            candidate.offset,
            candidate.raw,
        ), fatal=False)

    def validate(self, candidate: Candidate) -> EncodedWord | None:
        """
        Convert the candidate into an encoded word. If the return value is `None`, the candidate
        has to be treated as literal text.
        """
        if (charset := self.charset(candidate)) is None:
            return None
        if (encoding := self.encoding(candidate)) is None:
            return None
        if not candidate.payload and self.violation(candidate, ErrorKind.ParseEncodingEmpty,
                F'the encoded text of the encoded word {candidate.display()} is empty'):
            return None
        if len(candidate) > MAX_LENGTH:
            if self.violation(candidate, ErrorKind.ParseEncodedWordTooLong,
                    F'the encoded word {candidate.display()} exceeds {MAX_LENGTH} characters'):
                return None
        if len(candidate.payload) > self.max_payload:
            return self.demote(RFC2047Error(
                ErrorKind.ParseEncodingTooBig,
                F'the encoded text has {len(candidate.payload)} bytes, the limit is {self.max_payload}',
                candidate.offset,
                candidate.raw,
            ))
        return EncodedWord(charset, encoding, candidate.payload, candidate.raw, candidate.offset)

    def parse(self, tokens: Iterable[Token]) -> Document:
        tokens = list(tokens)
        if self.strategy is RecoverStrategy.Fail:
            self.check_length(tokens)
        builder = DocumentBuilder()
        for token in tokens:
            if isinstance(token, Text):
                builder.literal(token.data, token.offset)
            elif (word := self.validate(token)) is None:
                builder.literal(token.raw, token.offset)
            else:
                builder.word(word)
        document = builder.fold()
        _log.debug(F'parsed {len(document)} segments')
        return document


def parse(
    tokens: Iterable[Token],
    strategy: RecoverStrategy = RecoverStrategy.Fail,
    max_payload: int = MAX_PAYLOAD,
) -> Document:
    """
    Parse the tokens produced by `rfc2047.lib.words.lexer.tokenize` into a document.
    """
    return Parser(strategy, max_payload).parse(tokens)

from __future__ import annotations

import enum

from dataclasses import dataclass, field
from typing import Union

from rfc2047.lib.words.const import MAX_LENGTH


class RecoverStrategy(str, enum.Enum):
    """
    The policy that governs how malformed or oversized encoded words are handled.
    """
    Fail = 'fail'
    """
    Abort the entire decoding operation with an error.
    """
    Skip = 'skip'
    """
    Treat the offending span as literal text and continue.
    """
    Decode = 'decode'
    """
    Tolerate structural and length violations and attempt to decode anyway.
    """

    def __str__(self):
        return self.value


class Encoding(str, enum.Enum):
    B = 'B'
    Q = 'Q'
    Base64 = B
    QuotedPrintable = Q

    @classmethod
    def Try(cls, value: bytes):
        try:
            return cls(value.decode('ascii').upper())
        except (UnicodeDecodeError, ValueError):
            return None

    def __str__(self):
        return self.value


class ErrorKind(str, enum.Enum):
    ParseBytes              = 'ParseBytesError'               # noqa
    ParseEncodedWordTooLong = 'ParseEncodedWordTooLongError'  # noqa
    ParseEncoding           = 'ParseEncodingError'            # noqa
    ParseEncodingEmpty      = 'ParseEncodingEmptyError'       # noqa
    ParseEncodingTooBig     = 'ParseEncodingTooBigError'      # noqa
    DecodeBase64            = 'DecodeBase64Error'             # noqa
    DecodeQuotedPrintable   = 'DecodeQuotedPrintableError'    # noqa
    DecodeUtf8              = 'DecodeUtf8Error'               # noqa

    @property
    def stage(self) -> str:
        if self is ErrorKind.ParseBytes:
            return 'lexer'
        if self.value.startswith('Parse'):
            return 'parser'
        return 'evaluator'

    def __str__(self):
        return self.value


class RFC2047Error(ValueError):
    """
    The only exception type raised by the decoder. The `kind` attribute identifies the reason for
    the failure; `offset` is the position of the offending span in the input and `word` is the
    raw encoded word that caused the error, if any.
    """
    kind: ErrorKind
    offset: int | None
    word: bytes | None
    words: list[bytes]

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        offset: int | None = None,
        word: bytes | None = None,
        words: list[bytes] | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.offset = offset
        self.word = word
        if words is None:
            words = [] if word is None else [word]
        self.words = words

    @property
    def stage(self) -> str:
        return self.kind.stage

    def __str__(self):
        message = super().__str__()
        if self.offset is None:
            return F'{self.kind!s}: {message}'
        return F'{self.kind!s} at offset {self.offset}: {message}'

    @classmethod
    def TooLong(cls, words: list[Candidate]):
        listing = ', '.join(w.display() for w in words)
        return cls(
            ErrorKind.ParseEncodedWordTooLong,
            F'Cannot parse the following encoded words, because they exceed {MAX_LENGTH} characters: {listing}',
            words[0].offset,
            words=[w.raw for w in words],
        )


def _display(raw: bytes) -> str:
    return raw.decode('utf8', 'backslashreplace')


@dataclass
class Text:
    data: bytes
    offset: int = 0


@dataclass
class Candidate:
    """
    An encoded word as recognized by the lexer. The three fields hold the raw, undecoded bytes of
    the charset, the encoding and the payload. The `raw` member is the complete marker including
    all delimiters.
    """
    charset: bytes
    encoding: bytes
    payload: bytes
    raw: bytes
    offset: int = 0

    def __len__(self):
        return len(self.raw)

    def display(self) -> str:
        return _display(self.raw)


Token = Union[Text, Candidate]


@dataclass
class Literal:
    data: bytes
    offset: int = 0
    folded: bool = False
    """
    This literal consists only of whitespace and occurs between two encoded words. It is not part
    of the decoded text.
    """


@dataclass
class EncodedWord:
    charset: str
    encoding: Encoding
    payload: bytes
    raw: bytes = B''
    offset: int = 0

    def display(self) -> str:
        return _display(self.raw)


Segment = Union[Literal, EncodedWord]


@dataclass
class Document:
    segments: list[Segment] = field(default_factory=list)

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

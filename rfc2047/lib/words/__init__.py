"""
## Encoded Words

An encoded word from RFC 2047 has the following form:

    =?charset?encoding?encoded-text?=

The charset names the character set of the text, the encoding is either `B` for Base64 or `Q` for
a variant of Quoted-Printable in which an underscore represents a space. An encoded word must not
be longer than 75 characters. When two encoded words are separated only by whitespace, this
whitespace is not part of the decoded text:

    =?ISO-8859-1?Q?a?=  b                       ->  "a  b"
    =?ISO-8859-1?Q?a?= =?ISO-8859-1?Q?b?=       ->  "ab"
    =?ISO-8859-1?Q?a?= =?ISO-8859-2?Q?_b?=      ->  "a b"

Decoding happens in three stages: The `rfc2047.lib.words.lexer` splits the input into literal text
and encoded word candidates, the `rfc2047.lib.words.parser` validates the candidates and builds a
document, and the `rfc2047.lib.words.evaluator` computes the decoded text.
"""
from __future__ import annotations

from .evaluator import Evaluator, evaluate
from .lexer import tokenize
from .model import Document, ErrorKind, RecoverStrategy, RFC2047Error
from .parser import Parser, parse

__all__ = [
    'Document',
    'ErrorKind',
    'evaluate',
    'Evaluator',
    'parse',
    'Parser',
    'RecoverStrategy',
    'RFC2047Error',
    'tokenize',
]

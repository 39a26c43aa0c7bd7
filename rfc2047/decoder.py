"""
The decoder holds the configuration of a decoding operation and drives the three pipeline stages
from `rfc2047.lib.words`. A decoder is immutable; the builder methods return a modified copy:

    >>> from rfc2047 import Decoder
    >>> Decoder().recover_strategy('skip').decode(B'=?utf-8?X?abc?= works')
    '=?utf-8?X?abc?= works'
"""
from __future__ import annotations

import dataclasses

from rfc2047.lib.enumeration import makeinstance
from rfc2047.lib.environment import logger
from rfc2047.lib.types import buf
from rfc2047.lib.words import evaluate, parse, tokenize
from rfc2047.lib.words.const import MAX_PAYLOAD
from rfc2047.lib.words.model import RecoverStrategy, RFC2047Error

_log = logger(__name__)


@dataclasses.dataclass(frozen=True)
class Decoder:
    """
    Represents the decoder configuration. The `strategy` determines how malformed or oversized
    encoded words are handled, and `max_payload` is an upper bound for the size of the encoded text
    of any single encoded word which is enforced regardless of the strategy.
    """
    strategy: RecoverStrategy = RecoverStrategy.Fail
    max_payload: int = MAX_PAYLOAD

    def __post_init__(self):
        strategy = makeinstance(RecoverStrategy, self.strategy)
        if strategy is None:
            raise ValueError('A recover strategy is required.')
        if self.max_payload < 0:
            raise ValueError(F'Invalid payload limit {self.max_payload}.')
        object.__setattr__(self, 'strategy', strategy)

    def recover_strategy(self, strategy: RecoverStrategy | str) -> Decoder:
        """
        Return a decoder that uses the given recover strategy.
        """
        return dataclasses.replace(self, strategy=strategy)

    def skip_encoded_word_length(self, skip: bool = True) -> Decoder:
        """
        Return a decoder that does or does not verify the length of encoded words. Skipping the
        verification is the same as choosing `rfc2047.lib.words.model.RecoverStrategy.Decode`.
        """
        return self.recover_strategy(RecoverStrategy.Decode if skip else RecoverStrategy.Fail)

    def payload_limit(self, limit: int) -> Decoder:
        """
        Return a decoder with the given upper bound for the size of encoded text.
        """
        return dataclasses.replace(self, max_payload=limit)

    def decode(self, data: buf | str) -> str:
        """
        Decode the given RFC 2047 MIME message header. The input is usually a bytes object; string
        input is encoded as UTF-8 first. Any failure raises an `rfc2047.lib.words.model.RFC2047Error`.
        """
        try:
            tokens = tokenize(data)
            document = parse(tokens, self.strategy, self.max_payload)
            return evaluate(document, self.strategy)
        except RFC2047Error as E:
            _log.debug(F'aborted in {E.stage} stage: {E!s}')
            raise


def decode(data: buf | str) -> str:
    """
    Decode the given RFC 2047 MIME message header using the default configuration:

        >>> from rfc2047 import decode
        >>> decode('=?UTF-8?Q?encoded_str_with_symbol_=E2=82=AC?=')
        'encoded str with symbol €'
    """
    return Decoder().decode(data)

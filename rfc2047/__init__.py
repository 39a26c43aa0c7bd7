R"""
This is the documentation of the `rfc2047` package, a decoder for MIME encoded words as they are
specified in [RFC 2047](https://datatracker.ietf.org/doc/html/rfc2047). Encoded words are used in
message headers to represent text that is not plain ASCII:

    >>> import rfc2047
    >>> rfc2047.decode(B'=?UTF-8?B?ZW5jb2RlZCBzdHIgd2l0aCBzeW1ib2wg4oKs?=')
    'encoded str with symbol €'

The behavior for malformed or oversized encoded words can be configured using a `Decoder`:

    >>> decoder = rfc2047.Decoder().recover_strategy('skip')

The following modules are relevant for understanding how decoding works:

1. `rfc2047.lib.words`: the three stages of the decoding pipeline
2. `rfc2047.lib.charsets`: the supported charsets and how to register more of them
3. `rfc2047.lib.environment`: configuration by environment variables and logging
4. `rfc2047.shell`: the command line interface
"""
from __future__ import annotations

__version__ = '0.3.0'
__distribution__ = 'rfc2047-decoder'

from rfc2047.decoder import Decoder, decode
from rfc2047.lib.words.model import ErrorKind, RecoverStrategy, RFC2047Error

__all__ = [
    'decode',
    'Decoder',
    'ErrorKind',
    'RecoverStrategy',
    'RFC2047Error',
]

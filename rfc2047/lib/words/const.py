from __future__ import annotations

PREFIX = B'=?'
SUFFIX = B'?='
ASTERISK = B'*'
UNDERSCORE = B'_'
SPACE = B' '

ESPECIALS = B'()<>@,;:"/[]?.='
WHITESPACE = B' \t\r\n'

MAX_LENGTH = 75
"""
The maximum length of an encoded word including its delimiters, see RFC 2047 section 2.
"""

MAX_PAYLOAD = 0x4000
"""
The default upper bound for the size of an encoded word payload. This bound also applies when the
encoded word length restriction is waived and it protects against decoding unbounded data.
"""

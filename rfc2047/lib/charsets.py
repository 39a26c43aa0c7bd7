#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The charset capability of the decoder: a lookup from MIME charset names to functions that convert
bytes to text. Only a fixed selection of charsets is supported, namely ASCII, the Unicode
transformation formats, the ISO-8859 family, the common Windows code pages, and the East Asian
charsets that occur in mail headers. Additional charsets can be made available via
`rfc2047.lib.charsets.register`.
"""
from __future__ import annotations

import codecs
import functools

from typing import Callable

CharsetDecoder = Callable[[bytes], str]


class UnknownCharset(LookupError):
    def __init__(self, name: str):
        super().__init__(F'unknown charset: {name}')
        self.name = name


def normalize(name: str) -> str:
    """
    Normalize a charset name for lookup: Case is ignored, underscores are treated as dashes and
    surrounding whitespace is removed.
    """
    return name.strip().lower().replace('_', '-')


def _codec(codec: str) -> CharsetDecoder:
    return functools.partial(codecs.decode, encoding=codec, errors='strict')


def _unicode(codec: str, *marks: bytes) -> CharsetDecoder:
    """
    Decoder for UTF-16 and UTF-32 without explicit byte order; the text is big endian unless it
    starts with a byte order mark, see RFC 2781.
    """
    def decode(data: bytes) -> str:
        if data.startswith(marks):
            return codecs.decode(data, codec)
        return codecs.decode(data, F'{codec}-be')
    return decode


_CHARSETS: dict[str, CharsetDecoder] = {}


def register(name: str, decoder: CharsetDecoder | str, *aliases: str) -> None:
    """
    Make a charset available to the decoder. The decoder is either a callable that converts bytes
    to a string, raising a `UnicodeDecodeError` for invalid input, or the name of a Python codec.
    """
    if isinstance(decoder, str):
        decoder = _codec(decoder)
    for key in (name, *aliases):
        _CHARSETS[normalize(key)] = decoder


def lookup(name: str) -> CharsetDecoder:
    """
    Return the decoding function for the given charset name or raise `UnknownCharset`.
    """
    try:
        return _CHARSETS[normalize(name)]
    except KeyError:
        raise UnknownCharset(name) from None


def supported() -> list[str]:
    return sorted(_CHARSETS)


register('us-ascii', 'ascii', 'ascii', 'ansi_x3.4-1968', 'iso646-us', 'us')
register('utf-8', 'utf8', 'utf8')
register('utf-16', _unicode('utf-16', codecs.BOM_UTF16_BE, codecs.BOM_UTF16_LE), 'utf16')
register('utf-16be', 'utf-16-be')
register('utf-16le', 'utf-16-le')
register('utf-32', _unicode('utf-32', codecs.BOM_UTF32_BE, codecs.BOM_UTF32_LE), 'utf32')
register('utf-32be', 'utf-32-be')
register('utf-32le', 'utf-32-le')

for _k in (*range(1, 12), *range(13, 17)):
    register(F'iso-8859-{_k}', F'iso8859-{_k}', F'iso8859-{_k}', F'iso_8859-{_k}')

register('iso-8859-1', 'latin-1', 'latin1', 'l1', 'cp819', 'iso8859-1', 'iso_8859-1')
register('iso-8859-15', 'iso8859-15', 'latin-9', 'latin9', 'l9', 'iso8859-15')

for _k in range(1250, 1259):
    register(F'windows-{_k}', F'cp{_k}', F'cp{_k}')

register('koi8-r', 'koi8-r')
register('koi8-u', 'koi8-u')

# East Asian labels are decoded with their superset code pages
register('gb2312', 'gbk', 'euc-cn', 'x-euc-cn')
register('gbk', 'gbk', 'cp936', 'ms936', 'x-gbk')
register('gb18030', 'gb18030')
register('big5', 'big5', 'big5-tw', 'x-big5')
register('big5-hkscs', 'big5hkscs')
register('shift_jis', 'cp932', 'sjis', 'x-sjis', 'ms_kanji', 'windows-31j', 'cp932')
register('euc-jp', 'euc_jp', 'x-euc-jp')
register('iso-2022-jp', 'iso2022_jp', 'csiso2022jp')
register('euc-kr', 'cp949', 'ks_c_5601-1987', 'cp949', 'uhc')
register('iso-2022-kr', 'iso2022_kr')
register('tis-620', 'tis_620')
register('windows-874', 'cp874')

del _k

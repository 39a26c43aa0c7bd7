from rfc2047.lib.words.lexer import tokenize
from rfc2047.lib.words.model import EncodedWord, Encoding, ErrorKind, Literal, RecoverStrategy, RFC2047Error
from rfc2047.lib.words.parser import parse

from .. import TestBase


TOO_LONG = B'=?ISO-8859-1?Q?' + B'a' * 60 + B'?='


def _parse(data: bytes, strategy=RecoverStrategy.Fail, **kwargs):
    return parse(tokenize(data), strategy, **kwargs).segments


class TestParser(TestBase):

    def assertParseError(self, kind, data, strategy=RecoverStrategy.Fail, **kwargs):
        with self.assertRaises(RFC2047Error) as context:
            _parse(data, strategy, **kwargs)
        self.assertEqual(context.exception.kind, kind)
        return context.exception

    def test_single_word(self):
        self.assertEqual(_parse(B'=?ISO-8859-1?Q?a?='), [
            EncodedWord('ISO-8859-1', Encoding.Q, B'a', B'=?ISO-8859-1?Q?a?=', 0)])

    def test_encoding_is_case_insensitive(self):
        word, = _parse(B'=?utf-8?b?c3Ry?=')
        self.assertIs(word.encoding, Encoding.B)
        self.assertIs(word.encoding, Encoding.Base64)
        word, = _parse(B'=?utf-8?q?str?=')
        self.assertIs(word.encoding, Encoding.QuotedPrintable)

    def test_whitespace_between_words_is_folded(self):
        first, space, second = _parse(B'=?ISO-8859-1?Q?a?=  =?ISO-8859-1?Q?b?=')
        self.assertIsInstance(first, EncodedWord)
        self.assertEqual(space, Literal(B'  ', 18, folded=True))
        self.assertIsInstance(second, EncodedWord)

    def test_folding_across_line_breaks(self):
        _, space, _ = _parse(B'=?ISO-8859-1?Q?a?=\r\n    =?ISO-8859-1?Q?b?=')
        self.assertTrue(space.folded)

    def test_whitespace_next_to_literal_is_kept(self):
        segments = _parse(B'x =?ISO-8859-1?Q?a?= b')
        self.assertEqual(segments[0], Literal(B'x ', 0))
        self.assertEqual(segments[2], Literal(B' b', 20))
        self.assertFalse(any(s.folded for s in segments if isinstance(s, Literal)))

    def test_outer_whitespace_is_not_folded(self):
        segments = _parse(B' =?ISO-8859-1?Q?a?= ')
        self.assertEqual(len(segments), 3)
        self.assertFalse(segments[0].folded)
        self.assertFalse(segments[2].folded)

    def test_empty_charset(self):
        error = self.assertParseError(ErrorKind.ParseEncodingEmpty, B'x =??Q?a?=')
        self.assertEqual(error.offset, 2)
        self.assertEqual(error.word, B'=??Q?a?=')
        self.assertEqual(error.stage, 'parser')
        self.assertEqual(_parse(B'x =??Q?a?=', RecoverStrategy.Skip), [Literal(B'x =??Q?a?=', 0)])
        word, = _parse(B'=??Q?a?=', RecoverStrategy.Decode)
        self.assertEqual(word.charset, 'us-ascii')

    def test_empty_payload(self):
        self.assertParseError(ErrorKind.ParseEncodingEmpty, B'=?UTF-8?B??=')
        self.assertEqual(_parse(B'=?UTF-8?B??=', RecoverStrategy.Skip), [Literal(B'=?UTF-8?B??=', 0)])
        word, = _parse(B'=?UTF-8?B??=', RecoverStrategy.Decode)
        self.assertEqual(word.payload, B'')

    def test_unknown_encoding(self):
        self.assertParseError(ErrorKind.ParseEncoding, B'=?UTF-8?X?abc?=')
        self.assertParseError(ErrorKind.ParseEncoding, B'=?UTF-8?QQ?abc?=')
        self.assertParseError(ErrorKind.ParseEncoding, B'=?UTF-8??abc?=')
        for strategy in (RecoverStrategy.Skip, RecoverStrategy.Decode):
            self.assertEqual(_parse(B'=?UTF-8?X?abc?=', strategy), [Literal(B'=?UTF-8?X?abc?=', 0)])

    def test_too_long(self):
        error = self.assertParseError(ErrorKind.ParseEncodedWordTooLong, TOO_LONG)
        self.assertEqual(error.words, [TOO_LONG])
        self.assertIn(TOO_LONG.decode(), str(error))
        self.assertEqual(_parse(TOO_LONG, RecoverStrategy.Skip), [Literal(TOO_LONG, 0)])
        word, = _parse(TOO_LONG, RecoverStrategy.Decode)
        self.assertEqual(word.payload, B'a' * 60)

    def test_maximum_length_is_accepted(self):
        data = B'=?ISO-8859-1?Q?' + B'a' * 58 + B'?='
        self.assertEqual(len(data), 75)
        word, = _parse(data)
        self.assertIsInstance(word, EncodedWord)

    def test_all_too_long_words_are_reported(self):
        other = B'=?utf-8?B?' + B'b' * 68 + B'?='
        error = self.assertParseError(ErrorKind.ParseEncodedWordTooLong, TOO_LONG + B' among us ' + other)
        self.assertEqual(error.words, [TOO_LONG, other])
        self.assertEqual(error.offset, 0)

    def test_too_long_word_takes_precedence(self):
        for data in (
            TOO_LONG + B' =?UTF-8?X?abc?=',
            B'=?UTF-8?X?abc?= ' + TOO_LONG,
            B'=??Q?abc?= ' + TOO_LONG,
        ):
            error = self.assertParseError(ErrorKind.ParseEncodedWordTooLong, data)
            self.assertEqual(error.words, [TOO_LONG])

    def test_demoted_word_merges_with_literals(self):
        segments = _parse(B'x ' + TOO_LONG + B' y', RecoverStrategy.Skip)
        self.assertEqual(segments, [Literal(B'x ' + TOO_LONG + B' y', 0)])

    def test_demoted_word_prevents_folding(self):
        a, middle, c = _parse(B'=?X?Q?a?= =?utf-8?Y?b?= =?X?Q?c?=', RecoverStrategy.Skip)
        self.assertIsInstance(a, EncodedWord)
        self.assertEqual(middle, Literal(B' =?utf-8?Y?b?= ', 9))
        self.assertFalse(middle.folded)
        self.assertIsInstance(c, EncodedWord)

    def test_payload_limit(self):
        data = B'=?UTF-8?Q?abcdef?='
        self.assertEqual(len(_parse(data, max_payload=6)), 1)
        self.assertParseError(ErrorKind.ParseEncodingTooBig, data, max_payload=5)
        self.assertParseError(ErrorKind.ParseEncodingTooBig, data, RecoverStrategy.Decode, max_payload=5)
        self.assertEqual(_parse(data, RecoverStrategy.Skip, max_payload=5), [Literal(data, 0)])

    def test_language_suffix_is_dropped(self):
        word, = _parse(B'=?UTF-8*en?Q?a?=')
        self.assertEqual(word.charset, 'UTF-8')
        self.assertParseError(ErrorKind.ParseEncodingEmpty, B'=?*en?Q?a?=')

from rfc2047.lib.words.lexer import as_bytes, tokenize
from rfc2047.lib.words.model import Candidate, ErrorKind, RFC2047Error, Text

from .. import TestBase


class TestLexer(TestBase):

    def test_clear_text(self):
        self.assertEqual(tokenize(B'I use Arch by the way'), [Text(B'I use Arch by the way', 0)])

    def test_empty_input(self):
        self.assertEqual(tokenize(B''), [])

    def test_encoded_word(self):
        self.assertEqual(tokenize(B'=?ISO-8859-1?Q?Yeet?='), [
            Candidate(B'ISO-8859-1', B'Q', B'Yeet', B'=?ISO-8859-1?Q?Yeet?=', 0)])

    def test_encoded_word_followed_by_text(self):
        self.assertEqual(tokenize(B'=?ISO-8859-1?Q?a?= b'), [
            Candidate(B'ISO-8859-1', B'Q', B'a', B'=?ISO-8859-1?Q?a?=', 0),
            Text(B' b', 18),
        ])

    def test_whitespace_is_preserved(self):
        tokens = tokenize(B'=?ISO-8859-1?Q?a?= \r\n\t =?ISO-8859-1?Q?b?=')
        self.assertEqual(len(tokens), 3)
        self.assertEqual(tokens[1], Text(B' \r\n\t ', 18))
        self.assertEqual(tokens[2].payload, B'b')

    def test_adjacent_encoded_words(self):
        tokens = tokenize(B'=?UTF-8?Q?str?==?UTF-8?Q?str?=')
        self.assertEqual([type(t) for t in tokens], [Candidate, Candidate])
        self.assertEqual([t.offset for t in tokens], [0, 15])

    def test_unclosed_marker_is_text(self):
        for data in (
            B'=?UTF-8?Q?abc',
            B'=?UTF-8?Q',
            B'=?',
            B'prefix =?UTF-8?Q?a b?= suffix',
        ):
            self.assertEqual(tokenize(data), [Text(data, 0)], msg=data)

    def test_unclosed_marker_before_encoded_word(self):
        tokens = tokenize(B'=?=?UTF-8?Q?a?=')
        self.assertEqual(tokens[0], Text(B'=?', 0))
        self.assertEqual(tokens[1].charset, B'UTF-8')
        self.assertEqual(tokens[1].offset, 2)

    def test_whitespace_in_payload_is_text(self):
        for data in (B'=?UTF-8?Q?a b?=', B'=?UTF-8?Q?a\tb?=', B'=?UTF-8?Q?a\r\nb?='):
            self.assertEqual(tokenize(data), [Text(data, 0)])

    def test_empty_fields_are_recognized(self):
        self.assertEqual(tokenize(B'=????='), [Candidate(B'', B'', B'', B'=????=', 0)])

    def test_encoding_field_is_not_interpreted(self):
        token, = tokenize(B'=?UTF-8?X?abc?=')
        self.assertEqual(token.encoding, B'X')

    def test_candidate_length(self):
        token, = tokenize(B'=?ISO-8859-1?Q?' + B'a' * 60 + B'?=')
        self.assertEqual(len(token), 77)

    def test_tokens_cover_input(self):
        data = B'Re: =?UTF-8?Q?a?= and =?utf-8?b?Yg==?=, =? not a word ?= =?UTF-8?Q?c?=.'
        tokens = tokenize(data)
        self.assertEqual(B''.join(t.raw if isinstance(t, Candidate) else t.data for t in tokens), data)
        self.assertEqual(sum(isinstance(t, Candidate) for t in tokens), 3)

    def test_non_ascii_bytes_in_literal(self):
        data = B'\xC3\xA4 =?UTF-8?Q?a?='
        tokens = tokenize(data)
        self.assertEqual(tokens[0], Text(B'\xC3\xA4 ', 0))

    def test_string_and_buffer_input(self):
        expected = tokenize(B'=?UTF-8?Q?=E2=82=AC?= x')
        self.assertEqual(tokenize('=?UTF-8?Q?=E2=82=AC?= x'), expected)
        self.assertEqual(tokenize(bytearray(B'=?UTF-8?Q?=E2=82=AC?= x')), expected)
        self.assertEqual(tokenize(memoryview(B'=?UTF-8?Q?=E2=82=AC?= x')), expected)

    def test_unsegmentable_input(self):
        for data in (42, None, 'surrogate \uDC80 escape'):
            with self.assertRaises(RFC2047Error) as context:
                tokenize(data)
            self.assertEqual(context.exception.kind, ErrorKind.ParseBytes)
            self.assertEqual(context.exception.stage, 'lexer')

    def test_as_bytes(self):
        self.assertEqual(as_bytes('ä'), B'\xC3\xA4')
        self.assertIsInstance(as_bytes(bytearray(3)), bytes)

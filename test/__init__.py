import logging
import random
import rfc2047
import string
import unittest


__all__ = ['rfc2047', 'TestBase']


class TestBase(unittest.TestCase):

    def generate_random_text(self, size, alphabet=string.ascii_letters + string.digits + ' '):
        return ''.join(alphabet[random.randrange(0, len(alphabet))] for _ in range(size)).encode('UTF8')

    def setUp(self):
        random.seed(0xBAADF00D)  # guarantee deterministic 'random' buffers
        logging.disable(logging.CRITICAL)

    def assertDecodeError(self, kind, data, strategy=rfc2047.RecoverStrategy.Fail):
        decoder = rfc2047.Decoder(strategy)
        with self.assertRaises(rfc2047.RFC2047Error) as context:
            decoder.decode(data)
        self.assertEqual(context.exception.kind, kind)
        return context.exception

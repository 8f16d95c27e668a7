import logging
import random
import string
import unittest

import compdetect


__all__ = ['compdetect', 'TestBase', 'KADATH1']


class TestBase(unittest.TestCase):

    def generate_random_buffer(self, size):
        return bytes(random.randrange(0, 0x100) for _ in range(size))

    def generate_random_text(self, size):
        return ''.join(string.printable[
            random.randrange(0, len(string.printable))] for _ in range(size)).encode('UTF8')

    def setUp(self):
        random.seed(0xBAADF00D)  # guarantee deterministic 'random' buffers
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    def assertContains(self, container, member, msg=None):
        self.assertIn(member, container, msg)


KADATH1 = (
    "Three times Randolph Carter dreamed of the marvellous city, and three times was he snatched "
    "away while still he paused on the high terrace above it. All golden and lovely it blazed in "
    "the sunset, with walls, temples, colonnades, and arched bridges of veined marble, "
    "silver-basined fountains of prismatic spray in broad squares and perfumed gardens, and wide "
    "streets marching between delicate trees and blossom-laden urns and ivory statues in gleaming "
    "rows; while on steep northward slopes climbed tiers of red roofs and old peaked gables "
    "harbouring little lanes of grassy cobbles."
)

#!/usr/bin/env python3

"""yuyvtools-generate_unittest.py: yuyvtools-generate unittest.

# runme
# $ ./yuyvtools-generate_unittest.py
"""

import importlib
import io
import numpy as np
import sys

yuyvtools_generate = importlib.import_module("yuyvtools-generate")
yuyvtools_unittest = importlib.import_module("yuyvtools-unittest")


class MainTest(yuyvtools_unittest.TestCase):
    def testGenerateSynthetic(self):
        outbgr = yuyvtools_generate.generate_synthetic_bgr(40, 30, radius=5, seed=42)
        self.assertEqual((30, 40, 3), outbgr.shape)
        self.assertEqual(np.uint8, outbgr.dtype)
        # the marker is red (BGR)
        np.testing.assert_array_equal(outbgr[15, 20], yuyvtools_generate.MARKER_COLOR)
        # same seed, same image
        outbgr2 = yuyvtools_generate.generate_synthetic_bgr(40, 30, radius=5, seed=42)
        np.testing.assert_array_equal(outbgr, outbgr2)

    def testResizeIfSmall(self):
        inbgr = np.zeros((10, 20, 3), dtype=np.uint8)
        logfd = io.StringIO()
        outbgr = yuyvtools_generate.resize_if_small(inbgr, 8, 16, logfd, 1)
        self.assertIs(inbgr, outbgr)
        outbgr = yuyvtools_generate.resize_if_small(inbgr, 12, 16, logfd, 1)
        self.assertEqual((16, 16, 3), outbgr.shape)
        self.assertIn("resizing 20x10 -> 16x16", logfd.getvalue())


if __name__ == "__main__":
    yuyvtools_unittest.main(sys.argv)

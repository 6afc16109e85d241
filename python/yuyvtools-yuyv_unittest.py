#!/usr/bin/env python3

"""yuyvtools-yuyv_unittest.py: yuyvtools-yuyv unittest.

# runme
# $ ./yuyvtools-yuyv_unittest.py
"""

import importlib
import io
import numpy as np
import sys

yuyvtools_common = importlib.import_module("yuyvtools-common")
yuyvtools_yuyv = importlib.import_module("yuyvtools-yuyv")
yuyvtools_unittest = importlib.import_module("yuyvtools-unittest")


# pixels are (B, G, R)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (128, 128, 128)
RED = (0, 0, 255)
GREEN = (0, 255, 0)
BLUE = (255, 0, 0)


bgrToYuyvTestCases = [
    {
        "name": "red-green",
        "debug": 0,
        "inbgr": np.array([[RED, GREEN]], dtype=np.uint8),
        # Y(red)=82 U=(90+54)//2 Y(green)=144 V=(240+34)//2
        "output": b"\x52\x48\x90\x89",
        "width": 2,
        "height": 1,
    },
    {
        "name": "mid-gray",
        "debug": 0,
        "inbgr": np.array([[GRAY, GRAY], [GRAY, GRAY]], dtype=np.uint8),
        "output": b"\x7e\x80\x7e\x80\x7e\x80\x7e\x80",
        "width": 2,
        "height": 2,
    },
    {
        "name": "black-white",
        "debug": 0,
        "inbgr": np.array([[BLACK, WHITE]], dtype=np.uint8),
        "output": b"\x10\x80\xeb\x80",
        "width": 2,
        "height": 1,
    },
    {
        "name": "blue-blue",
        "debug": 0,
        "inbgr": np.array([[BLUE, BLUE]], dtype=np.uint8),
        "output": b"\x29\xf0\x29\x6e",
        "width": 2,
        "height": 1,
    },
    {
        "name": "two-pairs",
        "debug": 0,
        "inbgr": np.array([[GRAY, GRAY, RED, GREEN]], dtype=np.uint8),
        "output": b"\x7e\x80\x7e\x80\x52\x48\x90\x89",
        "width": 4,
        "height": 1,
    },
    {
        "name": "odd-width",
        "debug": 0,
        "inbgr": np.array([[RED, GREEN, BLUE]], dtype=np.uint8),
        "output": b"\x52\x48\x90\x89",
        "width": 2,
        "height": 1,
    },
    {
        "name": "odd-width-debug",
        "debug": 1,
        "inbgr": np.array([[BLACK, WHITE, BLUE], [WHITE, BLACK, RED]], dtype=np.uint8),
        "output": b"\x10\x80\xeb\x80\xeb\x80\x10\x80",
        "width": 2,
        "height": 2,
    },
    {
        "name": "width-1",
        "debug": 0,
        "inbgr": np.array([[RED], [GREEN]], dtype=np.uint8),
        "output": b"",
        "width": 0,
        "height": 2,
    },
    {
        "name": "empty",
        "debug": 0,
        "inbgr": np.zeros((0, 4, 3), dtype=np.uint8),
        "output": b"",
        "width": 4,
        "height": 0,
    },
]


pixelFormulaTestCases = [
    # (r, g, b), (y, u, v)
    {"name": "black", "rgb": (0, 0, 0), "yuv": (16, 128, 128)},
    {"name": "white", "rgb": (255, 255, 255), "yuv": (235, 128, 128)},
    {"name": "gray", "rgb": (128, 128, 128), "yuv": (126, 128, 128)},
    {"name": "red", "rgb": (255, 0, 0), "yuv": (82, 90, 240)},
    {"name": "green", "rgb": (0, 255, 0), "yuv": (144, 54, 34)},
    {"name": "blue", "rgb": (0, 0, 255), "yuv": (41, 240, 110)},
]


class MainTest(yuyvtools_unittest.TestCase):
    def testBgrToYuyv(self):
        """bgr_to_yuyv test."""
        function_name = "testBgrToYuyv"

        for test_case in self.getTestCases(function_name, bgrToYuyvTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            logfd = io.StringIO()
            buffer, width, height = yuyvtools_yuyv.bgr_to_yuyv(
                test_case["inbgr"], logfd=logfd, debug=test_case["debug"]
            )
            self.assertEqual(
                test_case["width"], width, f"error on width {test_case['name']}"
            )
            self.assertEqual(
                test_case["height"], height, f"error on height {test_case['name']}"
            )
            self.assertEqual(len(buffer), width * height * 2)
            self.compareBuffer(
                buffer.tobytes(), test_case["output"], test_case["name"]
            )
            self.assertFalse(buffer.flags.writeable)

    def testPixelFormulas(self):
        """rgb_to_y/rgb_to_u/rgb_to_v test."""
        function_name = "testPixelFormulas"

        for test_case in self.getTestCases(function_name, pixelFormulaTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            r, g, b = test_case["rgb"]
            yuv = (
                yuyvtools_yuyv.rgb_to_y(r, g, b),
                yuyvtools_yuyv.rgb_to_u(r, g, b),
                yuyvtools_yuyv.rgb_to_v(r, g, b),
            )
            self.assertEqual(
                test_case["yuv"], yuv, f"error on {test_case['name']} case"
            )

    def testTruncateBeforeOffset(self):
        # red: the U sum shifts (floor) to -38, 8 bits of that are 218,
        # and 218 + 128 wraps to 90
        self.assertEqual(-38, (-38 * 255 + 128) >> 8)
        self.assertEqual(218, yuyvtools_yuyv.truncate_u8(-38))
        self.assertEqual(90, yuyvtools_yuyv.rgb_to_u(255, 0, 0))
        # the chroma average does not round up
        self.assertEqual(b"\x52\x48\x90\x89", yuyvtools_yuyv.pack_pixel_pair(RED, GREEN))

    def testVectorizedMatchesPixelPairs(self):
        rng = np.random.default_rng(12345)
        inbgr = rng.integers(0, 256, size=(6, 10, 3), dtype=np.uint8)
        buffer, width, height = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
        expected = b"".join(
            yuyvtools_yuyv.pack_pixel_pair(inbgr[y, x], inbgr[y, x + 1])
            for y in range(height)
            for x in range(0, width, 2)
        )
        self.compareBuffer(buffer.tobytes(), expected, "random")

    def testBufferLength(self):
        rng = np.random.default_rng(1)
        for width, height in ((2, 2), (4, 2), (2, 6), (16, 9), (640, 3)):
            inbgr = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
            buffer, out_w, out_h = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
            self.assertEqual((width, height), (out_w, out_h))
            self.assertEqual(width * height * 2, len(buffer))

    def testOddWidthDropsLastColumn(self):
        rng = np.random.default_rng(2)
        for width in (3, 5, 17):
            inbgr = rng.integers(0, 256, size=(4, width, 3), dtype=np.uint8)
            buffer, out_w, out_h = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
            expected, exp_w, exp_h = yuyvtools_yuyv.bgr_to_yuyv(inbgr[:, : width - 1])
            self.assertEqual(width - 1, out_w)
            self.assertEqual((exp_w, exp_h), (out_w, out_h))
            np.testing.assert_array_equal(buffer, expected)

    def testDeterministic(self):
        rng = np.random.default_rng(3)
        inbgr = rng.integers(0, 256, size=(8, 8, 3), dtype=np.uint8)
        buffer1, _, _ = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
        buffer2, _, _ = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
        self.assertEqual(buffer1.tobytes(), buffer2.tobytes())

    def testAchromatic(self):
        for level in (0, 64, 128, 200, 255):
            inbgr = np.full((2, 4, 3), level, dtype=np.uint8)
            buffer, _, _ = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
            pairs = buffer.reshape(-1, 4)
            np.testing.assert_array_equal(pairs[:, 0], pairs[:, 2])
            np.testing.assert_array_equal(pairs[:, 1], 128)
            np.testing.assert_array_equal(pairs[:, 3], 128)

    def testUnpackYuyv(self):
        inbgr = np.array([[RED, GREEN, GRAY, GRAY]], dtype=np.uint8)
        buffer, width, height = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
        ya, ua, va = yuyvtools_yuyv.unpack_yuyv(buffer.reshape(height, width, 2))
        np.testing.assert_array_equal(ya, [[82, 144, 126, 126]])
        np.testing.assert_array_equal(ua, [[72, 72, 128, 128]])
        np.testing.assert_array_equal(va, [[137, 137, 128, 128]])

    def testYuyvToGray(self):
        rng = np.random.default_rng(4)
        inbgr = rng.integers(0, 256, size=(4, 6, 3), dtype=np.uint8)
        buffer, width, height = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
        inarr = buffer.reshape(height, width, 2)
        outgray, status = yuyvtools_yuyv.convert_packed(
            inarr, yuyvtools_common.ProcColor.gray, logfd=io.StringIO()
        )
        self.assertEqual({}, status)
        np.testing.assert_array_equal(outgray, inarr[:, :, 0])

    def testYuyvToBgr(self):
        inbgr = np.full((2, 4, 3), 128, dtype=np.uint8)
        buffer, width, height = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
        outbgr, status = yuyvtools_yuyv.convert_packed(
            buffer.reshape(height, width, 2),
            yuyvtools_common.ProcColor.bgr,
            logfd=io.StringIO(),
        )
        self.assertEqual({}, status)
        self.assertEqual((height, width, 3), outbgr.shape)
        np.testing.assert_allclose(outbgr, inbgr, atol=2)

    def testConvertPackedReportsErrors(self):
        # a 3-channel input is not a packed YUY2 image
        logfd = io.StringIO()
        outimg, status = yuyvtools_yuyv.convert_packed(
            np.zeros((2, 4, 3), dtype=np.uint8),
            yuyvtools_common.ProcColor.bgr,
            logfd=logfd,
        )
        self.assertIsNone(outimg)
        self.assertIn("error", status)
        self.assertIn("error: yuyv_to_bgr", logfd.getvalue())


if __name__ == "__main__":
    yuyvtools_unittest.main(sys.argv)

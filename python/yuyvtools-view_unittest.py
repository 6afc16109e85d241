#!/usr/bin/env python3

"""yuyvtools-view_unittest.py: yuyvtools-view unittest.

# runme
# $ ./yuyvtools-view_unittest.py
"""

import importlib
import io
import numpy as np
import sys

yuyvtools_common = importlib.import_module("yuyvtools-common")
yuyvtools_view = importlib.import_module("yuyvtools-view")
yuyvtools_yuyv = importlib.import_module("yuyvtools-yuyv")
yuyvtools_unittest = importlib.import_module("yuyvtools-unittest")


def get_random_yuyv(width, height, seed):
    rng = np.random.default_rng(seed)
    inbgr = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return yuyvtools_yuyv.bgr_to_yuyv(inbgr)


cropTestCases = [
    # 16 bytes per row (8x4 pixels, 2 bytes each)
    {
        "name": "full",
        "roi": (0, 0, 8, 4),
        "offset": 0,
        "shape": (4, 8, 2),
    },
    {
        "name": "even",
        "roi": (2, 1, 4, 2),
        "offset": 1 * 16 + 2 * 2,
        "shape": (2, 4, 2),
    },
    {
        "name": "odd",
        "roi": (3, 1, 3, 3),
        "offset": 1 * 16 + 3 * 2,
        "shape": (3, 3, 2),
    },
    {
        "name": "last-pixel",
        "roi": (7, 3, 1, 1),
        "offset": 3 * 16 + 7 * 2,
        "shape": (1, 1, 2),
    },
]


badCropTestCases = [
    {"name": "negative-x", "roi": (-1, 0, 2, 2)},
    {"name": "negative-y", "roi": (0, -1, 2, 2)},
    {"name": "too-wide", "roi": (7, 0, 2, 1)},
    {"name": "too-tall", "roi": (0, 3, 2, 2)},
    {"name": "negative-width", "roi": (0, 0, -2, 2)},
]


class MainTest(yuyvtools_unittest.TestCase):
    def testCrop(self):
        """PackedView.crop test."""
        function_name = "testCrop"
        buffer, width, height = get_random_yuyv(8, 4, 10)
        src = yuyvtools_view.PackedView(buffer, height, width)
        packed = buffer.reshape(height, width, 2)

        for test_case in self.getTestCases(function_name, cropTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            x, y, w, h = test_case["roi"]
            crop = src.crop(x, y, w, h)
            self.assertEqual(test_case["offset"], crop.offset)
            self.assertEqual(src.stride, crop.stride)
            arr = crop.to_array()
            self.assertEqual(test_case["shape"], arr.shape)
            np.testing.assert_array_equal(
                arr,
                packed[y : y + h, x : x + w],
                err_msg=f"error on {test_case['name']} case",
            )

    def testBadCrop(self):
        """PackedView.crop out-of-bounds test."""
        function_name = "testBadCrop"
        buffer, width, height = get_random_yuyv(8, 4, 11)
        src = yuyvtools_view.PackedView(buffer, height, width)

        for test_case in self.getTestCases(function_name, badCropTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            with self.assertRaises(yuyvtools_common.ViewException):
                src.crop(*test_case["roi"])

    def testBufferTooSmall(self):
        with self.assertRaises(yuyvtools_common.ViewException):
            yuyvtools_view.PackedView(np.zeros(15, dtype=np.uint8), 2, 4)
        # exact fit is fine
        view = yuyvtools_view.PackedView(np.zeros(16, dtype=np.uint8), 2, 4)
        self.assertEqual(8, view.stride)

    def testZeroCopy(self):
        buffer = np.arange(32, dtype=np.uint8)
        view = yuyvtools_view.PackedView(buffer, 2, 8).crop(2, 1, 4, 1)
        arr = view.to_array()
        self.assertFalse(arr.flags.writeable)
        with self.assertRaises(ValueError):
            arr[0, 0, 0] = 0
        # a view sees later buffer changes (it shares the memory)
        buffer[16 + 4] = 200
        self.assertEqual(200, arr[0, 0, 0])

    def testClone(self):
        buffer = np.arange(32, dtype=np.uint8)
        view = yuyvtools_view.PackedView(buffer, 2, 8).crop(1, 0, 3, 2)
        outarr = view.clone()
        self.assertTrue(outarr.flags.writeable)
        self.assertTrue(outarr.flags.c_contiguous)
        buffer[2] = 100
        self.assertEqual(2, outarr[0, 0, 0])
        np.testing.assert_array_equal(outarr[1, 0], [18, 19])

    def testOddCropSwapsChroma(self):
        buffer, width, height = get_random_yuyv(12, 4, 12)
        src = yuyvtools_view.PackedView(buffer, height, width)
        ya, ua, va = yuyvtools_yuyv.unpack_yuyv(src.to_array())
        x, w = 3, 6
        even_arr = src.crop(x - 1, 0, w, height).to_array()
        odd_arr = src.crop(x, 0, w, height).to_array()
        # luma is right on every pixel
        np.testing.assert_array_equal(odd_arr[:, :, 0], ya[:, x : x + w])
        # an even crop carries U on even elements, V on odd ones
        np.testing.assert_array_equal(even_arr[:, 0::2, 1], ua[:, x - 1 : x - 1 + w : 2])
        np.testing.assert_array_equal(even_arr[:, 1::2, 1], va[:, x - 1 : x - 1 + w : 2])
        # an odd crop carries V where U is expected, and U where V is expected
        np.testing.assert_array_equal(odd_arr[:, 0::2, 1], va[:, x : x + w : 2])
        np.testing.assert_array_equal(odd_arr[:, 1::2, 1], ua[:, x + 1 : x + 1 + w : 2])
        # decoded as gray, the odd crop is still correct
        outgray, status = yuyvtools_yuyv.convert_packed(
            odd_arr, yuyvtools_common.ProcColor.gray, logfd=io.StringIO()
        )
        self.assertEqual({}, status)
        np.testing.assert_array_equal(outgray, ya[:, x : x + w])

    def testOddCropColorDecode(self):
        # one color per row: every pixel pair in a row packs the same bytes
        colors = ((0, 0, 255), (0, 255, 0), (255, 0, 0), (10, 200, 60))
        inbgr = np.zeros((len(colors), 12, 3), dtype=np.uint8)
        for row, color in enumerate(colors):
            inbgr[row, :] = color
        buffer, width, height = yuyvtools_yuyv.bgr_to_yuyv(inbgr)
        src = yuyvtools_view.PackedView(buffer, height, width)
        x, w = 3, 6
        even_arr = src.crop(x - 1, 0, w, height).to_array()
        odd_arr = src.crop(x, 0, w, height).to_array()
        # the odd crop is the even crop with its U and V bytes exchanged
        swapped = np.array(even_arr)
        swapped[:, 0::2, 1] = even_arr[:, 1::2, 1]
        swapped[:, 1::2, 1] = even_arr[:, 0::2, 1]
        np.testing.assert_array_equal(odd_arr, swapped)
        odd_bgr = yuyvtools_yuyv.yuyv_to_bgr(odd_arr)
        even_bgr = yuyvtools_yuyv.yuyv_to_bgr(even_arr)
        self.assertEqual((height, w, 3), odd_bgr.shape)
        np.testing.assert_array_equal(odd_bgr, yuyvtools_yuyv.yuyv_to_bgr(swapped))
        # luma-only content is unaffected, colors are not
        np.testing.assert_array_equal(
            yuyvtools_yuyv.yuyv_to_gray(odd_arr), yuyvtools_yuyv.yuyv_to_gray(even_arr)
        )
        for row in range(height):
            self.assertFalse(
                np.array_equal(odd_bgr[row], even_bgr[row]),
                f"error: odd crop row {row} decodes to the right colors",
            )

    def testWrongFormatRows(self):
        buffer, width, height = get_random_yuyv(8, 4, 13)
        wrong = yuyvtools_view.PackedView(buffer, height, width, channels=1)
        self.assertEqual(width, wrong.stride)
        packed_rows = buffer.reshape(height, width * 2)
        wrong_arr = wrong.to_array()
        self.assertEqual((height, width), wrong_arr.shape)
        # each misread row is half a packed row
        for row in range(height):
            half = (row % 2) * width
            np.testing.assert_array_equal(
                wrong_arr[row], packed_rows[row // 2, half : half + width]
            )
        # only the first half of the buffer is visible
        self.assertEqual(wrong.byte_offset(width - 1, height - 1), len(buffer) // 2 - 1)

    def testWrongFormatOffset(self):
        width, height = 2500, 2500
        buffer = np.zeros(width * height * 2, dtype=np.uint8)
        wrong = yuyvtools_view.PackedView(buffer, height, width, channels=1)
        src = yuyvtools_view.PackedView(buffer, height, width, channels=2)
        wrong_crop = wrong.crop(1001, 1001, 1001, 1001)
        src_crop = src.crop(1001, 1001, 1001, 1001)
        self.assertEqual(1001 * width + 1001, wrong_crop.offset)
        self.assertEqual(1001 * 2 * width + 2002, src_crop.offset)
        self.assertNotEqual(wrong_crop.offset, src_crop.offset)

    def testWrongFormatIsNotARegion(self):
        buffer, width, height = get_random_yuyv(16, 8, 14)
        src = yuyvtools_view.PackedView(buffer, height, width)
        wrong = yuyvtools_view.PackedView(buffer, height, width, channels=1)
        ya = src.to_array()[:, :, 0]
        wrong_arr = wrong.crop(1, 1, 5, 5).clone()
        # the misread crop does not match the luma of any 5x5 region
        for y in range(height - 5 + 1):
            for x in range(width - 5 + 1):
                self.assertFalse(
                    np.array_equal(wrong_arr, ya[y : y + 5, x : x + 5]),
                    f"error: misread crop matches luma region at {x},{y}",
                )

    def testImageInfo(self):
        buffer, width, height = get_random_yuyv(8, 2, 15)
        src = yuyvtools_view.PackedView(buffer, height, width)
        iinfo = src.get_image_info()
        self.assertEqual((2, 8, 16, "yuyv422"), (iinfo.height, iinfo.width, iinfo.stride, iinfo.pix_fmt))
        wrong = yuyvtools_view.PackedView(buffer, height, width, channels=1)
        self.assertEqual("gray", wrong.get_image_info().pix_fmt)


if __name__ == "__main__":
    yuyvtools_unittest.main(sys.argv)

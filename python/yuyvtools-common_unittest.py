#!/usr/bin/env python3

"""yuyvtools-common_unittest.py: yuyvtools-common unittest.

# runme
# $ ./yuyvtools-common_unittest.py
"""

import argparse
import importlib
import sys

yuyvtools_common = importlib.import_module("yuyvtools-common")
yuyvtools_unittest = importlib.import_module("yuyvtools-unittest")


componentLocationsTestCases = [
    # Y00 U00 Y01 V00  Y02 U02 Y03 V02
    {"name": "first", "i": 0, "j": 0, "w": 4, "locations": (0, 1, 3)},
    {"name": "second", "i": 1, "j": 0, "w": 4, "locations": (2, 1, 3)},
    {"name": "third", "i": 2, "j": 0, "w": 4, "locations": (4, 5, 7)},
    {"name": "second-row", "i": 1, "j": 1, "w": 4, "locations": (10, 9, 11)},
]


roiParseTestCases = [
    {
        "name": "string",
        "val": "2001,2001,1001,1001",
        "roi": (2001, 2001, 1001, 1001),
        "even_width": (2001, 2001, 1000, 1001),
    },
    {
        "name": "tuple",
        "val": (2000, 2000, 1000, 1000),
        "roi": (2000, 2000, 1000, 1000),
        "even_width": (2000, 2000, 1000, 1000),
    },
    {
        "name": "spaces",
        "val": "0, 2, 4, 6",
        "roi": (0, 2, 4, 6),
        "even_width": (0, 2, 4, 6),
    },
    {
        "name": "odd-width",
        "val": "2,0,3,2",
        "roi": (2, 0, 3, 2),
        "even_width": (2, 0, 2, 2),
    },
]


class MainTest(yuyvtools_unittest.TestCase):
    def testComponentLocations(self):
        """get_component_locations test."""
        function_name = "testComponentLocations"

        for test_case in self.getTestCases(function_name, componentLocationsTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            locations = yuyvtools_common.get_component_locations(
                test_case["i"], test_case["j"], test_case["w"]
            )
            self.assertEqual(
                test_case["locations"], locations, f"error on {test_case['name']} case"
            )

    def testRoiParse(self):
        """Roi.parse test."""
        function_name = "testRoiParse"

        for test_case in self.getTestCases(function_name, roiParseTestCases):
            print(f"...running \"{function_name}.{test_case['name']}\"")
            roi = yuyvtools_common.Roi.parse(test_case["val"])
            self.assertEqual(test_case["roi"], roi.as_tuple())
            self.assertEqual(
                test_case["even_width"], roi.with_even_width().as_tuple()
            )

    def testRoiParseInvalid(self):
        with self.assertRaises(AssertionError):
            yuyvtools_common.Roi.parse("1,2,3")
        with self.assertRaises(AssertionError):
            yuyvtools_common.Roi.parse("1,2,-3,4")
        with self.assertRaises(ValueError):
            yuyvtools_common.Roi.parse("a,b,c,d")
        for val in ("1,2,3", "a,b,c,d", "1,2,-3,4"):
            with self.assertRaises(argparse.ArgumentTypeError):
                yuyvtools_common.Roi.parse_option(val)
        self.assertEqual(
            yuyvtools_common.Roi(1, 2, 3, 4),
            yuyvtools_common.Roi.parse_option("1,2,3,4"),
        )

    def testImageInfo(self):
        iinfo = yuyvtools_common.ImageInfo(4, 6)
        self.assertEqual(12, iinfo.stride)
        iinfo = yuyvtools_common.ImageInfo(4, 6, pix_fmt="gray")
        self.assertEqual(6, iinfo.stride)
        self.assertEqual(
            "height: 4 width: 6 stride: 6 pix_fmt: gray", str(iinfo)
        )
        with self.assertRaises(AssertionError):
            yuyvtools_common.get_length_factor("nv12")

    def testConfig(self):
        parser = argparse.ArgumentParser()
        yuyvtools_common.Config.set_parser_options(parser)
        options = parser.parse_args(["--min-size", "10", "--seed", "3"])
        config_dict = yuyvtools_common.Config.Create(options)
        self.assertEqual(10, config_dict.get("min_size"))
        self.assertEqual(3, config_dict.get("seed"))
        self.assertEqual(2500, config_dict.get("resize_size"))
        self.assertEqual(3000, config_dict.get("synthetic_width"))
        # roi options are parsed (defaults included)
        self.assertEqual(
            yuyvtools_common.Roi(2001, 2001, 1001, 1001), config_dict.get("roi_odd")
        )
        # unset keys fall back to the defaults
        config_dict = yuyvtools_common.Config()
        self.assertEqual("2001,2001,1001,1001", config_dict.get("roi_odd"))
        config_dict.set("roi_odd", "1,1,1,1")
        self.assertEqual("1,1,1,1", config_dict.get("roi_odd"))


if __name__ == "__main__":
    yuyvtools_unittest.main(sys.argv)

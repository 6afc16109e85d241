#!/usr/bin/env python3

"""yuyvtools-crop_unittest.py: yuyvtools-crop unittest.

# runme
# $ ./yuyvtools-crop_unittest.py
"""

import contextlib
import cv2
import importlib
import io
import numpy as np
import os
import sys
import tempfile

yuyvtools_common = importlib.import_module("yuyvtools-common")
yuyvtools_crop = importlib.import_module("yuyvtools-crop")
yuyvtools_generate = importlib.import_module("yuyvtools-generate")
yuyvtools_yuyv = importlib.import_module("yuyvtools-yuyv")
yuyvtools_unittest = importlib.import_module("yuyvtools-unittest")


def get_config(**kwargs):
    config_dict = yuyvtools_common.Config()
    values = {
        "min_size": 0,
        "synthetic_width": 64,
        "synthetic_height": 48,
        "seed": 7,
        "roi_even": "10,10,20,20",
        "roi_odd": "11,11,21,21",
    }
    values.update(kwargs)
    for key, val in values.items():
        config_dict.set(key, val)
    return config_dict


class MainTest(yuyvtools_unittest.TestCase):
    def testRunExperiment(self):
        outdir = os.path.join(tempfile.mkdtemp(prefix="yuyvtools-crop_unittest."), "output")
        logfd = io.StringIO()
        results = yuyvtools_crop.run_experiment(
            "/nonexistent/image.jpg", outdir, get_config(), logfd=logfd, debug=2
        )
        self.assertTrue(os.path.isdir(outdir))
        self.assertEqual(set(yuyvtools_crop.OUTPUT_NAMES.keys()), set(results.keys()))
        self.assertIn("error: cannot read image /nonexistent/image.jpg", logfd.getvalue())
        for key in yuyvtools_crop.OUTPUT_NAMES.keys():
            status = results[key]
            self.assertTrue(status["written"], f"error on {key}: {status}")
            self.assertTrue(os.path.isfile(status["path"]))
            self.assertEqual(
                os.path.join(outdir, yuyvtools_crop.OUTPUT_NAMES[key]), status["path"]
            )
        # color decoding of the odd crop drops its last (unpaired) column
        status = results["odd_color"]
        self.assertNotIn("error", status)
        self.assertTrue(status["width_adjusted"])
        self.assertIn("info: color decoding needs an even width", logfd.getvalue())
        outbgr = cv2.imread(status["path"], cv2.IMREAD_COLOR)
        self.assertEqual((21, 20, 3), outbgr.shape)
        self.assertNotIn("width_adjusted", results["even_color"])
        # grayscale crops keep the crop size
        outgray = cv2.imread(results["even_gray"]["path"], cv2.IMREAD_UNCHANGED)
        self.assertEqual((20, 20), outgray.shape[:2])
        outgray = cv2.imread(results["odd_gray"]["path"], cv2.IMREAD_UNCHANGED)
        self.assertEqual((21, 21), outgray.shape[:2])
        # misread crop offset
        status = results["wrong_format"]
        self.assertEqual(11 * 64 + 11, status["offset"])
        self.assertEqual(11 * 2 * 64 + 22, status["expected_offset"])

    def testDryRun(self):
        outdir = os.path.join(tempfile.mkdtemp(prefix="yuyvtools-crop_unittest."), "output")
        results = yuyvtools_crop.run_experiment(
            None, outdir, get_config(), dry_run=True, logfd=io.StringIO()
        )
        self.assertFalse(os.path.exists(outdir))
        for status in results.values():
            self.assertFalse(status["written"])

    def testRoiOutsideImage(self):
        outdir = tempfile.mkdtemp(prefix="yuyvtools-crop_unittest.")
        logfd = io.StringIO()
        results = yuyvtools_crop.run_experiment(
            None,
            outdir,
            get_config(roi_odd="61,41,21,21"),
            logfd=logfd,
        )
        self.assertTrue(results["even_gray"]["written"])
        for key in ("odd_gray", "odd_color", "wrong_format"):
            self.assertFalse(results[key]["written"])
            self.assertIn("error", results[key])

    def testReadInputAndResize(self):
        tmpdir = tempfile.mkdtemp(prefix="yuyvtools-crop_unittest.")
        infile = os.path.join(tmpdir, "input.png")
        inbgr = yuyvtools_generate.generate_synthetic_bgr(30, 20, radius=4, seed=1)
        cv2.imwrite(infile, inbgr)
        config_dict = get_config(min_size=32, resize_size=40)
        outbgr = yuyvtools_crop.get_source_image(infile, config_dict, io.StringIO(), 0)
        self.assertEqual((40, 40, 3), outbgr.shape)
        config_dict = get_config()
        outbgr = yuyvtools_crop.get_source_image(infile, config_dict, io.StringIO(), 0)
        np.testing.assert_array_equal(outbgr, inbgr)

    def testGetOptions(self):
        options = yuyvtools_crop.get_options(
            [
                "yuyvtools-crop.py",
                "-dd",
                "--synthetic-size",
                "320x240",
                "--roi-odd",
                "3,5,7,9",
                "--outdir",
                "/tmp/out",
            ]
        )
        self.assertEqual(2, options.debug)
        config_dict = yuyvtools_common.Config.Create(options)
        self.assertEqual(320, config_dict.get("synthetic_width"))
        self.assertEqual(240, config_dict.get("synthetic_height"))
        self.assertEqual(
            yuyvtools_common.Roi(3, 5, 7, 9),
            yuyvtools_common.Roi.parse(config_dict.get("roi_odd")),
        )
        self.assertEqual(
            yuyvtools_common.Roi(2000, 2000, 1000, 1000), config_dict.get("roi_even")
        )
        self.assertEqual("/tmp/out", options.outdir)

    def testBadRoiOption(self):
        for roi in ("1,2,3", "a,b,c,d", "1,2,-3,4"):
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr):
                with self.assertRaises(SystemExit) as cm:
                    yuyvtools_crop.main(
                        [
                            "yuyvtools-crop.py",
                            "--dry-run",
                            "--synthetic-size",
                            "64x48",
                            "--min-size",
                            "0",
                            "--roi-odd",
                            roi,
                        ]
                    )
            self.assertEqual(2, cm.exception.code)
            self.assertIn("invalid roi", stderr.getvalue())

    def testQuiet(self):
        outdir = tempfile.mkdtemp(prefix="yuyvtools-crop_unittest.")
        logfd = io.StringIO()
        results = yuyvtools_crop.run_experiment(
            None, outdir, get_config(), logfd=logfd, debug=-1
        )
        self.assertTrue(results["odd_color"]["written"])
        self.assertNotIn("info:", logfd.getvalue())

    def testMainLogfile(self):
        tmpdir = tempfile.mkdtemp(prefix="yuyvtools-crop_unittest.")
        outdir = os.path.join(tmpdir, "output")
        logfile = os.path.join(tmpdir, "log.txt")
        yuyvtools_crop.main(
            [
                "yuyvtools-crop.py",
                "-i",
                os.path.join(tmpdir, "missing.jpg"),
                "--outdir",
                outdir,
                "--logfile",
                logfile,
                "--synthetic-size",
                "64x48",
                "--min-size",
                "0",
                "--roi-even",
                "10,10,20,20",
                "--roi-odd",
                "11,11,21,21",
            ]
        )
        with open(logfile) as f:
            contents = f.read()
        odd_color_path = os.path.join(outdir, "result_odd_crop_wrong_color.jpg")
        self.assertIn(f"odd_color: {odd_color_path}: ok", contents)
        for name in yuyvtools_crop.OUTPUT_NAMES.values():
            self.assertTrue(os.path.isfile(os.path.join(outdir, name)))


if __name__ == "__main__":
    yuyvtools_unittest.main(sys.argv)

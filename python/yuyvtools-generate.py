#!/usr/bin/env python3

"""yuyvtools-generate.py module description.


Module that generates synthetic test images.
"""


import argparse
import cv2
import importlib
import numpy as np
import sys

yuyvtools_io = importlib.import_module("yuyvtools-io")


__version__ = "0.1"

default_values = {
    "debug": 0,
    "dry_run": False,
    "width": 3000,
    "height": 3000,
    "radius": 100,
    "seed": None,
    "outfile": None,
}


# (B, G, R)
MARKER_COLOR = (0, 0, 255)


def generate_synthetic_bgr(width, height, radius=100, seed=None):
    # uniform noise, plus a filled red disk at the center (easy to locate)
    rng = np.random.default_rng(seed)
    outbgr = rng.integers(0, 255, size=(height, width, 3), dtype=np.uint8)
    cv2.circle(outbgr, (width // 2, height // 2), radius, MARKER_COLOR, -1)
    return outbgr


def resize_if_small(inbgr, min_size, resize_size, logfd=sys.stdout, debug=0):
    height, width = inbgr.shape[0], inbgr.shape[1]
    if width >= min_size and height >= min_size:
        return inbgr
    if debug > 0:
        print(
            f"debug: resizing {width}x{height} -> {resize_size}x{resize_size}",
            file=logfd,
        )
    return cv2.resize(inbgr, (resize_size, resize_size))


def get_options(argv):
    """Generic option parser.

    Args:
        argv: list containing arguments

    Returns:
        Namespace - An argparse.ArgumentParser-generated option object
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        dest="version",
        default=False,
        help="Print version",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="count",
        dest="debug",
        default=default_values["debug"],
        help="Increase verbosity (use multiple times for more)",
    )
    parser.add_argument(
        "--quiet",
        action="store_const",
        dest="debug",
        const=-1,
        help="Zero verbosity",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        dest="dry_run",
        default=default_values["dry_run"],
        help="Dry run",
    )
    parser.add_argument(
        "--width",
        action="store",
        type=int,
        dest="width",
        default=default_values["width"],
        metavar="WIDTH",
        help=("use WIDTH width (default: %i)" % default_values["width"]),
    )
    parser.add_argument(
        "--height",
        action="store",
        type=int,
        dest="height",
        default=default_values["height"],
        metavar="HEIGHT",
        help=("HEIGHT height (default: %i)" % default_values["height"]),
    )

    class VideoSizeAction(argparse.Action):
        def __call__(self, parser, namespace, values, option_string=None):
            namespace.width, namespace.height = [int(v) for v in values[0].split("x")]

    parser.add_argument(
        "--video-size",
        action=VideoSizeAction,
        nargs=1,
        help="use <width>x<height>",
    )
    parser.add_argument(
        "--radius",
        action="store",
        type=int,
        dest="radius",
        default=default_values["radius"],
        metavar="RADIUS",
        help=("marker radius (default: %i)" % default_values["radius"]),
    )
    parser.add_argument(
        "--seed",
        action="store",
        type=int,
        dest="seed",
        default=default_values["seed"],
        metavar="SEED",
        help="random seed",
    )
    parser.add_argument(
        "-o",
        "--outfile",
        action="store",
        type=str,
        dest="outfile",
        default=default_values["outfile"],
        metavar="output-file",
        help="output file",
    )
    # do the parsing
    options = parser.parse_args(argv[1:])
    return options


def main(argv):
    # parse options
    options = get_options(argv)
    if options.version:
        print("version: %s" % __version__)
        sys.exit(0)
    if options.outfile is None:
        print("error: need an output file (-o)")
        sys.exit(-1)
    # print results
    if options.debug > 0:
        print(options)
    outbgr = generate_synthetic_bgr(
        options.width, options.height, options.radius, options.seed
    )
    yuyvtools_io.write_image_file(
        options.outfile, outbgr, options.dry_run, debug=options.debug
    )


if __name__ == "__main__":
    # at least the CLI program name: (CLI) execution
    main(sys.argv)

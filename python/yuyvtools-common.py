#!/usr/bin/env python3

"""yuyvtools-common.py module description.


Module that contains common code.
"""


import argparse
import enum


class ViewException(Exception):
    """Packed view geometry issue."""


class ProcColor(enum.Enum):
    gray = 0
    bgr = 1


# "pix_fmt": bytes per pixel (element) in a packed view
PIX_FMTS = {
    "yuyv422": 2,
    "gray": 1,
}


def get_length_factor(pix_fmt):
    assert pix_fmt in PIX_FMTS, f"error: unsupported format: {pix_fmt}"
    return PIX_FMTS[pix_fmt]


def get_component_locations(i, j, w):
    # packed format, 4:2:2, no alpha channel
    # Y00 U00 Y01 V00  Y02 U02 Y03 V02
    first_luma_in_group = i % 2 == 0
    u_shift = +1 if first_luma_in_group else -1
    v_shift = +3 if first_luma_in_group else +1
    return (
        (w * j * 2) + i * 2,
        (w * j * 2) + i * 2 + u_shift,
        (w * j * 2) + i * 2 + v_shift,
    )


class ImageInfo:
    height = None
    width = None

    def __init__(self, height, width, stride=None, pix_fmt="yuyv422"):
        self.height = height
        self.width = width
        self.pix_fmt = pix_fmt
        if stride is None:
            stride = width * get_length_factor(pix_fmt)
        self.stride = stride

    def __str__(self):
        return f"height: {self.height} width: {self.width} stride: {self.stride} pix_fmt: {self.pix_fmt}"


class Roi:
    """Rectangle (x, y, width, height), in pixels."""

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def __str__(self):
        return f"x: {self.x} y: {self.y} width: {self.width} height: {self.height}"

    def __eq__(self, other):
        return isinstance(other, Roi) and self.as_tuple() == other.as_tuple()

    def as_tuple(self):
        return (self.x, self.y, self.width, self.height)

    def with_even_width(self):
        # YUY2 color decoding needs complete pixel pairs
        return Roi(self.x, self.y, self.width - self.width % 2, self.height)

    @classmethod
    def parse(cls, val):
        # "x,y,width,height"
        if isinstance(val, Roi):
            return val
        items = val.split(",") if isinstance(val, str) else list(val)
        assert len(items) == 4, f"error: invalid roi: {val}"
        x, y, width, height = (int(v) for v in items)
        assert width >= 0 and height >= 0, f"error: invalid roi: {val}"
        return cls(x, y, width, height)

    @classmethod
    def parse_option(cls, val):
        # argparse "type": report bad rectangles as usage errors
        try:
            return cls.parse(val)
        except (AssertionError, ValueError):
            raise argparse.ArgumentTypeError(f"invalid roi (use X,Y,W,H): {val}")


class Config:
    DEFAULT_VALUES = {
        "min_size": 2100,
        "resize_size": 2500,
        "synthetic_width": 3000,
        "synthetic_height": 3000,
        "seed": None,
        "roi_even": "2000,2000,1000,1000",
        "roi_odd": "2001,2001,1001,1001",
    }

    def __init__(self):
        self.config_dict = {}

    def __str__(self):
        return "\n".join(f"{k}: {v}" for (k, v) in self.config_dict.items())

    @classmethod
    def Create(cls, options):
        config_dict = cls()
        for key, val in vars(options).items():
            if key in cls.DEFAULT_VALUES.keys():
                config_dict.set(key, val)
        return config_dict

    @classmethod
    def set_parser_options(cls, parser):
        parser.add_argument(
            "--min-size",
            action="store",
            type=int,
            dest="min_size",
            default=cls.DEFAULT_VALUES["min_size"],
            metavar="MIN_SIZE",
            help=(
                "resize inputs narrower or shorter than MIN_SIZE (default: %i)"
                % cls.DEFAULT_VALUES["min_size"]
            ),
        )
        parser.add_argument(
            "--resize-size",
            action="store",
            type=int,
            dest="resize_size",
            default=cls.DEFAULT_VALUES["resize_size"],
            metavar="SIZE",
            help=(
                "resize small inputs to SIZExSIZE (default: %i)"
                % cls.DEFAULT_VALUES["resize_size"]
            ),
        )

        class SyntheticSizeAction(argparse.Action):
            def __call__(self, parser, namespace, values, option_string=None):
                namespace.synthetic_width, namespace.synthetic_height = [
                    int(v) for v in values[0].split("x")
                ]

        parser.add_argument(
            "--synthetic-size",
            action=SyntheticSizeAction,
            nargs=1,
            help="use <width>x<height> for the synthetic image (default: %ix%i)"
            % (
                cls.DEFAULT_VALUES["synthetic_width"],
                cls.DEFAULT_VALUES["synthetic_height"],
            ),
        )
        parser.set_defaults(
            synthetic_width=cls.DEFAULT_VALUES["synthetic_width"],
            synthetic_height=cls.DEFAULT_VALUES["synthetic_height"],
        )
        parser.add_argument(
            "--seed",
            action="store",
            type=int,
            dest="seed",
            default=cls.DEFAULT_VALUES["seed"],
            metavar="SEED",
            help="random seed for the synthetic image",
        )
        parser.add_argument(
            "--roi-even",
            action="store",
            type=Roi.parse_option,
            dest="roi_even",
            default=cls.DEFAULT_VALUES["roi_even"],
            metavar="X,Y,W,H",
            help="even crop rectangle (default: %s)" % cls.DEFAULT_VALUES["roi_even"],
        )
        parser.add_argument(
            "--roi-odd",
            action="store",
            type=Roi.parse_option,
            dest="roi_odd",
            default=cls.DEFAULT_VALUES["roi_odd"],
            metavar="X,Y,W,H",
            help="odd crop rectangle (default: %s)" % cls.DEFAULT_VALUES["roi_odd"],
        )

    def get(self, key):
        return self.config_dict.get(key, self.DEFAULT_VALUES[key])

    def set(self, key, val):
        self.config_dict[key] = val

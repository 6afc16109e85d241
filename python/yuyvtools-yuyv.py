#!/usr/bin/env python3

"""yuyvtools-yuyv.py module description.

Packs BGR images into YUYV (YUY2) raw buffers, and decodes packed views.

Layout is 2 bytes per pixel, with each horizontal pixel pair sharing a
chroma pair:

  Y0 U0 Y1 V0  Y2 U2 Y3 V2  ...

Rows are not padded (stride == 2 * width).
"""


import cv2
import importlib
import numpy as np
import sys

yuyvtools_common = importlib.import_module("yuyvtools-common")


# BT.601-ish integer formulas. Work on python ints and on numpy int32 arrays.
# The sum is shifted (arithmetic), truncated to 8 bits, and then offset.
# The offset result is stored as 8 bits again (it wraps, it is not clamped).
def truncate_u8(x):
    return x & 0xFF


def rgb_to_y(r, g, b):
    return truncate_u8(truncate_u8((66 * r + 129 * g + 25 * b + 128) >> 8) + 16)


def rgb_to_u(r, g, b):
    return truncate_u8(truncate_u8((-38 * r - 74 * g + 112 * b + 128) >> 8) + 128)


def rgb_to_v(r, g, b):
    return truncate_u8(truncate_u8((112 * r - 94 * g - 18 * b + 128) >> 8) + 128)


# 2x BGR pixels -> 4 bytes (Y0, U, Y1, V)
def pack_pixel_pair(p0, p1):
    b0, g0, r0 = (int(c) for c in p0)
    b1, g1, r1 = (int(c) for c in p1)
    y0 = rgb_to_y(r0, g0, b0)
    y1 = rgb_to_y(r1, g1, b1)
    # chroma is the (floored) average of both pixels
    u = (rgb_to_u(r0, g0, b0) + rgb_to_u(r1, g1, b1)) // 2
    v = (rgb_to_v(r0, g0, b0) + rgb_to_v(r1, g1, b1)) // 2
    return bytes((y0, u, y1, v))


def bgr_to_yuyv(inbgr, logfd=sys.stdout, debug=0):
    """Convert a BGR image into a raw YUYV buffer.

    Args:
        inbgr: (height, width, 3) uint8 array (cv2 BGR order)
        logfd: log file descriptor
        debug: verbosity

    Returns:
        tuple - (buffer, width, height), where buffer is a read-only flat
        uint8 array of width * height * 2 bytes. An odd input width loses
        its last column.
    """
    height, width = inbgr.shape[0], inbgr.shape[1]
    # a YUYV row needs complete pixel pairs
    if width % 2 != 0:
        if debug > 0:
            print(f"warn: odd width ({width}): dropping last column", file=logfd)
        width -= 1
    if width == 0 or height == 0:
        outyuyv = np.zeros(0, dtype=np.uint8)
        outyuyv.flags.writeable = False
        return outyuyv, width, height

    inbgr = inbgr[:, :width].astype(np.int32)
    b, g, r = inbgr[:, :, 0], inbgr[:, :, 1], inbgr[:, :, 2]
    ya = rgb_to_y(r, g, b)
    ua = rgb_to_u(r, g, b)
    va = rgb_to_v(r, g, b)
    # 4:2:2 chroma subsample (integer average of each pair)
    ua = (ua[:, 0::2] + ua[:, 1::2]) // 2
    va = (va[:, 0::2] + va[:, 1::2]) // 2

    outyuyv = np.zeros((height, width // 2, 4), dtype=np.uint8)
    outyuyv[:, :, 0] = ya[:, 0::2]
    outyuyv[:, :, 1] = ua
    outyuyv[:, :, 2] = ya[:, 1::2]
    outyuyv[:, :, 3] = va
    outyuyv = outyuyv.reshape(-1)
    outyuyv.flags.writeable = False
    return outyuyv, width, height


def unpack_yuyv(inarr):
    """Split an even-aligned (height, width, 2) YUYV array into Y, U, V planes.

    Chroma planes are returned at full resolution (each value duplicated
    over its pixel pair).
    """
    height, width = inarr.shape[0], inarr.shape[1]
    assert width % 2 == 0, f"error: unpack_yuyv requires even width ({width})"
    ya = np.array(inarr[:, :, 0])
    ua = np.repeat(inarr[:, 0::2, 1], 2, axis=1)
    va = np.repeat(inarr[:, 1::2, 1], 2, axis=1)
    return ya, ua, va


# cv2 packed-format decoders
def yuyv_to_gray(inarr):
    return cv2.cvtColor(np.ascontiguousarray(inarr), cv2.COLOR_YUV2GRAY_YUY2)


def yuyv_to_bgr(inarr):
    return cv2.cvtColor(np.ascontiguousarray(inarr), cv2.COLOR_YUV2BGR_YUY2)


DECODERS = {
    yuyvtools_common.ProcColor.gray: yuyv_to_gray,
    yuyvtools_common.ProcColor.bgr: yuyv_to_bgr,
}


def convert_packed(inarr, proc_color, logfd=sys.stdout, debug=0):
    """Run a packed-format decoder, reporting (not raising) cv2 errors.

    Returns:
        tuple - (outimg, status). outimg is None on failure, and
        status["error"] carries the cv2 message.
    """
    func = DECODERS[proc_color]
    try:
        outimg = func(inarr)
    except cv2.error as e:
        print(
            f"error: {func.__name__} failed on {inarr.shape} input: {e}",
            file=logfd,
        )
        return None, {"error": str(e)}
    if debug > 1:
        print(f"debug: {func.__name__}: {inarr.shape} -> {outimg.shape}", file=logfd)
    return outimg, {}

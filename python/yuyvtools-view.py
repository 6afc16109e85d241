#!/usr/bin/env python3

"""yuyvtools-view.py module description.

Zero-copy rectangular views over raw packed buffers.

A view does not own its buffer. It describes it as (height, width,
channels, stride, offset), where element (row, col, ch) lives at byte
`offset + row * stride + col * channels + ch`. Crops share the buffer and
keep the stride. Nothing is ever written through a view.
"""


import importlib
import numpy as np

yuyvtools_common = importlib.import_module("yuyvtools-common")


class PackedView:
    def __init__(self, buffer, height, width, channels=2, stride=None, offset=0):
        self.buffer = buffer
        self.height = height
        self.width = width
        self.channels = channels
        # default stride matches a cv2 Mat wrapped over external data
        self.stride = width * channels if stride is None else stride
        self.offset = offset
        if self.height > 0 and self.width > 0:
            end = self.offset + (self.height - 1) * self.stride + self.row_size()
            if self.offset < 0 or end > len(self.buffer):
                raise yuyvtools_common.ViewException(
                    f"view ({self}) reads {end} bytes from a {len(self.buffer)}-byte buffer"
                )

    def __str__(self):
        return f"height: {self.height} width: {self.width} channels: {self.channels} stride: {self.stride} offset: {self.offset}"

    def row_size(self):
        return self.width * self.channels

    def byte_offset(self, x, y):
        return self.offset + y * self.stride + x * self.channels

    def crop(self, x, y, width, height):
        if (
            x < 0
            or y < 0
            or width < 0
            or height < 0
            or x + width > self.width
            or y + height > self.height
        ):
            raise yuyvtools_common.ViewException(
                f"crop (x: {x} y: {y} width: {width} height: {height}) outside view ({self})"
            )
        return PackedView(
            self.buffer,
            height,
            width,
            channels=self.channels,
            stride=self.stride,
            offset=self.byte_offset(x, y),
        )

    def crop_roi(self, roi):
        return self.crop(roi.x, roi.y, roi.width, roi.height)

    def to_array(self):
        """Return a read-only numpy array over the buffer (no copy)."""
        base = np.frombuffer(self.buffer, dtype=np.uint8)
        if self.channels == 1:
            shape = (self.height, self.width)
            strides = (self.stride, 1)
        else:
            shape = (self.height, self.width, self.channels)
            strides = (self.stride, self.channels, 1)
        if self.height == 0 or self.width == 0:
            return np.zeros(shape, dtype=np.uint8)
        return np.lib.stride_tricks.as_strided(
            base[self.offset :], shape=shape, strides=strides, writeable=False
        )

    def clone(self):
        # deep copy: freezes the (possibly wrong) layout
        return np.array(self.to_array(), copy=True)

    def get_image_info(self):
        pix_fmt = "gray" if self.channels == 1 else "yuyv422"
        return yuyvtools_common.ImageInfo(
            self.height, self.width, stride=self.stride, pix_fmt=pix_fmt
        )

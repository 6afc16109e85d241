#!/usr/bin/env python3

"""yuyvtools-io.py module description.

Generic I/O functions.
"""


import cv2
import os
import sys


def make_outdir(outdir, dry_run=False, logfd=sys.stdout, debug=0):
    if os.path.isdir(outdir):
        return
    if debug > 0:
        print(f"debug: creating {outdir}", file=logfd)
    if not dry_run:
        os.makedirs(outdir, exist_ok=True)


def read_image_file(infile, logfd=sys.stdout, debug=0):
    # cv2.imread returns None (no exception) on missing/broken files
    if infile is None or not os.path.isfile(infile):
        print(f"error: cannot read image {infile}", file=logfd)
        return None
    outbgr = cv2.imread(infile, cv2.IMREAD_COLOR)
    if outbgr is None:
        print(f"error: cannot decode image {infile}", file=logfd)
        return None
    if debug > 0:
        print(f"debug: read {infile}: {outbgr.shape}", file=logfd)
    return outbgr


def write_image_file(outfile, outimg, dry_run=False, logfd=sys.stdout, debug=0):
    if outimg is None or outimg.size == 0:
        print(f"error: empty image, not writing {outfile}", file=logfd)
        return False
    if dry_run:
        if debug > 0:
            print(f"debug: dry run: not writing {outfile}", file=logfd)
        return False
    try:
        written = cv2.imwrite(outfile, outimg)
    except cv2.error as e:
        print(f"error: cannot write {outfile}: {e}", file=logfd)
        return False
    if not written:
        print(f"error: cannot write {outfile}", file=logfd)
    return bool(written)

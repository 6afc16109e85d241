#!/usr/bin/env python3

"""yuyvtools-crop.py module description.

Crops a YUYV (YUY2) raw buffer at even and odd pixel offsets.

Builds a YUYV buffer from a BGR image, wraps it as a 2-byte-per-pixel
view (no copy), and writes:

* result_even_crop.jpg: even crop, grayscale (correct)
* result_even_crop_color.jpg: even crop, color (correct)
* result_odd_crop.jpg: odd crop, grayscale (luma is still correct)
* result_odd_crop_wrong_color.jpg: odd crop, color (U/V swapped)
* result_wrong_format_garbage.jpg: buffer misread as 1 byte per pixel,
  with a 1-byte-per-pixel stride (garbage)
"""


import argparse
import importlib
import os
import sys

yuyvtools_common = importlib.import_module("yuyvtools-common")
yuyvtools_generate = importlib.import_module("yuyvtools-generate")
yuyvtools_io = importlib.import_module("yuyvtools-io")
yuyvtools_view = importlib.import_module("yuyvtools-view")
yuyvtools_yuyv = importlib.import_module("yuyvtools-yuyv")


__version__ = "0.1"

default_values = {
    "debug": 0,
    "dry_run": False,
    "infile": "image/DSC_0822.JPG",
    "outdir": "output",
    "logfile": None,
}


OUTPUT_NAMES = {
    "even_gray": "result_even_crop.jpg",
    "even_color": "result_even_crop_color.jpg",
    "odd_gray": "result_odd_crop.jpg",
    "odd_color": "result_odd_crop_wrong_color.jpg",
    "wrong_format": "result_wrong_format_garbage.jpg",
}


def get_source_image(infile, config_dict, logfd, debug):
    inbgr = yuyvtools_io.read_image_file(infile, logfd, debug)
    if inbgr is None:
        width = config_dict.get("synthetic_width")
        height = config_dict.get("synthetic_height")
        if debug >= 0:
            print(f"info: generating a {width}x{height} test image", file=logfd)
        inbgr = yuyvtools_generate.generate_synthetic_bgr(
            width, height, seed=config_dict.get("seed")
        )
    # make sure the crop rectangles fit
    return yuyvtools_generate.resize_if_small(
        inbgr,
        config_dict.get("min_size"),
        config_dict.get("resize_size"),
        logfd,
        debug,
    )


def crop_and_convert(src, roi, proc_color, outfile, dry_run, logfd, debug):
    status = {"path": outfile, "written": False}
    if proc_color == yuyvtools_common.ProcColor.bgr and roi.width % 2 != 0:
        roi = roi.with_even_width()
        status["width_adjusted"] = True
        if debug >= 0:
            print(
                f"info: color decoding needs an even width: cropping ({roi})",
                file=logfd,
            )
    try:
        crop = src.crop_roi(roi)
    except yuyvtools_common.ViewException as e:
        print(f"error: {e}", file=logfd)
        status["error"] = str(e)
        return status
    if debug > 1:
        yloc, uloc, vloc = yuyvtools_common.get_component_locations(
            roi.x, roi.y, src.width
        )
        print(
            f"debug: crop ({roi}) starts at byte {crop.offset} (y: {yloc} u: {uloc} v: {vloc})",
            file=logfd,
        )
    outimg, convert_status = yuyvtools_yuyv.convert_packed(
        crop.to_array(), proc_color, logfd, debug
    )
    status.update(convert_status)
    if outimg is not None:
        status["written"] = yuyvtools_io.write_image_file(
            outfile, outimg, dry_run, logfd, debug
        )
        if status["written"] and debug >= 0:
            print(f"info: wrote {outfile}", file=logfd)
    return status


def crop_wrong_format(buffer, width, height, roi, outfile, dry_run, logfd, debug):
    status = {"path": outfile, "written": False}
    # a YUYV buffer described as 1 byte per pixel: a wrong stride (width,
    # not 2 * width), and x offsets that count bytes, not pixels
    wrong = yuyvtools_view.PackedView(buffer, height, width, channels=1)
    try:
        crop = wrong.crop_roi(roi)
    except yuyvtools_common.ViewException as e:
        print(f"error: {e}", file=logfd)
        status["error"] = str(e)
        return status
    status["offset"] = crop.offset
    status["expected_offset"] = roi.y * 2 * width + roi.x * 2
    if debug > 0:
        print(
            f"debug: wrong format crop starts at byte {status['offset']} (expected {status['expected_offset']})",
            file=logfd,
        )
    outimg = crop.clone()
    status["written"] = yuyvtools_io.write_image_file(
        outfile, outimg, dry_run, logfd, debug
    )
    if status["written"] and debug >= 0:
        print(f"info: wrote {outfile} (expect garbage)", file=logfd)
    return status


def run_experiment(infile, outdir, config_dict, dry_run=False, logfd=sys.stdout, debug=0):
    """Run all crop experiments.

    Returns:
        dict - per-output status (keys are OUTPUT_NAMES keys). Each status
        has "path" and "written", plus "error" when the step failed.
    """
    yuyvtools_io.make_outdir(outdir, dry_run, logfd, debug)
    inbgr = get_source_image(infile, config_dict, logfd, debug)

    # pack into a raw YUYV buffer, and wrap it as 2 bytes per pixel
    if debug >= 0:
        print("info: building the YUYV buffer", file=logfd)
    buffer, width, height = yuyvtools_yuyv.bgr_to_yuyv(inbgr, logfd, debug)
    src = yuyvtools_view.PackedView(buffer, height, width, channels=2)
    if debug > 0:
        print(f"debug: src: {src.get_image_info()}", file=logfd)

    roi_even = yuyvtools_common.Roi.parse(config_dict.get("roi_even"))
    roi_odd = yuyvtools_common.Roi.parse(config_dict.get("roi_odd"))
    outfiles = {
        key: os.path.join(outdir, name) for key, name in OUTPUT_NAMES.items()
    }

    results = {}
    # even crop: [Y, U] [Y, V] pairs stay aligned
    results["even_gray"] = crop_and_convert(
        src,
        roi_even,
        yuyvtools_common.ProcColor.gray,
        outfiles["even_gray"],
        dry_run,
        logfd,
        debug,
    )
    results["even_color"] = crop_and_convert(
        src,
        roi_even,
        yuyvtools_common.ProcColor.bgr,
        outfiles["even_color"],
        dry_run,
        logfd,
        debug,
    )
    # odd crop: the first element is [Y, V], so luma survives but the
    # chroma pairs are swapped (color decoding uses an even width)
    results["odd_gray"] = crop_and_convert(
        src,
        roi_odd,
        yuyvtools_common.ProcColor.gray,
        outfiles["odd_gray"],
        dry_run,
        logfd,
        debug,
    )
    results["odd_color"] = crop_and_convert(
        src,
        roi_odd,
        yuyvtools_common.ProcColor.bgr,
        outfiles["odd_color"],
        dry_run,
        logfd,
        debug,
    )
    results["wrong_format"] = crop_wrong_format(
        buffer,
        width,
        height,
        roi_odd,
        outfiles["wrong_format"],
        dry_run,
        logfd,
        debug,
    )
    return results


def get_options(argv):
    """Generic option parser.

    Args:
        argv: list containing arguments

    Returns:
        Namespace - An argparse.ArgumentParser-generated option object
    """
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
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
        "-i",
        "--infile",
        action="store",
        type=str,
        dest="infile",
        default=default_values["infile"],
        metavar="input-file",
        help="input image (default: %s)" % default_values["infile"],
    )
    parser.add_argument(
        "--outdir",
        action="store",
        type=str,
        dest="outdir",
        default=default_values["outdir"],
        metavar="output-dir",
        help="output directory (default: %s)" % default_values["outdir"],
    )
    parser.add_argument(
        "--logfile",
        action="store",
        type=str,
        dest="logfile",
        default=default_values["logfile"],
        metavar="log-file",
        help="log file",
    )
    yuyvtools_common.Config.set_parser_options(parser)
    # do the parsing
    options = parser.parse_args(argv[1:])
    return options


def main(argv):
    # parse options
    options = get_options(argv)
    if options.version:
        print("version: %s" % __version__)
        sys.exit(0)
    # get logfile descriptor
    if options.logfile is None:
        logfd = sys.stdout
    else:
        logfd = open(options.logfile, "w")
    # create configuration
    config_dict = yuyvtools_common.Config.Create(options)
    # print results
    if options.debug > 0:
        print(f"debug: {options}", file=logfd)

    try:
        results = run_experiment(
            options.infile,
            options.outdir,
            config_dict,
            options.dry_run,
            logfd,
            options.debug,
        )
        if options.debug >= 0:
            for key, status in results.items():
                state = "ok" if status["written"] else status.get("error", "not written")
                print(f"{key}: {status['path']}: {state}", file=logfd)
    finally:
        if logfd is not sys.stdout:
            logfd.close()


if __name__ == "__main__":
    # at least the CLI program name: (CLI) execution
    main(sys.argv)

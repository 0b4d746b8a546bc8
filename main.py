#!/usr/bin/python3
"""
Gaussian blur benchmark: naive, constant memory and tiled shared memory GPU
convolutions against a CPU reference.

Every timed repetition is logged to results/<run name>_convolution_<variant>.log,
create_dataset.py turns those logs into the averages plotted by plot_charts.py.
"""

import argparse
import logging
import os
import sys
from datetime import datetime

import cv2
import numpy as np
from numba import cuda

from Convolution import Settings
from Convolution.Dispatcher import (
    run_constant_convolution, run_convolution, run_naive_convolution, validate_sizes,
)
from Convolution.Errors import ConvolutionError
from Convolution.GaussianFilter import generate_filter
from cpu.Convolution import convolution_host
from cpu.GaussianBlur import gaussian_blur
from utils.GpuTimer import GpuTimer, HostTimer
from utils.Validation import max_error, measure_distortion, value_test

GPU_VARIANTS = ("naive", "constant", "tiled")

# One logger per measured implementation
loggers = {
    "cpu": logging.getLogger("CPU"),
    "skimage": logging.getLogger("Skimage"),
    "naive": logging.getLogger("Naive"),
    "constant": logging.getLogger("Constant"),
    "tiled": logging.getLogger("Tiled"),
}

logger = logging.getLogger("Harness")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Naive vs tiled GPU Gaussian blur benchmark")
    parser.add_argument("--num-row", type=int, default=Settings.DEFAULT_NUM_ROW)
    parser.add_argument("--num-col", type=int, default=Settings.DEFAULT_NUM_COL)
    parser.add_argument("--filter-size", type=int, default=Settings.DEFAULT_FILTER_SIZE,
                        help=f"odd, at most {Settings.MAX_FILTER_SIZE}")
    parser.add_argument("--sigma", type=float, default=Settings.DEFAULT_SIGMA)
    parser.add_argument("--repeat", type=int, default=Settings.DEFAULT_REPEAT,
                        help="timed repetitions per implementation")
    parser.add_argument("--seed", type=int, default=2019)
    parser.add_argument("--image", help="grayscale image to blur instead of random data")
    parser.add_argument("--output", help="write the tiled result to this image file")
    parser.add_argument("--results-dir", default=Settings.RESULTS_DIR)
    parser.add_argument("--tolerance", type=float, default=Settings.DEFAULT_TOLERANCE)
    parser.add_argument("--skip-cpu-baseline", action="store_true",
                        help="do not time the scikit-image blur")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.repeat < 1:
        parser.error("--repeat must be at least 1")
    return args


def get_run_name(args, image):
    if args.image:
        name = os.path.splitext(os.path.basename(args.image))[0]
    else:
        name = "random"
    # '_' separates the run name from the implementation in the log file names
    name = name.replace("_", "-")
    return f"{name}-{image.shape[0]}x{image.shape[1]}-f{args.filter_size}"


def load_image(path):
    frame = cv2.imread(path, cv2.IMREAD_GRAYSCALE)
    if frame is None:
        raise FileNotFoundError(f"cannot read image {path}")
    return np.ascontiguousarray(frame, dtype=np.float32) / 255.0


def generate_image(num_row, num_col, seed):
    rng = np.random.default_rng(seed)
    return rng.random((num_row, num_col), dtype=np.float32)


def save_image(path, image):
    cv2.imwrite(path, np.clip(np.rint(image * 255.0), 0, 255).astype(np.uint8))


def open_log_files(results_dir, run_name):
    if not os.path.exists(results_dir):
        os.makedirs(results_dir)  # Create the results directory if it does not exist

    handlers = []
    for variant, variant_logger in loggers.items():
        handler = logging.FileHandler(f"{results_dir}/{run_name}_convolution_{variant}.log", "w")
        # The records must reach the file whatever level the root logger was given
        variant_logger.setLevel(logging.INFO)
        variant_logger.addHandler(handler)
        handlers.append((variant_logger, handler))
    return handlers


def close_log_files(handlers):
    for variant_logger, handler in handlers:
        variant_logger.removeHandler(handler)
        handler.close()


def log_execution(variant, elapsed_ms, reference, result):
    mse, psnr = measure_distortion(reference, result)
    loggers[variant].info(
        f"Timestamp: {datetime.now()}, EXECUTION TIME ms: {elapsed_ms}, "
        f"MAX ERROR: {max_error(reference, result)}, MSE: {mse}, PSNR: {psnr}"
    )


def run_gpu_variant(variant, d_input, d_filter, h_filter, num_row, num_col, filter_size, repeat):
    """
    Warm up (JIT compilation) then time `repeat` launches of one GPU implementation.
    Returns the output copied back to the host and the elapsed times in ms.
    """
    # Fresh output filled with NaN: a pixel the kernel never writes cannot match the reference
    d_output = cuda.to_device(np.full((num_row, num_col), np.nan, dtype=np.float32))

    def launch():
        if variant == "naive":
            run_naive_convolution(d_output, d_input, d_filter, num_row, num_col, filter_size)
        elif variant == "constant":
            run_constant_convolution(d_output, d_input, h_filter, num_row, num_col, filter_size)
        else:
            run_convolution(d_output, d_input, d_filter, num_row, num_col, filter_size)

    launch()

    elapsed_times = []
    for _ in range(repeat):
        with GpuTimer() as timer:
            launch()
        elapsed_times.append(timer.elapsed_ms)

    # Copy the result back to the host
    return d_output.copy_to_host(), elapsed_times


def run(args):
    """Returns the process exit status: 0 if every GPU result matches the CPU reference, 1 otherwise."""
    filter_size = args.filter_size
    if args.image:
        image = load_image(args.image)
        num_row, num_col = image.shape
    else:
        num_row, num_col = args.num_row, args.num_col

    # Reject the run before any computation or log file
    validate_sizes(num_row, num_col, filter_size)
    if not args.image:
        image = generate_image(num_row, num_col, args.seed)

    h_filter = generate_filter(filter_size, args.sigma)
    run_name = get_run_name(args, image)
    logger.info("Run %s: image %dx%d, filter %dx%d, sigma %s",
                run_name, num_row, num_col, filter_size, filter_size, args.sigma)

    handlers = open_log_files(args.results_dir, run_name)
    try:
        # CPU reference, also the oracle for the GPU results
        with HostTimer() as timer:
            reference = convolution_host(image, h_filter)
        log_execution("cpu", timer.elapsed_ms, reference, reference)
        averages = {"cpu": timer.elapsed_ms}

        if not args.skip_cpu_baseline:
            with HostTimer() as timer:
                blurred = gaussian_blur(image, filter_size, args.sigma)
            log_execution("skimage", timer.elapsed_ms, reference, blurred)
            averages["skimage"] = timer.elapsed_ms

        # Copy the data to the GPU
        d_input = cuda.to_device(image)
        d_filter = cuda.to_device(h_filter)

        failed = []
        for variant in GPU_VARIANTS:
            result, elapsed_times = run_gpu_variant(
                variant, d_input, d_filter, h_filter, num_row, num_col, filter_size, args.repeat
            )
            for elapsed_ms in elapsed_times:
                log_execution(variant, elapsed_ms, reference, result)
            averages[variant] = sum(elapsed_times) / len(elapsed_times)

            mismatches = value_test(reference, result, args.tolerance)
            if mismatches:
                logger.error("%s: %d values differ from the CPU reference by more than %g",
                             variant, mismatches, args.tolerance)
                failed.append(variant)

            if variant == "tiled" and args.output:
                save_image(args.output, result)
    finally:
        close_log_files(handlers)

    for variant, average_ms in averages.items():
        logger.info("%-9s %10.3f ms", variant, average_ms)
    if averages["tiled"] > 0:
        logger.info("Tiled speedup over naive: %.2fx", averages["naive"] / averages["tiled"])

    if failed:
        logger.error("Result mismatch: %s", ", ".join(failed))
        return 1
    logger.info("All GPU results match the CPU reference")
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        return run(args)
    except (ConvolutionError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())

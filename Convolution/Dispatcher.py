import functools
import logging
import math

import numpy as np
from numba import cuda
from numba.cuda.cudadrv.driver import CudaAPIError
from numba.cuda.cudadrv.error import CudaSupportError

from Convolution.ConstantConvolution import make_constant_convolution
from Convolution.Errors import LaunchError, PreconditionError
from Convolution.NaiveConvolution import convolution_naive
from Convolution.Settings import MAX_FILTER_SIZE, TILE_DIM
from Convolution.TiledConvolution import convolution_tiled

logger = logging.getLogger(__name__)


def grid_dimensions(num_row, num_col):
    """
    Blocks needed to cover the image, x along the columns and y along the rows
    """
    threads_per_block = (TILE_DIM, TILE_DIM)
    blocks_per_grid = (math.ceil(num_col / TILE_DIM), math.ceil(num_row / TILE_DIM))
    return blocks_per_grid, threads_per_block


def validate_sizes(num_row, num_col, filter_size):
    """
    Image and filter sizes the tiled kernel can handle, checked before any work is done
    """
    if num_row <= 0 or num_col <= 0:
        raise PreconditionError(f"image dimensions must be positive, got {num_row}x{num_col}")
    if filter_size <= 0 or filter_size % 2 == 0:
        raise PreconditionError(f"filter_size must be a positive odd number, got {filter_size}")
    if filter_size >= TILE_DIM or filter_size > MAX_FILTER_SIZE:
        raise PreconditionError(
            f"filter_size {filter_size} does not fit the {TILE_DIM}x{TILE_DIM} tile "
            f"(maximum {MAX_FILTER_SIZE})"
        )


def validate_launch(d_output, d_input, d_filter, num_row, num_col, filter_size):
    validate_sizes(num_row, num_col, filter_size)

    image_shape = (num_row, num_col)
    for name, buffer in (("output", d_output), ("input", d_input)):
        if tuple(buffer.shape) != image_shape:
            raise PreconditionError(f"{name} buffer has shape {tuple(buffer.shape)}, expected {image_shape}")
        if buffer.dtype != np.float32:
            raise PreconditionError(f"{name} buffer must be float32, got {buffer.dtype}")
    if tuple(d_filter.shape) != (filter_size, filter_size):
        raise PreconditionError(
            f"filter buffer has shape {tuple(d_filter.shape)}, expected {(filter_size, filter_size)}"
        )
    if d_filter.dtype != np.float32:
        raise PreconditionError(f"filter buffer must be float32, got {d_filter.dtype}")


def _launch(kernel, name, args, num_row, num_col, stream):
    blocks_per_grid, threads_per_block = grid_dimensions(num_row, num_col)
    logger.debug("Launching %s: grid %s, block %s", name, blocks_per_grid, threads_per_block)

    try:
        kernel[blocks_per_grid, threads_per_block, stream](*args)
        # The launch is asynchronous: wait here so that timers stop after the work
        # and execution errors are reported by this call.
        if stream:
            stream.synchronize()
        else:
            cuda.synchronize()
    except (CudaAPIError, CudaSupportError) as exc:
        logger.error("%s launch failed: %s", name, exc)
        raise LaunchError(f"{name} launch failed: {exc}") from exc


def run_convolution(d_output, d_input, d_filter, num_row, num_col, filter_size, stream=0):
    """
    Tiled shared memory convolution of d_input into d_output.
    Blocks until the kernel has completed.
    """
    validate_launch(d_output, d_input, d_filter, num_row, num_col, filter_size)
    _launch(
        convolution_tiled, "convolution_tiled",
        (d_output, d_input, d_filter, num_row, num_col, filter_size),
        num_row, num_col, stream,
    )


def run_naive_convolution(d_output, d_input, d_filter, num_row, num_col, filter_size, stream=0):
    validate_launch(d_output, d_input, d_filter, num_row, num_col, filter_size)
    _launch(
        convolution_naive, "convolution_naive",
        (d_output, d_input, d_filter, num_row, num_col, filter_size),
        num_row, num_col, stream,
    )


@functools.lru_cache(maxsize=8)
def _constant_kernel(filter_bytes, filter_size):
    h_filter = np.frombuffer(filter_bytes, dtype=np.float32).reshape(filter_size, filter_size)
    return make_constant_convolution(h_filter)


def run_constant_convolution(d_output, d_input, h_filter, num_row, num_col, filter_size, stream=0):
    """
    Naive convolution with the filter in constant memory.
    h_filter is a host array: its values are compiled into the kernel.
    """
    h_filter = np.ascontiguousarray(h_filter, dtype=np.float32)
    validate_launch(d_output, d_input, h_filter, num_row, num_col, filter_size)
    kernel = _constant_kernel(h_filter.tobytes(), filter_size)
    _launch(
        kernel, "convolution_constant",
        (d_output, d_input, num_row, num_col, filter_size),
        num_row, num_col, stream,
    )

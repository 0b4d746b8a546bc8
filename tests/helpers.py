import numpy as np
from numba import cuda

from Convolution.Dispatcher import run_constant_convolution, run_convolution, run_naive_convolution


def convolve(variant, image, h_filter):
    """Run one GPU implementation on host arrays and return the host result."""
    image = np.ascontiguousarray(image, dtype=np.float32)
    h_filter = np.ascontiguousarray(h_filter, dtype=np.float32)
    num_row, num_col = image.shape
    filter_size = h_filter.shape[0]

    d_input = cuda.to_device(image)
    d_output = cuda.device_array((num_row, num_col), dtype=np.float32)
    if variant == "naive":
        run_naive_convolution(d_output, d_input, cuda.to_device(h_filter), num_row, num_col, filter_size)
    elif variant == "constant":
        run_constant_convolution(d_output, d_input, h_filter, num_row, num_col, filter_size)
    else:
        run_convolution(d_output, d_input, cuda.to_device(h_filter), num_row, num_col, filter_size)
    return d_output.copy_to_host()


def identity_filter(filter_size):
    h_filter = np.zeros((filter_size, filter_size), dtype=np.float32)
    h_filter[filter_size // 2, filter_size // 2] = 1.0
    return h_filter

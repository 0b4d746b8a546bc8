import numpy as np
from numba import cuda

from Convolution.BoundaryClamp import clamp_device


def make_constant_convolution(h_filter):
    """
    Build a naive kernel whose filter weights live in constant memory.

    Constant memory is filled at compile time, so a new kernel is compiled
    for every distinct filter.
    """
    h_filter = np.ascontiguousarray(h_filter, dtype=np.float32)

    @cuda.jit
    def convolution_constant(d_output, d_input, num_row, num_col, filter_size):
        c_filter = cuda.const.array_like(h_filter)

        col, row = cuda.grid(2)
        if row >= num_row or col >= num_col:
            return

        radius = filter_size // 2
        acc = np.float32(0.0)
        for fr in range(filter_size):
            for fc in range(filter_size):
                src_row = clamp_device(row + fr - radius, num_row)
                src_col = clamp_device(col + fc - radius, num_col)
                acc += d_input[src_row, src_col] * c_filter[fr, fc]

        d_output[row, col] = acc

    return convolution_constant

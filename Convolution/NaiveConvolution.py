import numpy as np
from numba import cuda

from Convolution.BoundaryClamp import clamp_device


@cuda.jit
def convolution_naive(d_output, d_input, d_filter, num_row, num_col, filter_size):
    """
    Reference kernel: one thread per output pixel, every neighbour is read from global memory
    """
    col, row = cuda.grid(2)  # x runs along the columns, y along the rows
    if row >= num_row or col >= num_col:
        # Outside of image bounds
        return

    radius = filter_size // 2
    acc = np.float32(0.0)
    for fr in range(filter_size):
        for fc in range(filter_size):
            src_row = clamp_device(row + fr - radius, num_row)
            src_col = clamp_device(col + fc - radius, num_col)
            acc += d_input[src_row, src_col] * d_filter[fr, fc]

    d_output[row, col] = acc

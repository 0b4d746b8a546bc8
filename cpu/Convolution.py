import numpy as np


def convolution_host(image, h_filter):
    """
    CPU reference convolution with edge replication.

    Accumulates in float32, one shifted copy of the padded image per filter
    weight in row-major order, the same order used by the GPU kernels.
    """
    image = np.asarray(image, dtype=np.float32)
    h_filter = np.asarray(h_filter, dtype=np.float32)
    num_row, num_col = image.shape
    filter_size = h_filter.shape[0]
    radius = filter_size // 2

    # Edge replication is the same as clamping every coordinate
    padded = np.pad(image, radius, mode="edge")

    output = np.zeros((num_row, num_col), dtype=np.float32)
    for fr in range(filter_size):
        for fc in range(filter_size):
            output += padded[fr:fr + num_row, fc:fc + num_col] * h_filter[fr, fc]
    return output

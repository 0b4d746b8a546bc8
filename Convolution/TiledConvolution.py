import numpy as np
from numba import cuda

from Convolution.BoundaryClamp import clamp_device
from Convolution.Settings import TILE_DIM, STAGING_DIM, FILTER_BUFFER_LENGTH


@cuda.jit
def convolution_tiled(d_output, d_input, d_filter, num_row, num_col, filter_size):
    """
    Shared memory convolution, one block of TILE_DIM x TILE_DIM threads per tile.

    Phase 1: the block stages its own tile and the 8 surrounding tiles
    (3 * TILE_DIM x 3 * TILE_DIM values) plus the filter weights into shared memory.
    Phase 2: after the barrier every thread computes its output pixel reading
    only from shared memory.

    Requires filter_size < TILE_DIM so the halo fits inside the neighbouring tiles.
    """
    # Shared memory for the filter and the 3x3 neighbourhood of tiles
    s_filter = cuda.shared.array(FILTER_BUFFER_LENGTH, dtype=np.float32)
    s_input = cuda.shared.array((STAGING_DIM, STAGING_DIM), dtype=np.float32)

    # Thread and block indices
    tx = cuda.threadIdx.x
    ty = cuda.threadIdx.y

    # Pixel coordinates in the output image
    col = cuda.blockIdx.x * TILE_DIM + tx
    row = cuda.blockIdx.y * TILE_DIM + ty

    # Only the first filter_size^2 threads hold a filter weight
    tid = ty * TILE_DIM + tx
    if tid < filter_size * filter_size:
        s_filter[tid] = d_filter[tid // filter_size, tid % filter_size]

    # Every thread loads one pixel of each of the 9 tiles, threads outside the
    # image included: their clamped loads are part of the neighbours' halo.
    for i in range(3):
        src_row = clamp_device(row + (i - 1) * TILE_DIM, num_row)
        for j in range(3):
            src_col = clamp_device(col + (j - 1) * TILE_DIM, num_col)
            s_input[i * TILE_DIM + ty, j * TILE_DIM + tx] = d_input[src_row, src_col]

    # Wait for all threads to finish loading
    cuda.syncthreads()

    if row >= num_row or col >= num_col:
        return

    radius = filter_size // 2
    acc = np.float32(0.0)
    for fr in range(filter_size):
        for fc in range(filter_size):
            acc += s_input[TILE_DIM + ty + fr - radius, TILE_DIM + tx + fc - radius] \
                * s_filter[fr * filter_size + fc]

    d_output[row, col] = acc

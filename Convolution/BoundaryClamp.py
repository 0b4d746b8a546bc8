from numba import cuda


def clamp(coordinate, axis_length):
    """
    Edge replication: a coordinate outside [0, axis_length) is moved to the nearest border pixel
    """
    return min(max(coordinate, 0), axis_length - 1)


# Same source compiled as a device function, callable from every kernel
clamp_device = cuda.jit(device=True)(clamp)

import numpy as np

from Convolution.Errors import PreconditionError
from Convolution.Settings import DEFAULT_SIGMA


def generate_filter(filter_size, sigma=DEFAULT_SIGMA):
    """
    Normalized 2D Gaussian mask of shape (filter_size, filter_size).

    The raw weights exp(-(dr^2 + dc^2) / (2 sigma^2)) are computed first, then
    every weight is rescaled by 1 / sum so the mask sums to 1.0.
    sigma is independent from filter_size.
    """
    if filter_size <= 0 or filter_size % 2 == 0:
        raise PreconditionError(f"filter_size must be a positive odd number, got {filter_size}")
    if sigma <= 0:
        raise PreconditionError(f"sigma must be positive, got {sigma}")

    radius = filter_size // 2
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    dr, dc = np.meshgrid(offsets, offsets, indexing="ij")

    # First pass: raw weights and their sum
    weights = np.exp(-(dr**2 + dc**2) / (2 * sigma**2))
    total = weights.sum()

    # Second pass: normalize
    weights /= total
    return np.ascontiguousarray(weights, dtype=np.float32)

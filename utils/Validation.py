import logging
import math

import numpy as np

logger = logging.getLogger(__name__)


def value_test(reference, result, tolerance):
    """
    Number of elements of result that differ from reference by more than tolerance.
    A mismatch is reported, never raised: the computation itself did complete.
    """
    reference = np.asarray(reference, dtype=np.float32)
    result = np.asarray(result, dtype=np.float32)
    if reference.shape != result.shape:
        raise ValueError(f"shape mismatch: {reference.shape} vs {result.shape}")

    error = np.abs(reference - result)
    # NaN never compares below the tolerance, so it counts as a mismatch
    mismatches = np.argwhere(~(error <= tolerance))
    for row, col in mismatches[:5]:
        logger.debug(
            "Mismatch at (%d, %d): expected %.8f, got %.8f",
            row, col, reference[row, col], result[row, col],
        )
    return len(mismatches)


def max_error(reference, result):
    return float(np.max(np.abs(np.asarray(reference, dtype=np.float32) - np.asarray(result, dtype=np.float32))))


def measure_distortion(reference, result, peak=1.0):
    """
    Mean Squared Error and Peak Signal-to-Noise Ratio of result against reference
    """
    diff = np.asarray(reference, dtype=np.float64) - np.asarray(result, dtype=np.float64)
    mse = float(np.mean(diff ** 2))

    if mse == 0:
        psnr = float("inf")
    else:
        psnr = 20 * math.log10(peak / math.sqrt(mse))

    return mse, psnr

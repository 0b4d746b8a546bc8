import numpy as np
from skimage.filters import gaussian


def gaussian_blur(image, filter_size, sigma):
    """
    Filter: Gaussian blur - CPU (scikit-image)

    truncate is chosen so the kernel radius equals filter_size // 2, and
    mode="nearest" replicates the border pixels like the GPU kernels do.
    """
    radius = filter_size // 2
    blurred = gaussian(
        np.asarray(image, dtype=np.float32),
        sigma=sigma,
        mode="nearest",
        truncate=radius / sigma,
        preserve_range=True,
    )
    return blurred.astype(np.float32)

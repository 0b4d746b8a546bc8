import os

# Run the kernels on numba's CUDA simulator unless a GPU run is asked for
# explicitly with NUMBA_ENABLE_CUDASIM=0. Must happen before numba is imported.
os.environ.setdefault("NUMBA_ENABLE_CUDASIM", "1")

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def random_image(rng):
    def make(num_row, num_col):
        return rng.random((num_row, num_col), dtype=np.float32)
    return make

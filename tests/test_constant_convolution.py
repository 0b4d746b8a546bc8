import numpy as np

from Convolution.GaussianFilter import generate_filter
from cpu.Convolution import convolution_host
from helpers import convolve, identity_filter


def test_matches_cpu_reference(random_image):
    image = random_image(17, 21)
    h_filter = generate_filter(7, sigma=2.0)

    result = convolve("constant", image, h_filter)

    np.testing.assert_allclose(result, convolution_host(image, h_filter), rtol=0, atol=1e-6)


def test_each_filter_gets_its_own_weights(random_image):
    image = random_image(8, 8)

    blurred = convolve("constant", image, generate_filter(3))
    copied = convolve("constant", image, identity_filter(3))

    np.testing.assert_array_equal(copied, image)
    assert not np.array_equal(blurred, image)

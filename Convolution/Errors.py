class ConvolutionError(Exception):
    """Base class for every failure of a convolution run."""


class PreconditionError(ConvolutionError, ValueError):
    """
    Invalid sizes or buffers, detected before anything is launched.
    The run is abandoned, there is nothing to retry.
    """


class LaunchError(ConvolutionError, RuntimeError):
    """The CUDA driver refused or aborted a kernel launch."""

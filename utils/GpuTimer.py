import time

from numba import cuda


class GpuTimer:
    """
    Elapsed time of the GPU work issued inside a with block, measured with CUDA events.

    The end event is synchronized on exit, the caller is still responsible for
    waiting on the kernels (the dispatcher does) before leaving the block.
    """

    def __init__(self, stream=0):
        self.stream = stream
        self.elapsed_ms = None

    def __enter__(self):
        # Create CUDA events for timing
        self.start_event = cuda.event()
        self.end_event = cuda.event()
        self.start_event.record(self.stream)
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            return False
        self.end_event.record(self.stream)
        # Wait for the end event to complete
        self.end_event.synchronize()
        self.elapsed_ms = self.start_event.elapsed_time(self.end_event)
        return False


class HostTimer:
    """Same interface as GpuTimer, for work done on the CPU."""

    def __init__(self):
        self.elapsed_ms = None

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc, tb):
        stop_time = time.time()
        self.elapsed_ms = (stop_time - self.start_time) * 1000
        return False

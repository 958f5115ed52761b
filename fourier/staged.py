"""
Staged FFT on a compute backend.

The same butterfly network as `fftcore`, written as one init launch
followed by log2(N) step launches. Each launch covers all N samples at
once, so stages are double buffered: a step reads one buffer and writes
the other, and the roles swap after every stage.
"""

from .backend import MemFlags
from .signals import from_pairs, to_pairs


class Fourier:
    def __init__(self, sample_power, backend):
        self.sample_power = sample_power
        self.backend = backend

        self.x_mem = backend.create_buffer(self.sample_count, MemFlags.READ_ONLY, "X")
        self.y1_mem = backend.create_buffer(self.sample_count, MemFlags.WRITE_ONLY, "Y1")
        self.y2_mem = backend.create_buffer(self.sample_count, MemFlags.WRITE_ONLY, "Y2")

    @property
    def sample_count(self):
        return 1 << self.sample_power

    @property
    def byte_count(self):
        # two float32 per sample
        return self.sample_count * 8

    def _check_signal(self, signal):
        if signal.shape[0] != self.sample_count:
            raise ValueError(
                f"Expected {self.sample_count} samples, got {signal.shape[0]}."
            )

    def run_init(self, x, sample_power, y):
        self.backend.run_kernel("fft_init", (x, sample_power, y), self.sample_count)

    def run_step(self, y, B, y_):
        self.backend.run_kernel("fft_step", (y, B, y_), self.sample_count)

    def init(self, signal):
        """Bit-reversal reorder of `signal` on the device."""
        self._check_signal(signal)
        self.backend.write(self.x_mem, to_pairs(signal))

        self.run_init(self.x_mem, self.sample_power, self.y1_mem)

        y1 = self.backend.read(self.y1_mem)
        self.backend.finish()

        return from_pairs(y1, signal.dtype)

    def step(self, signal, B):
        """One combine stage with half-span B applied to `signal`."""
        self._check_signal(signal)
        self.backend.write(self.y1_mem, to_pairs(signal))

        self.run_step(self.y1_mem, B, self.y2_mem)

        y2 = self.backend.read(self.y2_mem)
        self.backend.finish()

        return from_pairs(y2, signal.dtype)

    def fft(self, signal):
        self._check_signal(signal)
        self.backend.write(self.x_mem, to_pairs(signal))

        self.run_init(self.x_mem, self.sample_power, self.y1_mem)

        y = self.y1_mem
        y_ = self.y2_mem
        B = 1
        while B != self.sample_count:
            self.run_step(y, B, y_)
            y, y_ = y_, y
            B <<= 1

        spectrum = self.backend.read(y)
        self.backend.finish()

        return from_pairs(spectrum, signal.dtype)

    def close(self):
        for buffer in (self.y2_mem, self.y1_mem, self.x_mem):
            self.backend.release(buffer)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

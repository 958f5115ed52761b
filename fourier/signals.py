"""
Signal construction and host/device layout conversion.

A signal is a 1-D complex tensor. Devices only see complex pairs, an
(N, 2) float32 tensor of (real, imag), the same stacked layout the
FFTCore modules use for their inputs.
"""

import numpy as np
import torch

DEFAULT_DTYPE = torch.complex64


def make_signal(values, dtype=DEFAULT_DTYPE):
    """Build a signal from a sequence of (possibly complex) numbers."""
    if isinstance(values, torch.Tensor):
        return values.to(dtype).clone()
    array = np.asarray(values, dtype=np.complex128).reshape(-1)
    return torch.from_numpy(array).to(dtype)


def constant_signal(size, value=1, dtype=DEFAULT_DTYPE):
    return torch.full((size,), complex(value), dtype=dtype)


def impulse_signal(size, value=1, dtype=DEFAULT_DTYPE):
    """`value` at index 0, zero everywhere else."""
    signal = torch.zeros(size, dtype=dtype)
    if size:
        signal[0] = complex(value)
    return signal


def random_signal(size, generator: torch.Generator, dtype=DEFAULT_DTYPE):
    """
    Signal with real and imaginary parts drawn uniformly from [0, 1).

    Args:
        size (int): number of samples.
        generator (torch.Generator): seeded generator owned by the caller,
            so repeated runs with the same seed give the same signals.
    """
    pairs = torch.rand((size, 2), generator=generator, dtype=torch.float64)
    return torch.complex(pairs[:, 0], pairs[:, 1]).to(dtype)


def to_pairs(signal):
    return torch.stack((signal.real, signal.imag), dim=-1).to(torch.float32).contiguous()


def from_pairs(pairs, dtype=DEFAULT_DTYPE):
    pairs = pairs.to(torch.float32)
    return torch.complex(pairs[:, 0], pairs[:, 1]).to(dtype)

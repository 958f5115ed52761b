"""
Naive O(N^2) discrete Fourier transform, used as the ground truth.

The phase index k*n is reduced modulo N with integer arithmetic before
it is turned into an angle, and the sums are accumulated in double
precision. Results come back in the dtype of the input.
"""

import math

import torch


def _dft_matrix(n, sign, device=None):
    k = torch.arange(n, dtype=torch.int64, device=device)
    phase = torch.remainder(k[:, None] * k[None, :], n)
    angle = sign * 2.0 * math.pi * phase.to(torch.float64) / n
    return torch.complex(torch.cos(angle), torch.sin(angle))


def dft(signal):
    """X[k] = sum_n x[n] * exp(-i*2*pi*k*n/N)"""
    n = signal.shape[0]
    if n == 0:
        return signal.clone()

    matrix = _dft_matrix(n, -1.0, device=signal.device)
    return (matrix @ signal.to(torch.complex128)).to(signal.dtype)


def idft(spectrum):
    """x[n] = (1/N) * sum_k X[k] * exp(+i*2*pi*k*n/N)"""
    n = spectrum.shape[0]
    if n == 0:
        return spectrum.clone()

    matrix = _dft_matrix(n, 1.0, device=spectrum.device)
    return (matrix @ spectrum.to(torch.complex128) / n).to(spectrum.dtype)

"""
Iterative in-place radix-2 FFT and IFFT.

The input is reordered by bit-reversed index once, after which every
stage only combines samples that sit half a group apart. Stages run
from groups of 2 samples up to a single group of N samples. Within a
group the update is

    s[j]       = even + W(j, M) * odd
    s[j + M/2] = even + W(j + M/2, M) * odd

with W applied to both outputs. The inverse uses the conjugate rotation
and halves every combine, which accumulates to the 1/N normalisation.
"""

import math

import torch

from .bits import bit_reverse_permutation, is_power_of_two


def twiddle(k, spectrum_size, sign=-1.0, dtype=torch.complex64):
    """exp(sign * i * 2*pi * k / spectrum_size) for an index tensor k."""
    angle = sign * 2.0 * math.pi * k.to(torch.float64) / spectrum_size
    return torch.complex(torch.cos(angle), torch.sin(angle)).to(dtype)


def W(k, spectrum_size, dtype=torch.complex64):
    return twiddle(k, spectrum_size, -1.0, dtype)


def Q(k, spectrum_size, dtype=torch.complex64):
    return twiddle(k, spectrum_size, 1.0, dtype)


def _check_length(signal):
    n = signal.shape[0]
    if n > 1 and not is_power_of_two(n):
        raise ValueError(f"FFT length must be a power of two, got {n}.")
    return n


def fft_init(signal):
    """Working copy with out[i] = signal[reverse_bits(i, N)]."""
    n = _check_length(signal)
    if n == 0:
        return signal.clone()
    indices = bit_reverse_permutation(n).to(signal.device)
    return signal[indices].clone()


def fft_step_spectrum(spectrum):
    """Combine the two halves of one group in place."""
    spectrum_size = spectrum.shape[0]
    half = spectrum_size // 2

    sample1 = torch.arange(half, device=spectrum.device)
    sample2 = sample1 + half

    even = spectrum[:half].clone()
    odd = spectrum[half:].clone()

    spectrum[:half] = even + W(sample1, spectrum_size, spectrum.dtype) * odd
    spectrum[half:] = even + W(sample2, spectrum_size, spectrum.dtype) * odd


def fft_step(spectrum, transform_count, sample_count):
    for transform in range(transform_count):
        start = transform * sample_count
        fft_step_spectrum(spectrum[start : start + sample_count])


def fft(signal):
    n = _check_length(signal)
    result = fft_init(signal)

    transform_count = n // 2
    while transform_count >= 1:
        sample_count = n // transform_count

        fft_step(result, transform_count, sample_count)

        transform_count >>= 1

    return result


def ifft_step(spectrum):
    spectrum_size = spectrum.shape[0]
    half = spectrum_size // 2

    sample1 = torch.arange(half, device=spectrum.device)
    sample2 = sample1 + half

    even = spectrum[:half].clone()
    odd = spectrum[half:].clone()

    spectrum[:half] = 0.5 * (even + Q(sample1, spectrum_size, spectrum.dtype) * odd)
    spectrum[half:] = 0.5 * (even + Q(sample2, spectrum_size, spectrum.dtype) * odd)


def ifft(spectrum):
    n = _check_length(spectrum)
    result = fft_init(spectrum)

    sample_count = 2
    transform_count = n // sample_count
    while sample_count <= n:
        assert transform_count * sample_count == n

        for transform in range(transform_count):
            start = transform * sample_count
            ifft_step(result[start : start + sample_count])

        transform_count >>= 1
        sample_count <<= 1

    return result

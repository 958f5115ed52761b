"""
Properties checked by the harness.

Numeric properties return the residue between two signals that should
agree; the harness compares it against the tolerance. Boolean
properties return whether they hold.
"""

import torch

from .bits import reverse_bits
from .dft import dft, idft
from .fftcore import fft, fft_init, fft_step, fft_step_spectrum, ifft
from .oracle import residual
from .signals import impulse_signal


def prop_inverse_dft(test_signal):
    return residual(test_signal, idft(dft(test_signal)))


def prop_inverse_fft(test_signal):
    return residual(test_signal, ifft(fft(test_signal)))


def prop_dft_equal_fft(test_signal):
    return residual(dft(test_signal), fft(test_signal))


def prop_idft_equal_ifft(test_signal):
    return residual(idft(test_signal), ifft(test_signal))


def prop_fft_is_decomposed_dft(test_signal):
    """
    DFT of the even samples followed by the DFT of the odd samples,
    merged by a single combine over the whole length, is the DFT of
    the signal.
    """
    even_spectrum = dft(test_signal[0::2])
    odd_spectrum = dft(test_signal[1::2])

    intermediate_spectrum = torch.cat((even_spectrum, odd_spectrum))
    fft_step_spectrum(intermediate_spectrum)

    return residual(dft(test_signal), intermediate_spectrum)


def prop_reverse_bits(n, max, correct):
    return reverse_bits(n, max) == correct


def prop_constant_is_impulse(test_signal):
    """A constant signal transforms to N * value in bin 0 and nothing else."""
    n = test_signal.shape[0]
    expected = impulse_signal(n, n * complex(test_signal[0].item()), test_signal.dtype)
    return residual(expected, fft(test_signal))


def prop_staged_init_equals_fft_init(fourier, test_signal):
    expected = fft_init(test_signal)
    actual = fourier.init(test_signal)
    return residual(expected, actual)


def prop_staged_step_equals_fft_step(fourier, test_signal, B=1):
    transform_count = test_signal.shape[0] // B
    assert B >= 1

    expected = test_signal.clone()
    fft_step(expected, transform_count // 2, 2 * B)

    actual = fourier.step(test_signal, B)
    return residual(expected, actual)


def prop_staged_equals_fft(fourier, test_signal):
    expected = fft(test_signal)
    actual = fourier.fft(test_signal)
    return residual(expected, actual)

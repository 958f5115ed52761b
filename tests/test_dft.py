"""Tests for the reference DFT and IDFT."""

import torch

from fourier.dft import dft, idft
from fourier.signals import constant_signal, impulse_signal, make_signal, random_signal


class TestDFT:
    def test_empty(self):
        """An empty signal has an empty spectrum."""
        empty = make_signal([])
        assert dft(empty).shape == (0,)
        assert idft(empty).shape == (0,)

    def test_impulse_is_flat(self):
        spectrum = dft(impulse_signal(8))
        assert torch.allclose(spectrum, constant_signal(8), atol=1e-6)

    def test_constant_is_impulse(self):
        spectrum = dft(constant_signal(16))
        assert torch.allclose(spectrum, impulse_signal(16, 16), atol=1e-5)

    def test_matches_torch_fft(self, generator):
        signal = random_signal(300, generator)
        tolerance = 1e-3
        assert torch.allclose(dft(signal), torch.fft.fft(signal), atol=tolerance), "DFT Test Failed."

    def test_matches_torch_ifft(self, generator):
        spectrum = random_signal(100, generator)
        assert torch.allclose(idft(spectrum), torch.fft.ifft(spectrum), atol=1e-5), "IDFT Test Failed."

    def test_round_trip_any_length(self, generator):
        """IDFT inverts DFT for lengths that are not powers of two."""
        signal = random_signal(37, generator)
        assert torch.allclose(idft(dft(signal)), signal, atol=1e-5)

    def test_keeps_dtype(self, generator):
        signal = random_signal(8, generator, dtype=torch.complex128)
        assert dft(signal).dtype == torch.complex128
        assert dft(random_signal(8, generator)).dtype == torch.complex64

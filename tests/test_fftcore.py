"""
Tests for the sequential radix-2 FFT.

Checks the transform against torch.fft, the round trip, the stage
order and the combine rule.
"""

import pytest
import torch

from fourier.bits import bit_reverse_permutation
from fourier.fftcore import W, Q, fft, fft_init, fft_step, fft_step_spectrum, ifft
from fourier.signals import constant_signal, impulse_signal, make_signal, random_signal


class TestFFT:
    def test_matches_torch_fft(self, generator):
        signal = random_signal(512, generator)

        tolerance = 1e-3
        assert torch.allclose(torch.fft.fft(signal), fft(signal), atol=tolerance), "FFT Test Failed."

    def test_ifft_matches_torch_ifft(self, generator):
        spectrum = random_signal(512, generator)

        tolerance = 1e-5
        assert torch.allclose(torch.fft.ifft(spectrum), ifft(spectrum), atol=tolerance), "IFFT Test Failed"

    def test_reversible(self, generator):
        signal = random_signal(1024, generator)
        assert torch.allclose(ifft(fft(signal)), signal, atol=1e-5), "Random input reproducibility test failed!"

    def test_length_two_round_trip(self):
        signal = make_signal([3, 1j])
        assert torch.allclose(fft(signal), make_signal([3 + 1j, 3 - 1j]))
        assert torch.allclose(ifft(fft(signal)), signal)

    @pytest.mark.parametrize("size", [2, 4, 64, 1024])
    def test_constant_input(self, size):
        """A constant transforms to an impulse at DC."""
        assert torch.allclose(fft(constant_signal(size)), impulse_signal(size, size), atol=1e-2)

    def test_zero_input(self):
        assert torch.equal(fft(torch.zeros(16, dtype=torch.complex64)), torch.zeros(16, dtype=torch.complex64))

    def test_trivial_lengths(self):
        one = make_signal([2 - 1j])
        assert torch.equal(fft(one), one)
        assert torch.equal(ifft(one), one)
        assert fft(make_signal([])).shape == (0,)

    def test_rejects_non_power_of_two(self, generator):
        with pytest.raises(ValueError):
            fft(random_signal(12, generator))
        with pytest.raises(ValueError):
            ifft(random_signal(6, generator))

    def test_does_not_mutate_input(self, generator):
        signal = random_signal(32, generator)
        before = signal.clone()
        fft(signal)
        ifft(signal)
        assert torch.equal(signal, before)


class TestStages:
    def test_init_is_bit_reversed(self, generator):
        signal = random_signal(16, generator)
        assert torch.equal(fft_init(signal), signal[bit_reverse_permutation(16)])

    def test_step_spectrum_combine_rule(self, generator):
        """Both halves take their own twiddle: even + W(k, M) * odd."""
        spectrum = random_signal(8, generator)
        even, odd = spectrum[:4].clone(), spectrum[4:].clone()
        j = torch.arange(4)

        fft_step_spectrum(spectrum)

        assert torch.allclose(spectrum[:4], even + W(j, 8) * odd)
        assert torch.allclose(spectrum[4:], even + W(j + 4, 8) * odd)

    def test_symmetric_twiddle_is_butterfly(self, generator):
        """W(j + M/2, M) == -W(j, M), so the update is the usual butterfly."""
        spectrum = random_signal(8, generator)
        even, odd = spectrum[:4].clone(), spectrum[4:].clone()
        j = torch.arange(4)

        fft_step_spectrum(spectrum)

        assert torch.allclose(spectrum[4:], even - W(j, 8) * odd, atol=1e-6)

    def test_step_only_touches_groups(self, generator):
        signal = random_signal(16, generator)
        expected = signal.clone()
        for start in range(0, 16, 4):
            fft_step_spectrum(expected[start : start + 4])

        actual = signal.clone()
        fft_step(actual, 4, 4)
        assert torch.equal(actual, expected)

    def test_twiddles(self):
        k = torch.tensor([0, 1, 2])
        assert torch.allclose(W(k, 4), torch.tensor([1, -1j, -1], dtype=torch.complex64), atol=1e-6)
        assert torch.allclose(Q(k, 4), torch.tensor([1, 1j, -1], dtype=torch.complex64), atol=1e-6)

"""Tests for the staged FFT against the sequential one."""

import pytest
import torch

from fourier.fftcore import fft, fft_init, fft_step
from fourier.oracle import EPS, residual
from fourier.signals import constant_signal, impulse_signal, random_signal
from fourier.staged import Fourier


class TestFourier:
    def test_sizes(self, fourier):
        assert fourier.sample_count == 1024
        assert fourier.byte_count == 1024 * 8
        assert fourier.x_mem.data.shape == (1024, 2)

    def test_init_equals_fft_init(self, fourier, generator):
        signal = random_signal(1024, generator)
        assert torch.equal(fourier.init(signal), fft_init(signal))

    @pytest.mark.parametrize("B", [1, 2, 128, 512])
    def test_step_equals_fft_step(self, fourier, generator, B):
        signal = random_signal(1024, generator)
        expected = signal.clone()
        fft_step(expected, 1024 // (2 * B), 2 * B)

        assert residual(expected, fourier.step(signal, B)) < 1e-5

    def test_fft_equals_sequential_fft(self, fourier, generator):
        signal = random_signal(1024, generator)
        assert residual(fft(signal), fourier.fft(signal)) < EPS

    def test_fft_matches_torch_fft(self, fourier, generator):
        signal = random_signal(1024, generator)
        assert torch.allclose(fourier.fft(signal), torch.fft.fft(signal), atol=1e-2)

    def test_constant_is_impulse(self, fourier):
        assert residual(fourier.fft(constant_signal(1024)), impulse_signal(1024, 1024)) < EPS

    def test_repeatable(self, fourier, generator):
        """Buffers carry no state from one transform to the next."""
        signal = random_signal(1024, generator)
        first = fourier.fft(signal)
        fourier.fft(random_signal(1024, generator))
        assert torch.equal(first, fourier.fft(signal))

    def test_wrong_length(self, fourier, generator):
        with pytest.raises(ValueError):
            fourier.fft(random_signal(512, generator))
        with pytest.raises(ValueError):
            fourier.step(random_signal(2048, generator), 1)


class TestSmallSizes:
    @pytest.mark.parametrize("sample_power", [1, 2, 3, 6])
    def test_matches_sequential(self, backend, generator, sample_power):
        size = 1 << sample_power
        signal = random_signal(size, generator)
        with Fourier(sample_power, backend) as staged:
            assert residual(fft(signal), staged.fft(signal)) < 1e-5

    def test_close_releases_buffers(self, backend):
        staged = Fourier(3, backend)
        staged.close()
        assert staged.x_mem.released
        assert staged.y1_mem.released
        assert staged.y2_mem.released

"""
Fourier - correctness harness for discrete Fourier transforms.

A naive DFT, a sequential radix-2 FFT and a staged FFT running on a
PyTorch device are checked against each other and against the round
trip and even/odd decomposition identities.

Quick Start:
    import torch
    from fourier import ComputeBackend, Fourier, fft, dft, residual, random_signal

    signal = random_signal(1024, torch.Generator().manual_seed(0))
    print(residual(dft(signal), fft(signal)))

    with ComputeBackend("CPU") as backend, Fourier(10, backend) as fourier:
        print(residual(fft(signal), fourier.fft(signal)))
"""

__version__ = "0.1.0"

from .backend import BackendError, Buffer, ComputeBackend, MemFlags, get_devices, get_platforms
from .bits import bit_reverse_permutation, reverse_bits
from .config import HarnessConfig
from .dft import dft, idft
from .fftcore import fft, fft_init, fft_step, fft_step_spectrum, ifft
from .harness import Property, PropertyResult, run, run_properties
from .oracle import EPS, holds, residual
from .signals import constant_signal, from_pairs, make_signal, random_signal, to_pairs
from .staged import Fourier

__all__ = [
    "__version__",
    "BackendError",
    "Buffer",
    "ComputeBackend",
    "MemFlags",
    "get_devices",
    "get_platforms",
    "bit_reverse_permutation",
    "reverse_bits",
    "HarnessConfig",
    "dft",
    "idft",
    "fft",
    "fft_init",
    "fft_step",
    "fft_step_spectrum",
    "ifft",
    "Property",
    "PropertyResult",
    "run",
    "run_properties",
    "EPS",
    "holds",
    "residual",
    "constant_signal",
    "from_pairs",
    "make_signal",
    "random_signal",
    "to_pairs",
    "Fourier",
]

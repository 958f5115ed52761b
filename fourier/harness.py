"""
Property harness.

Evaluates every declared property independently, prints one verdict per
property and returns the collected results. A failing property is
reported and the run carries on; only backend errors stop it.
"""

import argparse
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

import torch

from .backend import BackendError, ComputeBackend, print_platforms
from .bits import print_reverse_bits_table
from .config import HarnessConfig
from .fftcore import fft, ifft
from .oracle import EPS, holds
from .properties import (
    prop_constant_is_impulse,
    prop_dft_equal_fft,
    prop_fft_is_decomposed_dft,
    prop_idft_equal_ifft,
    prop_inverse_dft,
    prop_inverse_fft,
    prop_reverse_bits,
    prop_staged_equals_fft,
    prop_staged_init_equals_fft_init,
    prop_staged_step_equals_fft_step,
)
from .signals import constant_signal, make_signal, random_signal
from .staged import Fourier


@dataclass
class Property:
    name: str
    check: Callable[[], Union[float, bool]]


@dataclass
class PropertyResult:
    name: str
    passed: bool
    residue: Optional[float] = None

    def __str__(self):
        verdict = "PASS" if self.passed else "FAIL"
        if self.residue is None:
            return f"{self.name}: {verdict}"
        return f"{self.name}: {verdict}: residue={self.residue:g}"


def check_residue(name, residue, eps=EPS):
    return PropertyResult(name=name, passed=holds(residue, eps), residue=float(residue))


def check(name, result):
    return PropertyResult(name=name, passed=bool(result))


def evaluate(prop, eps=EPS):
    value = prop.check()
    if isinstance(value, bool):
        return check(prop.name, value)
    return check_residue(prop.name, value, eps)


def run_properties(properties, eps=EPS, verbose=True) -> List[PropertyResult]:
    results = []
    for prop in properties:
        result = evaluate(prop, eps)
        if verbose:
            print(result)
        results.append(result)
    return results


def sequential_properties(generator: torch.Generator, size=1024) -> List[Property]:
    """Properties of the reference and sequential transforms."""
    literal = make_signal([7, 6, 5, 4, 3, 2, 1j, 0])
    short = make_signal([1.1, 1j, 2.1, 3])

    constant = constant_signal(size)
    pair = constant_signal(2)
    random_a = random_signal(size, generator)
    random_b = random_signal(size, generator)
    random_c = random_signal(4, generator)
    random_d = random_signal(size, generator)
    random_e = random_signal(size, generator)
    random_f = random_signal(size, generator)

    return [
        Property(f"prop_inverse_dft(Signal({size}, 1))", lambda: prop_inverse_dft(constant)),
        Property(f"prop_inverse_dft(random_signal({size}))", lambda: prop_inverse_dft(random_a)),
        Property("prop_inverse_fft(Signal(2, 1))", lambda: prop_inverse_fft(pair)),
        Property(f"prop_inverse_fft(Signal({size}, 1))", lambda: prop_inverse_fft(constant)),
        Property(f"prop_inverse_fft(random_signal({size}))", lambda: prop_inverse_fft(random_b)),
        Property(f"prop_dft_equal_fft(Signal({size}, 1))", lambda: prop_dft_equal_fft(constant)),
        Property("prop_dft_equal_fft(random_signal(4))", lambda: prop_dft_equal_fft(random_c)),
        Property(f"prop_dft_equal_fft(random_signal({size}))", lambda: prop_dft_equal_fft(random_d)),
        Property("prop_dft_equal_fft(Signal{7,6,5,4,3,2,i,0})", lambda: prop_dft_equal_fft(literal)),
        Property(f"prop_idft_equal_ifft(random_signal({size}))", lambda: prop_idft_equal_ifft(random_e)),
        Property("prop_idft_equal_ifft(Signal{1.1,i,2.1,3})", lambda: prop_idft_equal_ifft(short)),
        Property("prop_fft_is_decomposed_dft(Signal{7,6,5,4,3,2,i,0})", lambda: prop_fft_is_decomposed_dft(literal)),
        Property(f"prop_fft_is_decomposed_dft(random_signal({size}))", lambda: prop_fft_is_decomposed_dft(random_f)),
        Property("prop_reverse_bits(0xAA, 0x100, 0x55)", lambda: prop_reverse_bits(0xAA, 0x100, 0x55)),
        Property("prop_reverse_bits(0xA5, 0x100, 0xA5)", lambda: prop_reverse_bits(0xA5, 0x100, 0xA5)),
        Property("prop_constant_is_impulse(Signal(2, 1))", lambda: prop_constant_is_impulse(pair)),
        Property(f"prop_constant_is_impulse(Signal({size}, 1))", lambda: prop_constant_is_impulse(constant)),
    ]


def staged_properties(fourier: Fourier, generator: torch.Generator) -> List[Property]:
    """Properties comparing the staged FFT on the backend with the sequential one."""
    size = fourier.sample_count
    signals = [random_signal(size, generator) for _ in range(4)]
    half_span = min(128, size // 2)

    return [
        Property(
            f"prop_staged_init_equals_fft_init(fourier, random_signal({size}))",
            lambda: prop_staged_init_equals_fft_init(fourier, signals[0]),
        ),
        Property(
            f"prop_staged_step_equals_fft_step(fourier, random_signal({size}), 1)",
            lambda: prop_staged_step_equals_fft_step(fourier, signals[1], 1),
        ),
        Property(
            f"prop_staged_step_equals_fft_step(fourier, random_signal({size}), {half_span})",
            lambda: prop_staged_step_equals_fft_step(fourier, signals[2], half_span),
        ),
        Property(
            f"prop_staged_equals_fft(fourier, random_signal({size}))",
            lambda: prop_staged_equals_fft(fourier, signals[3]),
        ),
    ]


def plot_round_trips(fourier, generator, plot_dir):
    from .plotting import visualize_signals

    plot_dir.mkdir(parents=True, exist_ok=True)
    signal = random_signal(fourier.sample_count, generator)

    visualize_signals(signal, ifft(fft(signal)), "FFT round trip", plot_dir / "fft_round_trip.png")
    visualize_signals(fft(signal), fourier.fft(signal), "Sequential vs staged spectrum", plot_dir / "staged_spectrum.png")


def run(config: HarnessConfig) -> List[PropertyResult]:
    """Run every property for `config`. Backend failures propagate as BackendError."""
    generator = torch.Generator().manual_seed(config.seed)

    with ComputeBackend(
        config.platform, config.device, config.kernels, verbose=config.verbose
    ) as backend, Fourier(config.sample_power, backend) as fourier:
        results = run_properties(sequential_properties(generator), config.eps)
        results += run_properties(staged_properties(fourier, generator), config.eps)

        if config.plot_dir is not None:
            plot_round_trips(fourier, generator, config.plot_dir)

    return results


def create_cli_arguments(argv=None):
    """Parse command line arguments with argparse."""
    parser = argparse.ArgumentParser(
        description="Check a reference DFT, a sequential radix-2 FFT and a "
        "staged device FFT against each other."
    )
    parser.add_argument("--platform", default=None, help="Compute platform: CPU, CUDA or MPS (default: $FOURIER_PLATFORM or CPU)")
    parser.add_argument("--device", default=None, help="Device name on the platform (default: first device)")
    parser.add_argument("--kernels", default=None, help="Import path of the kernel module (default: fourier.kernels)")
    parser.add_argument("--sample-power", type=int, default=None, help="Staged FFT size as a power of two (default: 10)")
    parser.add_argument("--seed", type=int, default=None, help="Random signal seed (default: 0)")
    parser.add_argument("--eps", type=float, default=None, help="Residue tolerance (default: 0.01)")
    parser.add_argument("--plot-dir", default=None, help="Write round-trip plots to this directory")
    parser.add_argument("--list-platforms", action="store_true", help="Print platforms and devices, then exit")
    parser.add_argument("--print-reverse-bits", action="store_true", help="Print the 8-bit reversal table, then exit")
    parser.add_argument("--verbose", action="store_true", default=None, help="Print backend details")
    return parser.parse_args(argv)


def main(argv=None):
    args = create_cli_arguments(argv)

    if args.list_platforms:
        print_platforms()
        return 0
    if args.print_reverse_bits:
        print_reverse_bits_table()
        return 0

    config = HarnessConfig.build(
        platform=args.platform,
        device=args.device,
        kernels=args.kernels,
        sample_power=args.sample_power,
        seed=args.seed,
        eps=args.eps,
        plot_dir=args.plot_dir,
        verbose=args.verbose,
    )

    try:
        results = run(config)
    except BackendError as err:
        print(f"ERROR: {err}")
        return 1

    failed = [result for result in results if not result.passed]
    print(f"{len(results) - len(failed)}/{len(results)} properties passed")
    return 1 if failed else 0

"""Harness configuration."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .oracle import EPS

DEFAULT_PLATFORM = "CPU"


def default_platform() -> str:
    """Platform from FOURIER_PLATFORM, falling back to CPU."""
    return os.environ.get("FOURIER_PLATFORM", DEFAULT_PLATFORM).upper()


@dataclass
class HarnessConfig:
    """
    Options for one harness run.

    Parameters                          Choice
    =============================       ======================================
     platform : str                     "CPU" | "CUDA" | "MPS"
     device : str | None                device name, first device when None
     kernels : str                      import path of the kernel module
     sample_power : int                 staged FFT size is 2**sample_power
     seed : int                         seed of the random signal generator
     eps : float                        residue tolerance
     plot_dir : Path | None             where round-trip plots are written
     verbose : bool                     print platforms and device choice
    =============================       ======================================
    """
    platform: str = DEFAULT_PLATFORM
    device: Optional[str] = None
    kernels: str = "fourier.kernels"
    sample_power: int = 10
    seed: int = 0
    eps: float = EPS
    plot_dir: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        self.platform = self.platform.upper()
        if self.sample_power < 1:
            raise ValueError(f"sample_power must be at least 1, got {self.sample_power}.")
        if self.eps <= 0:
            raise ValueError(f"eps must be positive, got {self.eps}.")
        if self.plot_dir is not None:
            self.plot_dir = Path(self.plot_dir)

    @property
    def sample_count(self) -> int:
        return 1 << self.sample_power

    @staticmethod
    def build(**options) -> "HarnessConfig":
        """Config from keyword options; unset (None) options keep their defaults."""
        known = {f.name for f in fields(HarnessConfig)}
        unknown = set(options) - known
        if unknown:
            raise ValueError(f"Unknown options: {', '.join(sorted(unknown))}.")

        values = {k: v for k, v in options.items() if v is not None}
        values.setdefault("platform", default_platform())
        return HarnessConfig(**values)

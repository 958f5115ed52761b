"""
Pytest configuration for the fourier tests.

Puts the repository root on the path so the tests run from a checkout,
and forces a non-interactive matplotlib backend.
"""

import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

import pytest  # noqa: E402
import torch  # noqa: E402

from fourier.backend import ComputeBackend  # noqa: E402
from fourier.staged import Fourier  # noqa: E402


@pytest.fixture
def generator():
    return torch.Generator().manual_seed(0)


@pytest.fixture(scope="module")
def backend():
    with ComputeBackend("CPU") as cpu_backend:
        yield cpu_backend


@pytest.fixture
def fourier(backend):
    with Fourier(10, backend) as staged:
        yield staged

"""
Data-parallel kernels for the staged FFT.

Every kernel receives `gid`, the tensor of global work-item indices, as
its last argument and computes all work items of one launch at once.
Buffers are (N, 2) float32 complex pairs. The backend compiles these
functions with TorchScript before the first launch.
"""

import math

import torch
from torch import Tensor

KERNEL_NAMES = ("fft_init", "fft_step")


def fft_init(x: Tensor, sample_power: int, y: Tensor, gid: Tensor) -> None:
    # y[i] = x[reverse_bits(i)] over sample_power bits
    rev = torch.zeros_like(gid)
    n = gid.clone()
    for _ in range(sample_power):
        rev = rev * 2 + torch.remainder(n, 2)
        n = torch.div(n, 2, rounding_mode="floor")

    y.index_copy_(0, gid, x.index_select(0, rev))


def fft_step(y: Tensor, B: int, y_: Tensor, gid: Tensor) -> None:
    # groups of 2B samples; work item gid writes exactly y_[gid]
    span = 2 * B
    k = torch.remainder(gid, span)
    base = gid - k
    j = torch.remainder(k, B)

    even = y.index_select(0, base + j)
    odd = y.index_select(0, base + j + B)

    angle = k.to(torch.float32) * (-2.0 * math.pi / span)
    wr = torch.cos(angle)
    wi = torch.sin(angle)

    real = even[:, 0] + wr * odd[:, 0] - wi * odd[:, 1]
    imag = even[:, 1] + wr * odd[:, 1] + wi * odd[:, 0]

    y_.index_copy_(0, gid, torch.stack((real, imag), dim=1))

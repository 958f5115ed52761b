import torch

EPS = 0.01


def residual(a, b):
    """RMS magnitude of the error signal a - b."""
    if a.shape[0] != b.shape[0]:
        raise ValueError(f"Signal lengths differ: {a.shape[0]} != {b.shape[0]}.")
    if a.shape[0] == 0:
        return 0.0

    e = a.to(torch.complex128) - b.to(torch.complex128)
    return torch.sqrt(torch.sum(e * e.conj()).real / e.shape[0]).item()


def holds(residue, eps=EPS):
    return residue < eps

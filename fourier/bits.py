import torch


def is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def log2(n):
    """Exact base-2 logarithm of a power of two."""
    if not is_power_of_two(n):
        raise ValueError(f"Expected a power of two, got {n}.")
    return n.bit_length() - 1


def reverse_bits(n, max):
    """
    Reverse the low log2(max) bits of n.

    `max` must be a power of two. reverse_bits(0xAA, 0x100) == 0x55.
    """
    result = 0
    i = 1
    while i != max:
        result = (result << 1) | (n & 1)
        n >>= 1
        i <<= 1
    return result


def bit_reverse_permutation(n):
    """Index tensor mapping position i to reverse_bits(i, n)."""
    indices = torch.arange(n)
    reversed_indices = torch.zeros_like(indices)

    for i in range(n):
        reversed_indices[i] = reverse_bits(i, n)

    return reversed_indices


def reverse_bits_table(max=0x100, columns=16):
    rows = []
    for row in range(max // columns):
        cells = [
            f"{reverse_bits(row * columns + column, max):02x}"
            for column in range(columns)
        ]
        rows.append(" ".join(cells))
    return "\n".join(rows)


def print_reverse_bits_table(max=0x100, columns=16):
    print(reverse_bits_table(max, columns))

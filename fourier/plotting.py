import matplotlib.pyplot as plt


def visualize_signals(original_signal, reconstructed_signal, title="Signal Comparison", save_path=None):
    """
    Plot the original and reconstructed signals on top of each other.

    Args:
        original_signal (torch.Tensor): complex signal of shape (N,).
        reconstructed_signal (torch.Tensor): complex signal of shape (N,).
        title (str): Title for the plot.
        save_path (Path or None): figure is written here; shown when None.
    """
    original_signal = original_signal.detach().cpu().numpy()
    reconstructed_signal = reconstructed_signal.detach().cpu().numpy()

    fig = plt.figure(figsize=(12, 6))

    # Plot real part
    plt.subplot(2, 1, 1)
    plt.plot(original_signal.real, label="Original Signal (Re)", alpha=0.7)
    plt.plot(
        reconstructed_signal.real,
        label="Reconstructed Signal (Re)",
        linestyle="dashed",
        alpha=0.7,
    )
    plt.title(f"{title} - Real")
    plt.legend()
    plt.grid(True)

    # Plot imaginary part
    plt.subplot(2, 1, 2)
    plt.plot(original_signal.imag, label="Original Signal (Im)", alpha=0.7)
    plt.plot(
        reconstructed_signal.imag,
        label="Reconstructed Signal (Im)",
        linestyle="dashed",
        alpha=0.7,
    )
    plt.title(f"{title} - Imaginary")
    plt.legend()
    plt.grid(True)

    plt.tight_layout()
    if save_path is None:
        plt.show()
    else:
        plt.savefig(save_path)
    plt.close(fig)

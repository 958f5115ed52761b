"""
Compute backend for the staged FFT.

A thin device layer over PyTorch: it enumerates the available
platforms and devices, compiles the kernel module with TorchScript,
owns device buffers of complex pairs, copies between host and device,
launches kernels over a range of global work items and waits for the
device to drain.

Any failure to acquire or drive the device raises `BackendError`. These
are fatal for the caller and are never retried.
"""

import enum
import importlib
from dataclasses import dataclass, field

import torch


class BackendError(RuntimeError):
    pass


class MemFlags(enum.Enum):
    READ_ONLY = "read_only"
    WRITE_ONLY = "write_only"
    READ_WRITE = "read_write"


@dataclass(eq=False)
class Buffer:
    data: torch.Tensor
    flags: MemFlags
    label: str = ""
    released: bool = field(default=False)

    @property
    def sample_count(self):
        return self.data.shape[0]

    @property
    def byte_count(self):
        return self.data.numel() * self.data.element_size()


def get_platforms():
    """Map of platform name to version string for every usable platform."""
    platforms = {"CPU": torch.__version__}
    if torch.cuda.is_available():
        platforms["CUDA"] = str(torch.version.cuda)
    mps = getattr(torch.backends, "mps", None)
    if mps is not None and mps.is_available():
        platforms["MPS"] = torch.__version__
    return platforms


def get_devices(platform):
    if platform == "CPU":
        return ["cpu"]
    if platform == "CUDA":
        return [torch.cuda.get_device_name(i) for i in range(torch.cuda.device_count())]
    if platform == "MPS":
        return ["mps"]
    return []


def print_platforms():
    for name, version in get_platforms().items():
        print(f"{name}: version='{version}'")
        for index, device in enumerate(get_devices(name)):
            print(f"  {index}: name='{device}'")


def _torch_device(platform, index):
    if platform == "CUDA":
        return torch.device("cuda", index)
    if platform == "MPS":
        return torch.device("mps")
    return torch.device("cpu")


class ComputeBackend:
    """
    Device, compiled kernels and buffers for one platform.

    Args:
        platform (str): platform name as listed by `get_platforms`,
            case insensitive.
        device (str or None): device name as listed by `get_devices`.
            The first device of the platform is used when None.
        kernels (str): import path of the kernel module. The module
            lists its kernels in `KERNEL_NAMES`.
        verbose (bool): print the platform list and the chosen device.
    """

    def __init__(self, platform="CPU", device=None, kernels="fourier.kernels", verbose=False):
        self.verbose = verbose
        self.platform = platform.upper()
        self._buffers = []
        self._kernels = {}

        if self.verbose:
            print_platforms()

        platforms = get_platforms()
        if self.platform not in platforms:
            raise BackendError(f"Could not find platform: '{platform}'.")

        devices = get_devices(self.platform)
        if not devices:
            raise BackendError(f"Could not find device on platform '{self.platform}'.")
        if device is None:
            index = 0
        elif device in devices:
            index = devices.index(device)
        else:
            raise BackendError(f"Could not find device: '{device}'.")

        self.device_name = devices[index]
        self.device = _torch_device(self.platform, index)

        if self.verbose:
            print(f"Using {self.platform} device '{self.device_name}' ({self.device})")

        self._build_program(kernels)

    def _build_program(self, kernels):
        try:
            module = importlib.import_module(kernels)
        except ImportError as err:
            raise BackendError(f"Could not read kernel module: {kernels}") from err

        names = getattr(module, "KERNEL_NAMES", None)
        if not names:
            raise BackendError(f"Kernel module {kernels} declares no KERNEL_NAMES.")

        for name in names:
            function = getattr(module, name, None)
            if function is None:
                raise BackendError(f"Could not create {name} kernel.")
            try:
                self._kernels[name] = torch.jit.script(function)
            except Exception as err:
                # build log
                print(err)
                raise BackendError("Could not build program.") from err

    @property
    def kernel_names(self):
        return tuple(self._kernels)

    def create_buffer(self, sample_count, flags=MemFlags.READ_WRITE, label=""):
        try:
            data = torch.zeros((sample_count, 2), dtype=torch.float32, device=self.device)
        except RuntimeError as err:
            raise BackendError(f"Could not create {label} buffer.") from err

        buffer = Buffer(data=data, flags=flags, label=label)
        self._buffers.append(buffer)
        return buffer

    def _check_live(self, buffer):
        if buffer.released:
            raise BackendError(f"Buffer {buffer.label} was already released.")

    def write(self, buffer, pairs):
        """Blocking host to device copy over the whole buffer."""
        self._check_live(buffer)
        if tuple(pairs.shape) != tuple(buffer.data.shape):
            raise ValueError(
                f"Host data of shape {tuple(pairs.shape)} does not fit "
                f"buffer {buffer.label} of shape {tuple(buffer.data.shape)}."
            )
        try:
            buffer.data.copy_(pairs.to(torch.float32), non_blocking=False)
        except RuntimeError as err:
            raise BackendError("Could not write to buffer.") from err

    def read(self, buffer):
        """Blocking device to host copy of the whole buffer."""
        self._check_live(buffer)
        try:
            return buffer.data.to("cpu", copy=True)
        except RuntimeError as err:
            raise BackendError("Could not read buffer.") from err

    def run_kernel(self, name, args, global_work_size):
        kernel = self._kernels.get(name)
        if kernel is None:
            raise BackendError(f"Could not find kernel: '{name}'.")

        call_args = []
        for arg in args:
            if isinstance(arg, Buffer):
                self._check_live(arg)
                call_args.append(arg.data)
            else:
                call_args.append(arg)

        gid = torch.arange(global_work_size, dtype=torch.int64, device=self.device)
        try:
            kernel(*call_args, gid)
        except (RuntimeError, IndexError, TypeError) as err:
            if self.verbose:
                print(err)
            raise BackendError("Could not enqueue kernel.") from err

    def finish(self):
        """Block until all queued device work has completed."""
        try:
            if self.device.type == "cuda":
                torch.cuda.synchronize(self.device)
            elif self.device.type == "mps":
                torch.mps.synchronize()
        except RuntimeError as err:
            raise BackendError("Could not finish.") from err

    def release(self, buffer):
        if buffer.released:
            return
        buffer.released = True
        buffer.data = torch.empty(0)
        if buffer in self._buffers:
            self._buffers.remove(buffer)

    def close(self):
        for buffer in list(self._buffers):
            self.release(buffer)
        self._kernels.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

"""Runtime configuration and Taichi initialization.

All kernels in this package compute in 64-bit floats, so Taichi must be
initialized with ``default_fp=ti.f64`` before any module that declares
fields is imported. ``init_taichi`` takes care of that.

Example:
    >>> from spheretracer.config import RenderConfig, init_taichi
    >>> config = RenderConfig.from_env()
    >>> init_taichi(config)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import taichi as ti

logger = logging.getLogger(__name__)

# Backends accepted by RenderConfig.arch
SUPPORTED_ARCHS = ("cpu", "gpu", "cuda", "vulkan")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RenderConfig:
    """Configuration for the rendering runtime.

    Attributes:
        arch: Taichi backend name, one of SUPPORTED_ARCHS.
        parallelism: Default number of image bands rendered concurrently.
        cpu_max_num_threads: Size of Taichi's CPU thread pool. None lets
            Taichi pick the number of hardware threads.
        debug: Enable Taichi's debug mode (bounds checks in kernels).
    """

    arch: str = "cpu"
    parallelism: int = 1
    cpu_max_num_threads: int | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        if self.arch not in SUPPORTED_ARCHS:
            raise ValueError(
                f"Unsupported arch {self.arch!r}, expected one of {', '.join(SUPPORTED_ARCHS)}"
            )
        if self.parallelism < 1:
            self.parallelism = 1

    @classmethod
    def from_env(cls) -> RenderConfig:
        """Build a config from SPHERETRACER_* environment variables.

        Unset variables keep the dataclass defaults.
        """
        kwargs: dict[str, object] = {}
        arch = os.environ.get("SPHERETRACER_ARCH")
        if arch:
            kwargs["arch"] = arch.strip().lower()
        jobs = os.environ.get("SPHERETRACER_JOBS")
        if jobs:
            kwargs["parallelism"] = int(jobs)
        threads = os.environ.get("SPHERETRACER_THREADS")
        if threads:
            kwargs["cpu_max_num_threads"] = int(threads)
        debug = os.environ.get("SPHERETRACER_DEBUG")
        if debug:
            kwargs["debug"] = _env_bool(debug)
        return cls(**kwargs)  # type: ignore[arg-type]


def init_taichi(config: RenderConfig | None = None) -> None:
    """Initialize the Taichi runtime for rendering.

    GPU backends that fail to initialize fall back to the CPU backend.

    Args:
        config: Runtime configuration. Defaults to RenderConfig().
    """
    if config is None:
        config = RenderConfig()

    kwargs: dict[str, object] = {"default_fp": ti.f64, "debug": config.debug}
    if config.cpu_max_num_threads is not None:
        kwargs["cpu_max_num_threads"] = config.cpu_max_num_threads

    if config.arch != "cpu":
        try:
            ti.init(arch=getattr(ti, config.arch), **kwargs)
            logger.info("Using %s backend", config.arch)
            return
        except Exception as e:
            logger.warning(
                "Could not initialize %s backend (%s), falling back to CPU", config.arch, e
            )

    ti.init(arch=ti.cpu, **kwargs)
    logger.info("Using CPU backend")

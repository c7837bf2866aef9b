# gpwarp/config.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Package-wide settings: version, numerical backend, dtype, seed, caches
and the ``gpwarp`` logger.

There is a single configuration object, returned by :func:`get_config`.
"""
import os
import logging

_SUPPORTED_BACKENDS = ("numpy",)
_ENV_BACKEND = "GPWARP_BACKEND"


def _read_version():
    path = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "VERSION"))
    try:
        with open(path, "r") as f:
            return f.read().strip()
    except FileNotFoundError:
        return "0.0.0"


def _make_logger():
    logger = logging.getLogger("gpwarp")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger


class _GPWarpConfig:
    def __init__(self):
        self.version = _read_version()
        self.backend = None
        self.dtype = float
        self.dtype_resolved = None
        self.seed = 1234
        self.caches = {}
        self.logger = _make_logger()

    def _fields(self):
        return (
            ("version", self.version),
            ("backend", self.backend),
            ("dtype", self.dtype),
            ("seed", self.seed),
            ("caches", sorted(self.caches)),
        )

    def __repr__(self):
        body = ", ".join(f"{k}={v!r}" for k, v in self._fields())
        return f"<GPWarpConfig {body}>"

    def __str__(self):
        body = ", ".join(f"{k}={v}" for k, v in self._fields())
        return f"GPWarpConfig({body})"

    def update(self, **kwargs):
        for name, value in kwargs.items():
            setattr(self, name, value)
        return self

    def clear_caches(self, name=None):
        if name is None:
            self.caches.clear()
        else:
            self.caches.pop(name, None)


_config = _GPWarpConfig()
__version__ = _config.version


def get_config():
    return _config


def _normalize_dtype_spec(dtype):
    """Return "float64" or "float32" for a dtype given as type, name or numpy dtype."""
    if dtype is None or dtype is float:
        return "float64"
    name = str(getattr(dtype, "__name__", dtype))
    for prefix in ("numpy.", "<class '"):
        name = name.replace(prefix, "")
    name = name.rstrip("'>")
    if name in ("float", "double", "float64"):
        return "float64"
    if name in ("single", "float32"):
        return "float32"
    raise ValueError(f"Unsupported dtype: {dtype!r}")


def _check_backend(backend):
    if backend not in _SUPPORTED_BACKENDS:
        raise ValueError(
            f"{_ENV_BACKEND}={backend!r} is not supported; "
            f"use one of {_SUPPORTED_BACKENDS}."
        )
    return backend


def init_backend():
    """Select the backend once, from ``GPWARP_BACKEND`` (default "numpy")."""
    if _config.backend is None:
        set_backend(_check_backend(os.environ.get(_ENV_BACKEND, "numpy")))
    return _config.backend


def set_backend(backend: str):
    """Force the backend; call before ``gpwarp.num`` is imported."""
    _config.backend = _check_backend(backend)
    os.environ[_ENV_BACKEND] = backend


def get_backend():
    return init_backend()


def set_dtype(dtype):
    _normalize_dtype_spec(dtype)
    _config.dtype = dtype


def clear_caches(name=None):
    _config.clear_caches(name)


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)

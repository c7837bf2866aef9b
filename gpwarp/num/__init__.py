# gpwarp/num/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Numerical namespace of gpwarp, imported as ``gnp``.

The backend is selected once by ``gpwarp.config.init_backend``; its
public names are copied into this module.
"""
from gpwarp.config import init_backend

from . import shared as _shared

if init_backend() != "numpy":
    raise RuntimeError("gpwarp.num only provides the 'numpy' backend")

from . import numpy_backend as _backend

for _name in dir(_backend):
    if not _name.startswith("__"):
        globals()[_name] = getattr(_backend, _name)
del _name

compute_gammaln = _shared.compute_gammaln
derivative_finite_diff = _shared.derivative_finite_diff

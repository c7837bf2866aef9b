# gpwarp/num/shared.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Helpers written on top of the backend API, shared by all backends."""
from gpwarp.config import get_config


def compute_gammaln(up_to_p: int):
    """Table of ``gammaln(k)`` for ``k = 0, ..., 2 * up_to_p + 1``.

    The table is kept in ``get_config().caches["gammaln"]`` and only
    recomputed when a larger ``p`` is requested.
    """
    import gpwarp.num as gnp

    n = 2 * up_to_p + 2
    cache = get_config().caches.setdefault("gammaln", {})
    if cache.get("table") is None or cache["table"].shape[0] < n:
        cache["table"] = gnp.asarray(gnp.gammaln(gnp.arange(n)))
    return cache["table"][:n]


def derivative_finite_diff(f, x, h):
    """Derivative of ``f`` at scalar ``x`` by the 5-point central stencil."""
    return (-f(x + 2 * h) + 8 * f(x + h) - 8 * f(x - h) + f(x - 2 * h)) / (12.0 * h)

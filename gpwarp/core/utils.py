# gpwarp/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Helpers shared by the `gpwarp.core` modules: input shapes, mean
validation, the +inf energy and string-valued energy options.
"""
import gpwarp.num as gnp


def ensure_shapes_and_type(*, xi=None, zi=None, xt=None, convert=True):
    """Convert and check training points, labels and prediction points.

    Points are returned as (n, d) arrays (a 1D array is read as n points
    in dimension 1) and labels as (n,) vectors. Row counts of ``xi`` and
    ``zi`` and column counts of ``xi`` and ``xt`` must agree.

    Returns
    -------
    tuple
        ``(xi, zi, xt)``, ``None`` where not given.
    """
    if convert:
        xi, zi, xt = (None if a is None else gnp.asarray(a) for a in (xi, zi, xt))

    xi = _as_points(xi, "xi")
    xt = _as_points(xt, "xt")

    if zi is not None:
        if zi.ndim == 2 and zi.shape[1] == 1:
            zi = zi.reshape(-1)
        assert zi.ndim == 1, "zi should be a vector or a single column"

    if xi is not None and zi is not None:
        assert xi.shape[0] == zi.shape[0], "xi and zi must have the same number of rows"
    if xi is not None and xt is not None:
        assert xi.shape[1] == xt.shape[1], "xi and xt must have the same number of columns"

    return xi, zi, xt


def _as_points(x, name):
    if x is None:
        return None
    if x.ndim == 1:
        x = x.reshape(-1, 1)
    assert x.ndim == 2, f"{name} should be a 2D array"
    return x


def validate_model_mean(meantype, mean, meanparam):
    """Check that ``mean`` and ``meanparam`` agree with ``meantype``.

    Raises
    ------
    ValueError
        Unknown ``meantype``, a mean given for a zero-mean model, or a
        parameterized mean without ``meanparam``.
    TypeError
        A parameterized mean that is not callable.
    """
    if meantype == "zero":
        if mean is not None:
            raise ValueError("A zero-mean model takes mean=None")
    elif meantype == "parameterized":
        if not callable(mean):
            raise TypeError("A parameterized mean must be callable")
        if meanparam is None:
            raise ValueError("A parameterized mean needs meanparam")
    else:
        raise ValueError("meantype must be 'zero' or 'parameterized'")


def return_inf():
    return gnp.safe_inf()


def parse_jitter(options):
    """Float value of ``options["jitter"]`` (0.0 when absent)."""
    if not options or "jitter" not in options:
        return 0.0
    jitter = float(options["jitter"])
    if jitter < 0.0:
        raise ValueError(f"jitter must be nonnegative, got {jitter}")
    return jitter

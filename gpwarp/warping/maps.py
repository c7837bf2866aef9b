# gpwarp/warping/maps.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Standard warps.

Each factory returns a :class:`PushforwardMap` whose ``forward`` sends
latent GP values to observations. All maps are strictly increasing.

identity_map()
    x -> x.
exp_map()
    x -> exp(x), for positive observations.
affine_map(scale, shift)
    x -> scale * x + shift, scale > 0.
sinh_arcsinh_map(epsilon, delta)
    Jones & Pewsey (2009) skew/tail warp; the inverse
    y -> sinh(delta * arcsinh(y) - epsilon) Gaussianizes y.
box_cox_map(lmbda)
    Forward is the inverse Box-Cox transform; the inverse is the
    Box-Cox transform of positive observations.
"""
import gpwarp.num as gnp
from .pushforward import PushforwardMap


def identity_map():
    return PushforwardMap(
        lambda x: x,
        lambda y: y,
        lambda y: gnp.ones(gnp.asdouble(y).shape),
        name="identity",
    )


def exp_map():
    return PushforwardMap(
        gnp.exp,
        gnp.log,
        lambda y: 1.0 / gnp.asdouble(y),
        domain=(0.0, gnp.inf),
        name="exp",
    )


def affine_map(scale=1.0, shift=0.0):
    scale = float(scale)
    shift = float(shift)
    if not scale > 0.0:
        raise ValueError(f"scale must be positive, got {scale}")
    return PushforwardMap(
        lambda x: scale * gnp.asdouble(x) + shift,
        lambda y: (gnp.asdouble(y) - shift) / scale,
        lambda y: gnp.full(gnp.asdouble(y).shape, 1.0 / scale),
        name=f"affine({scale:g},{shift:g})",
    )


def sinh_arcsinh_map(epsilon=0.0, delta=1.0):
    """Sinh-arcsinh warp with skewness ``epsilon`` and tail weight ``delta``."""
    epsilon = float(epsilon)
    delta = float(delta)
    if not delta > 0.0:
        raise ValueError(f"delta must be positive, got {delta}")

    def forward(x):
        return gnp.sinh((gnp.arcsinh(x) + epsilon) / delta)

    def inverse(y):
        return gnp.sinh(delta * gnp.arcsinh(y) - epsilon)

    def jacobian(y):
        y = gnp.asdouble(y)
        return delta * gnp.cosh(delta * gnp.arcsinh(y) - epsilon) / gnp.sqrt(1.0 + y**2)

    return PushforwardMap(
        forward, inverse, jacobian, name=f"sinh_arcsinh({epsilon:g},{delta:g})"
    )


def box_cox_map(lmbda=0.0):
    """Box-Cox warp; ``lmbda = 0`` is the log warp.

    For ``lmbda != 0`` the forward map saturates at 0 where
    ``lmbda * x + 1 <= 0``.
    """
    lmbda = float(lmbda)
    if lmbda == 0.0:
        m = exp_map()
        m.name = "box_cox(0)"
        return m

    def forward(x):
        base = gnp.maximum(lmbda * gnp.asdouble(x) + 1.0, 0.0)
        return gnp.power(base, 1.0 / lmbda)

    def inverse(y):
        return gnp.expm1(lmbda * gnp.log(y)) / lmbda

    def jacobian(y):
        return gnp.power(gnp.asdouble(y), lmbda - 1.0)

    return PushforwardMap(
        forward, inverse, jacobian, domain=(0.0, gnp.inf), name=f"box_cox({lmbda:g})"
    )

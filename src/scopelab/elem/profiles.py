#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Functions for conic surface profiles

    A conic of vertex radius `R` and conic constant `K` has the unsigned sag

        s(r) = r**2 / (R*(1 + sqrt(1 - (1+K)*r**2/R**2)))

    which only exists where the radicand is positive. Outside that domain the
    functions here return nan; callers treat nan as "no surface here".

    A placed conic surface adds a vertex position `z0` and a `sag_sign` that
    selects which way the surface bulges: z = z0 + sag_sign*s(r).

.. Created on Mon Oct 19 13:05:48 2026

.. codeauthor: ScopeLab Developers
"""
from math import sqrt, isfinite

import numpy as np

from scopelab.util.misc_math import normalize, vec3

nan = float('nan')


def sag(r, R, K):
    """ unsigned conic sag at radial height `r`, or nan """
    R2 = R*R
    if not isfinite(R2) or R2 <= 0:
        return nan
    inside = 1 - (1 + K)*r*r/R2
    if not inside > 0:
        return nan
    return r*r/(R*(1 + sqrt(inside)))


def dsag_dr(r, R, K):
    """ derivative of the unsigned conic sag with respect to `r`, or nan """
    R2 = R*R
    if not isfinite(R2) or R2 <= 0:
        return nan
    inside = 1 - (1 + K)*r*r/R2
    if not inside > 0:
        return nan
    s = sqrt(inside)
    A = r*r/R
    dA = 2*r/R
    denom = 1 + s
    ddenom = -(1 + K)*r/(R2*s)
    return (dA*denom - A*ddenom)/(denom*denom)


def sag_z(srf, x, y):
    """ the z coordinate of conic surface `srf` above the point (x, y) """
    r = sqrt(x*x + y*y)
    return srf.z0 + srf.sag_sign*sag(r, srf.R, srf.K)


def conic_normal(srf, p):
    """ unit normal of conic surface `srf` at the point `p`

    The normal is the gradient of z - z0 - sag_sign*s(r), so it always has
    a positive z component. On axis, or where the slope is undefined, the
    normal is the optical axis.
    """
    x, y = p[0], p[1]
    r = sqrt(x*x + y*y)
    ds = dsag_dr(r, srf.R, srf.K)
    if r == 0 or not isfinite(ds):
        return vec3(0., 0., 1.)
    slope = srf.sag_sign*ds
    return normalize(np.array([-slope*x/r, -slope*y/r, 1.]))

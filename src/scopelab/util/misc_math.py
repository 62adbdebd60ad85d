#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" miscellaneous functions for working with numpy vectors and floats

    Points and directions are numpy arrays of 3 floats. The functions here
    always return new arrays and never modify their arguments.

.. Created on Mon Oct 19 09:12:41 2026

.. codeauthor: ScopeLab Developers
"""
import numpy as np
from numpy.linalg import norm
from math import isfinite


def vec3(x, y, z):
    """ return a 3 element float vector """
    return np.array([x, y, z], dtype=float)


def normalize(v):
    """ return normalized version of input vector v """
    length = norm(v)
    if length == 0.0:
        return v
    else:
        return v/length


def plane_basis(n):
    """ return a pair of orthonormal vectors (u, v) spanning the plane normal
    to `n`

    The seed axis is chosen away from `n` so the cross product stays well
    conditioned.
    """
    if abs(n[2]) < 0.9:
        a = vec3(0., 0., 1.)
    else:
        a = vec3(1., 0., 0.)
    u = normalize(np.cross(a, n))
    v = normalize(np.cross(n, u))
    return u, v


def is_finite_positive(x) -> bool:
    return x is not None and isfinite(x) and x > 0


def is_finite_nonneg(x) -> bool:
    return x is not None and isfinite(x) and x >= 0


def clamp01(x: float) -> float:
    """ clamp `x` to [0, 1]; non-finite values map to 0 """
    if not isfinite(x):
        return 0.
    return min(1., max(0., x))

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Module for optical surface related classes

    ConicSurface
        A rotationally symmetric conic about the z axis, with its vertex at
        `z0`.

    PlaneSurface
        A plane through a point `p0` with unit normal `n_hat`; used for flat
        mirrors, corrector windows, baffles and the sensor.

    Circular
        Circular aperture, optionally annular.

    Material
        How a ray interacts on hit: a reflector bounces, a transmitter passes
        the ray through unchanged and an absorber stops it.

    The surface set is closed, so the ray tracer dispatches on the surface
    type with a lookup table rather than methods on a common base class.

.. Created on Mon Oct 19 13:48:10 2026

.. codeauthor: ScopeLab Developers
"""

import numpy as np
import attr

import scopelab.optical.model_constants as mc
from scopelab.util.misc_math import normalize

REFLECTOR, TRANSMITTER, ABSORBER = 'reflector', 'transmitter', 'absorber'


@attr.s(frozen=True)
class Material:
    """ interaction tag; coefficient is the reflectivity or transmission """
    kind = attr.ib(validator=attr.validators.in_(
        (REFLECTOR, TRANSMITTER, ABSORBER)))
    coefficient = attr.ib(default=0.)


def reflector(reflectivity=1.0):
    if not 0 < reflectivity <= 1:
        raise ValueError(f"reflectivity must lie in (0, 1], "
                         f"got {reflectivity}")
    return Material(REFLECTOR, reflectivity)


def transmitter(transmission=1.0):
    return Material(TRANSMITTER, transmission)


def absorber():
    return Material(ABSORBER)


def _nonneg(instance, attribute, value):
    if not value >= 0:
        raise ValueError(f"{attribute.name} must be non-negative, "
                         f"got {value}")


@attr.s(frozen=True)
class Circular:
    """ circular aperture of `radius`, excluding the hole of `inner_radius` """
    radius = attr.ib(validator=_nonneg)
    inner_radius = attr.ib(default=0., validator=_nonneg)

    def listobj_str(self):
        o_str = f"ca: radius={self.radius}"
        if self.inner_radius > 0:
            o_str += f" inner radius={self.inner_radius}"
        return o_str + "\n"

    def point_inside(self, x: float, y: float,
                     fuzz: float = mc.APERTURE_FUZZ) -> bool:
        r2 = x*x + y*y
        if r2 > self.radius*self.radius + fuzz:
            return False
        if self.inner_radius > 0 and r2 < self.inner_radius*self.inner_radius:
            return False
        return True


@attr.s(frozen=True)
class ConicSurface:
    """ Conic mirror or window, symmetric about the z axis

    Attributes:
        id: label reported in trace segments
        z0: axial position of the vertex
        R: vertex radius of curvature, a positive magnitude
        K: conic constant; -1 is a paraboloid, < -1 a hyperboloid
        sag_sign: +1 if the surface bends toward +z away from the axis,
                  -1 if toward -z
        aperture: :class:`Circular`
        material: :class:`Material`
    """
    id = attr.ib()
    z0 = attr.ib()
    R = attr.ib()
    K = attr.ib()
    sag_sign = attr.ib(validator=attr.validators.in_((-1, 1)))
    aperture = attr.ib()
    material = attr.ib()

    def listobj_str(self):
        o_str = (f"{self.id}: conic z0={self.z0:.4f} R={self.R:.4f} "
                 f"K={self.K:.6f} sag_sign={self.sag_sign:+d} "
                 f"{self.material.kind}\n")
        return o_str + self.aperture.listobj_str()


def _as_point(value):
    return np.array(value, dtype=float)


def _as_direction(value):
    return normalize(np.array(value, dtype=float))


@attr.s(frozen=True, eq=False)
class PlaneSurface:
    """ Flat surface through `p0` with unit normal `n_hat`

    The aperture is centered on `p0` and measured in the plane.
    """
    id = attr.ib()
    p0 = attr.ib(converter=_as_point)
    n_hat = attr.ib(converter=_as_direction)
    aperture = attr.ib()
    material = attr.ib()

    def listobj_str(self):
        o_str = (f"{self.id}: plane p0={self.p0} n={self.n_hat} "
                 f"{self.material.kind}\n")
        return o_str + self.aperture.listobj_str()

    def shifted(self, dist):
        """ returns a copy moved `dist` along the normal """
        return attr.evolve(self, p0=self.p0 + dist*self.n_hat)

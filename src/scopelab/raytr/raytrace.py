#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Functions to support ray tracing an optical plan

    Intersections return a :class:`~.Hit` or None. None covers every way a
    ray can fail to meet a surface: behind the ray, parallel to a plane,
    outside the aperture, outside the conic's domain, or a Newton iteration
    that does not converge.

.. Created on Mon Oct 19 14:41:09 2026

.. codeauthor: ScopeLab Developers
"""

from math import sqrt, isfinite

import numpy as np
from numpy.linalg import norm

import scopelab.optical.model_constants as mc
from scopelab.elem import surface as srfc
from scopelab.elem.profiles import sag_z, dsag_dr, conic_normal
from scopelab.raytr import Hit, TraceSegment
from scopelab.raytr.traceerror import (TraceMissedSurfaceError,
                                       TraceAbsorbedError,
                                       TraceBounceLimitError)
from scopelab.util.misc_math import normalize


def reflect(d_in, normal):
    """ reflect incoming direction, d_in, about normal """
    normal_len = norm(normal)
    cosI = np.dot(d_in, normal)/normal_len
    d_out = d_in - 2.0*cosI*normal/normal_len
    return d_out


def intersect_plane(srf, p, d):
    """ intersect the ray (p, d) with plane surface `srf`

    `d` is assumed to be a unit vector.
    """
    denom = np.dot(d, srf.n_hat)
    if not isfinite(denom) or abs(denom) < mc.DEGENERATE_TOLERANCE:
        return None
    t = np.dot(srf.p0 - p, srf.n_hat)/denom
    if not isfinite(t) or t < 0:
        return None
    inc_pt = p + t*d
    # the offset from p0 lies in the plane
    if not srf.aperture.point_inside(norm(inc_pt - srf.p0), 0.):
        return None
    return Hit(t, inc_pt, srf)


def intersect_conic(srf, p, d):
    """ intersect the ray (p, d) with conic surface `srf`

    Newton-Raphson on f(t) = z(t) - z0 - sag_sign*s(r(t)), seeded at the
    crossing of the vertex plane. The returned `t` is measured along the
    normalized direction.
    """
    d = normalize(d)
    dz = d[2]
    if abs(dz) < mc.DEGENERATE_TOLERANCE:
        dz = mc.DEGENERATE_TOLERANCE
    t = (srf.z0 - p[2])/dz
    if not isfinite(t):
        return None
    if t < 0:
        t = 0.

    for i in range(mc.NEWTON_MAX_ITER):
        pt = p + t*d
        x, y = pt[0], pt[1]
        z_srf = sag_z(srf, x, y)
        if not isfinite(z_srf):
            return None
        f = pt[2] - z_srf
        if abs(f) < mc.NEWTON_TOLERANCE:
            if t < 0:
                return None
            if not srf.aperture.point_inside(x, y):
                return None
            return Hit(t, np.array([x, y, z_srf]), srf)

        r = sqrt(x*x + y*y)
        drdt = (x*d[0] + y*d[1])/r if r > 0 else 0.
        dfdt = d[2] - srf.sag_sign*dsag_dr(r, srf.R, srf.K)*drdt
        if not isfinite(dfdt) or abs(dfdt) < mc.DEGENERATE_TOLERANCE:
            return None
        t -= f/dfdt
        if not isfinite(t):
            return None

    return None


def plane_normal(srf, p):
    return srf.n_hat


_intersect = {
    srfc.ConicSurface: intersect_conic,
    srfc.PlaneSurface: intersect_plane,
    }

_normal = {
    srfc.ConicSurface: conic_normal,
    srfc.PlaneSurface: plane_normal,
    }


def intersect(srf, p, d):
    """ intersect the ray (p, d) with `srf`, returning a Hit or None

    `d` is normalized first, so `t` is a distance for every surface type.
    """
    try:
        fct = _intersect[type(srf)]
    except KeyError:
        raise TypeError(f"unsupported surface type {type(srf).__name__}")
    return fct(srf, p, normalize(d))


def normal(srf, p):
    """ unit surface normal of `srf` at the point `p` """
    return _normal[type(srf)](srf, p)


def nearest_hit(surfaces, p, d):
    """ the closest forward intersection of (p, d) with `surfaces`, or None

    Hits within MIN_HIT_DISTANCE of `p` are ignored so a ray leaving a
    surface does not find that surface again.
    """
    nearest = None
    for srf in surfaces:
        hit = intersect(srf, p, d)
        if hit is None or not hit.t > mc.MIN_HIT_DISTANCE:
            continue
        if nearest is None or hit.t < nearest.t:
            nearest = hit
    return nearest


def trace_ray(surfaces, sensor, pt0, dir0, max_bounces):
    """ fundamental raytrace function

    At each step the ray is intersected with every surface and the sensor
    and the nearest hit is taken. Reflectors bounce the ray, transmitters
    pass it through unchanged and absorbers stop it.

    Args:
        surfaces: sequence of the plan's non-sensor surfaces
        sensor: the sensor :class:`~.PlaneSurface`
        pt0: starting point of the ray
        dir0: starting direction of the ray
        max_bounces: maximum number of surface interactions

    Returns:
        (**segments**, **sensor_hit**)

        - **segments** - list of :class:`~.TraceSegment`, in trace order
        - **sensor_hit** - the point of incidence on the sensor

    Raises:
        TraceMissedSurfaceError: the ray left the plan
        TraceAbsorbedError: the ray was stopped before the sensor
        TraceBounceLimitError: the bounce budget was exhausted
    """
    path = tuple(surfaces) + (sensor,)
    segments = []
    before_pt = np.asarray(pt0, dtype=float)
    before_dir = normalize(np.asarray(dir0, dtype=float))

    for bounce in range(max(1, max_bounces)):
        hit = nearest_hit(path, before_pt, before_dir)
        if hit is None:
            raise TraceMissedSurfaceError(before_pt, before_dir, segments)

        srf = hit.surface
        segments.append(TraceSegment(before_pt, hit.p, srf.id))
        if srf is sensor:
            return segments, hit.p

        interact_mode = srf.material.kind
        if interact_mode == srfc.ABSORBER:
            raise TraceAbsorbedError(srf, hit.p, segments)
        elif interact_mode == srfc.REFLECTOR:
            after_dir = reflect(before_dir, normal(srf, hit.p))
        else:  # transmitter, input direction becomes output
            after_dir = before_dir

        before_pt = hit.p
        before_dir = after_dir

    raise TraceBounceLimitError(max_bounces, segments)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
"""Spot size calculations for a field angle, including the best focus search

    The functions here follow a trace, accumulate, evaluate pattern:
    :func:`trace_bundle` traces the pupil samples for one field angle,
    :func:`spot_rms` reduces the sensor hits to rms spot statistics and
    :func:`eval_spot` does both for a given sensor position.
    :func:`best_focus_for_field` steps the sensor through a small window
    along its normal and keeps the position with the smallest rms spot.

    Rays are launched parallel to each other, tilted by the field angle in
    the x-z plane. The entrance pupil lies in the plane z = 0, so a sample
    (x, y) is the point where its ray crosses that plane.

.. Created on Mon Oct 19 16:02:44 2026

.. codeauthor: ScopeLab Developers
"""

import logging
from collections import namedtuple
from math import sin, cos, tan, sqrt, isfinite

import numpy as np

import scopelab.optical.model_constants as mc
from scopelab.raytr import TraceRay
from scopelab.raytr.raytrace import trace_ray
from scopelab.raytr.traceerror import TraceError
from scopelab.util.misc_math import plane_basis

logger = logging.getLogger(__name__)

nan = float('nan')

SpotStats = namedtuple('SpotStats', ['rms', 'rms_u', 'rms_v', 'num_hits'])
SpotStats.__doc__ = "centroid referenced rms spot size on a sensor plane"
SpotStats.rms.__doc__ = "rms spot radius"
SpotStats.rms_u.__doc__ = "rms along the first in-plane basis vector"
SpotStats.rms_v.__doc__ = "rms along the second in-plane basis vector"
SpotStats.num_hits.__doc__ = "number of rays that reached the sensor"

FocusResult = namedtuple('FocusResult', ['shift', 'sensor', 'spot'])
FocusResult.__doc__ = "outcome of the best focus search for one field angle"
FocusResult.shift.__doc__ = "sensor shift along its normal, nan if not found"
FocusResult.sensor.__doc__ = "the sensor plane at the best focus"
FocusResult.spot.__doc__ = "SpotStats at the best focus"


def launch_ray(xy, z_start, fld_angle):
    """ returns the start point and direction of the ray for pupil sample
    `xy` at field angle `fld_angle`
    """
    pt0 = np.array([xy[0] + z_start*tan(fld_angle), xy[1], z_start])
    dir0 = np.array([sin(fld_angle), 0., cos(fld_angle)])
    return pt0, dir0


def trace_bundle(plan, pupil_pts, fld_angle, max_bounces, sensor=None):
    """ trace the pupil samples at `fld_angle` through `plan`

    Args:
        plan: the :class:`~.OpticalPlan`
        pupil_pts: list of 2d pupil samples
        fld_angle: field angle in radians
        max_bounces: bounce budget per ray
        sensor: if not None, a sensor plane replacing the plan's sensor

    Returns:
        a list of :class:`~.TraceRay`, one per pupil sample
    """
    if sensor is None:
        sensor = plan.sensor.plane
    z_start = plan.entrance.z_start
    rays = []
    for xy in pupil_pts:
        pt0, dir0 = launch_ray(xy, z_start, fld_angle)
        try:
            segments, sensor_hit = trace_ray(plan.surfaces, sensor,
                                             pt0, dir0, max_bounces)
        except TraceError as ray_error:
            logger.debug("ray %s at field %g: %s", xy, fld_angle, ray_error)
            rays.append(TraceRay(fld_angle, ray_error.segments, False, None))
        else:
            rays.append(TraceRay(fld_angle, segments, True, sensor_hit))
    return rays


def spot_rms(sensor_hits, sensor):
    """ centroid referenced rms spot statistics in the sensor's 2d basis

    Fewer than MIN_SPOT_HITS points give nan statistics.
    """
    num_hits = len(sensor_hits)
    if num_hits < mc.MIN_SPOT_HITS:
        return SpotStats(nan, nan, nan, num_hits)
    u, v = plane_basis(sensor.n_hat)
    q = np.array(sensor_hits) - sensor.p0
    a = q.dot(u)
    b = q.dot(v)
    var_a = np.mean((a - np.mean(a))**2)
    var_b = np.mean((b - np.mean(b))**2)
    return SpotStats(sqrt(var_a + var_b), sqrt(var_a), sqrt(var_b), num_hits)


def eval_spot(plan, pupil_pts, fld_angle, max_bounces, sensor=None):
    """ trace the bundle and return (SpotStats, list of TraceRay) """
    if sensor is None:
        sensor = plan.sensor.plane
    rays = trace_bundle(plan, pupil_pts, fld_angle, max_bounces,
                        sensor=sensor)
    hits = [r.sensor_hit for r in rays if r.hit_sensor]
    return spot_rms(hits, sensor), rays


def focus_shifts(sensor):
    """ the candidate sensor shifts searched for best focus """
    z0 = np.dot(sensor.p0, sensor.n_hat)
    step = max(mc.FOCUS_MIN_STEP_MM, abs(z0)*mc.FOCUS_STEP_FRACTION)
    return [i*step for i in range(-mc.FOCUS_HALF_STEPS,
                                  mc.FOCUS_HALF_STEPS + 1)]


def best_focus_for_field(plan, pupil_pts, fld_angle, max_bounces):
    """ find the sensor shift minimizing the rms spot at `fld_angle`

    Shifts with a nan rms are skipped. If no shift gives a finite rms the
    result has a nan shift, the nominal sensor and nan statistics.
    """
    nominal = plan.sensor.plane
    best = None
    for shift in focus_shifts(nominal):
        sensor = nominal.shifted(shift)
        spot, _ = eval_spot(plan, pupil_pts, fld_angle, max_bounces,
                            sensor=sensor)
        if not isfinite(spot.rms):
            continue
        if best is None or spot.rms < best.spot.rms:
            best = FocusResult(shift, sensor, spot)

    if best is None:
        logger.debug("no finite rms spot at field %g", fld_angle)
        return FocusResult(nan, nominal, SpotStats(nan, nan, nan, 0))
    return best

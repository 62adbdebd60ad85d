#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Newtonian generator: parabolic primary and a flat 45° diagonal

    The primary vertex is at z = 0 and light from the sky travels toward +z.
    The diagonal sits a fixed intercept distance inside the primary focus and
    folds the converging cone toward +y onto the sensor. There is no
    magnification, so the system focal ratio is the primary focal ratio.

.. Created on Tue Oct 20 11:38:26 2026

.. codeauthor: ScopeLab Developers
"""

import logging
from math import isfinite, sqrt

import scopelab.optical.model_constants as mc
from scopelab.designs.context import DesignContext
from scopelab.designs.metrics import (throughput_metrics, evaluate_plan,
                                      check_constraints)
from scopelab.elem.surface import (ConicSurface, PlaneSurface, Circular,
                                   reflector, absorber)
from scopelab.optical.candidate import (Candidate, InputsRecord,
                                        GeometryMetrics)
from scopelab.raytr.opticalplan import EntranceSpec, SensorSpec, OpticalPlan
from scopelab.util.misc_math import is_finite_positive, is_finite_nonneg

logger = logging.getLogger(__name__)


def diagonal_minor_axis(aperture, f_primary, intercept, field_radius):
    """ minor axis of a diagonal fully illuminating `field_radius` """
    return (aperture*intercept/f_primary
            + 2*field_radius*(f_primary - intercept)/f_primary)


def newtonian_plan(aperture, f_primary, intercept, minor_axis, field_radius,
                   reflectivity):
    """ three surface plan: primary, diagonal and a sensor facing +y """
    primary = ConicSurface('primary', z0=0., R=2*f_primary, K=-1.,
                           sag_sign=-1, aperture=Circular(0.5*aperture),
                           material=reflector(reflectivity))
    z_diag = -(f_primary - intercept)
    diagonal = PlaneSurface('secondary', p0=(0., 0., z_diag),
                            n_hat=(0., 1., 1.),
                            aperture=Circular(0.5*minor_axis*sqrt(2.)),
                            material=reflector(reflectivity))
    sensor = PlaneSurface('sensor', p0=(0., intercept, z_diag),
                          n_hat=(0., 1., 0.),
                          aperture=Circular(max(1., 2*field_radius)),
                          material=absorber())
    entrance = EntranceSpec(z_start=-2*f_primary, pupil_radius=0.5*aperture,
                            field_angles=(0., field_radius/f_primary))
    return OpticalPlan([primary, diagonal], entrance, SensorSpec(sensor))


def newtonian(spec, params, ctx=None):
    """ generate a Newtonian candidate; the system focal ratio is ignored

    Returns:
        a :class:`~.Candidate`, or None if the aperture or primary focal
        ratio is not finite and positive
    """
    if ctx is None:
        ctx = DesignContext()
    D = spec.aperture_mm
    Fp = params.primary_f_ratio
    if not is_finite_positive(D) or not is_finite_positive(Fp):
        logger.debug("newtonian: invalid D=%s Fp=%s", D, Fp)
        return None

    f_primary = Fp*D
    intercept = mc.NEWTONIAN_INTERCEPT_FRACTION*f_primary
    field_radius = spec.constraints.field_radius_mm
    if not is_finite_nonneg(field_radius):
        field_radius = 0.

    minor_axis = diagonal_minor_axis(D, f_primary, intercept, field_radius)
    if not (isfinite(minor_axis) and minor_axis > 0):
        return None

    geometry = GeometryMetrics(
        tube_length_mm=f_primary + mc.DEFAULT_TUBE_MARGIN_MM,
        back_focus_mm=max(0., f_primary - intercept),
        secondary_diameter_mm=minor_axis,
        obstruction_diameter_mm=minor_axis,
        obstruction_ratio=minor_axis/D)

    reflectivity = spec.coatings.reflectivity
    throughput = throughput_metrics(D, minor_axis, reflectivity**2)

    plan = newtonian_plan(D, f_primary, intercept, minor_axis, field_radius,
                          reflectivity)
    image_quality, audit = evaluate_plan(ctx, plan, Fp)

    candidate = Candidate(
        id=f"{mc.NEWTONIAN}-F{Fp:.2f}",
        kind=mc.NEWTONIAN,
        inputs=InputsRecord(aperture_mm=D, primary_f_ratio=Fp,
                            system_f_ratio=Fp,
                            primary_focal_length_mm=f_primary,
                            system_focal_length_mm=f_primary),
        geometry=geometry,
        throughput=throughput,
        image_quality=image_quality,
        plan=plan,
        audit=audit)
    return check_constraints(spec, candidate)

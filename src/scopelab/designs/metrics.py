#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Metric and constraint helpers common to all design families

.. Created on Tue Oct 20 09:31:18 2026

.. codeauthor: ScopeLab Developers
"""

import attr

from scopelab.optical.candidate import (ThroughputMetrics,
                                        ImageQualityMetrics,
                                        ConstraintResult)
from scopelab.raytr.imagequality import adapt_image_quality
from scopelab.util.units import circle_area


def throughput_metrics(aperture, obstruction_diameter, transmission,
                       mirror_count=2):
    """ light collected by the clear annulus after coating losses """
    primary_area = circle_area(aperture)
    obstruction_area = circle_area(obstruction_diameter)
    effective_area = (primary_area - obstruction_area)*transmission
    return ThroughputMetrics(primary_area_mm2=primary_area,
                             effective_area_mm2=effective_area,
                             usable_light_efficiency=(effective_area /
                                                      primary_area),
                             mirror_count=mirror_count,
                             transmission_factor=transmission)


def evaluate_plan(ctx, plan, system_f_ratio):
    """ simulate `plan` and convert the result to image quality metrics

    Returns:
        (:class:`~.ImageQualityMetrics`, :class:`~.SimulationResult` or None)
    """
    if not ctx.simulate:
        return ImageQualityMetrics(), None
    result = ctx.simulator.simulate(plan, ctx.sample_spec)
    iq = result.image_quality
    on_axis = iq[0] if len(iq) > 1 else None
    return adapt_image_quality(iq[-1], system_f_ratio, on_axis), result


def constraint_reasons(spec, geometry):
    """ human readable list of the constraints `geometry` violates

    All comparisons are made in millimeters.
    """
    cs = spec.constraints
    reasons = []

    max_tube = cs.max_tube_length_mm
    if geometry.tube_length_mm > max_tube:
        reasons.append(f"Tube length {geometry.tube_length_mm:.0f}mm "
                       f"exceeds max {max_tube:.0f}mm")

    if geometry.obstruction_ratio > cs.max_obstruction_ratio:
        reasons.append(f"Obstruction ratio {geometry.obstruction_ratio:.3f} "
                       f"exceeds max {cs.max_obstruction_ratio:.3f}")

    min_back = cs.min_back_focus_mm
    if geometry.back_focus_mm < min_back:
        reasons.append(f"Backfocus {geometry.back_focus_mm:.0f}mm "
                       f"below min {min_back:.0f}mm")

    return reasons


def check_constraints(spec, candidate):
    """ returns a copy of `candidate` with constraints checked against `spec`
    """
    reasons = constraint_reasons(spec, candidate.geometry)
    return attr.evolve(candidate,
                       constraints=ConstraintResult.from_reasons(reasons))

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Trace an optical plan for each of its field angles

    For every field angle the simulator first searches for the best focus,
    then traces the picked pupil rays once more at that focus to record the
    ray segments and the spot statistics.

.. Created on Mon Oct 19 16:40:12 2026

.. codeauthor: ScopeLab Developers
"""

import logging
from collections import namedtuple

from scopelab.raytr import analyses
from scopelab.raytr import sampler
from scopelab.raytr.opticalplan import SampleSpec

logger = logging.getLogger(__name__)

ImageQualityResult = namedtuple('ImageQualityResult',
                                ['field_angle', 'spot_rms', 'spot_rms_u',
                                 'spot_rms_v', 'best_focus_shift'])
ImageQualityResult.__doc__ = "spot statistics at best focus for a field angle"
ImageQualityResult.field_angle.__doc__ = "field angle in radians"
ImageQualityResult.spot_rms.__doc__ = "rms spot radius (mm), nan if unknown"
ImageQualityResult.spot_rms_u.__doc__ = "rms along the sensor's u axis (mm)"
ImageQualityResult.spot_rms_v.__doc__ = "rms along the sensor's v axis (mm)"
ImageQualityResult.best_focus_shift.__doc__ = \
    "shift of the sensor along its normal at best focus (mm)"

SimulationResult = namedtuple('SimulationResult', ['traces', 'image_quality'])
SimulationResult.__doc__ = "rays and spot statistics from simulating a plan"
SimulationResult.traces.__doc__ = "list of TraceRays for all field angles"
SimulationResult.image_quality.__doc__ = \
    "list of ImageQualityResults, in field angle order"


class OpticalSimulator:
    """ Traces :class:`~.OpticalPlan` instances with a :class:`~.SampleSpec`

    Attributes:
        sample_spec: the sampling used when simulate() is not given one
    """

    def __init__(self, sample_spec=None):
        self.sample_spec = (sample_spec if sample_spec is not None
                            else SampleSpec())

    def __repr__(self):
        return f"{type(self).__name__}({self.sample_spec!r})"

    def simulate(self, plan, sample_spec=None):
        """ trace `plan` at each of its field angles

        Returns:
            a :class:`SimulationResult`
        """
        if sample_spec is None:
            sample_spec = self.sample_spec
        ent = plan.entrance
        pupil_pts = sampler.pupil_grid(sample_spec.pupil_steps,
                                       ent.pupil_radius)
        rays = sampler.pick_rays(pupil_pts, sample_spec.rays_per_field)

        traces = []
        image_quality = []
        for fld_angle in ent.field_angles:
            focus = analyses.best_focus_for_field(plan, rays, fld_angle,
                                                  sample_spec.max_bounces)
            spot, fld_rays = analyses.eval_spot(plan, rays, fld_angle,
                                                sample_spec.max_bounces,
                                                sensor=focus.sensor)
            traces.extend(fld_rays)
            image_quality.append(ImageQualityResult(fld_angle, spot.rms,
                                                    spot.rms_u, spot.rms_v,
                                                    focus.shift))
            logger.debug("field %g: rms %g at focus shift %g (%d/%d hits)",
                         fld_angle, spot.rms, focus.shift, spot.num_hits,
                         len(rays))
        return SimulationResult(traces, image_quality)

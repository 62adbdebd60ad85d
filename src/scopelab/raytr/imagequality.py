#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Convert spot sizes into diffraction normalized aberration proxies

    Spot rms values in millimeters are divided by the Airy radius,
    1.22*wavelength*F, to give dimensionless "waves". These are geometric
    proxies for the wavefront error, not a wavefront decomposition.

.. Created on Mon Oct 19 17:18:35 2026

.. codeauthor: ScopeLab Developers
"""

from math import exp, pi, isfinite

import scopelab.optical.model_constants as mc
from scopelab.optical.candidate import ImageQualityMetrics
from scopelab.util.misc_math import is_finite_positive

nan = float('nan')


def airy_radius(f_ratio):
    """ Airy disk radius in mm at the design wavelength, nan if `f_ratio`
    is not finite and positive
    """
    if not is_finite_positive(f_ratio):
        return nan
    return mc.AIRY_FACTOR*mc.WAVELENGTH_MM*f_ratio


def combined_wfe(coma, spherical):
    """ the larger of the two proxies; a single finite one stands alone """
    if isfinite(coma) and isfinite(spherical):
        return max(coma, spherical)
    if isfinite(coma):
        return coma
    if isfinite(spherical):
        return spherical
    return nan


def strehl_estimate(coma):
    """ Gaussian approximation exp(-(2*pi*w)**2); 0 if `coma` is unknown """
    if not isfinite(coma):
        return 0.
    return exp(-(2*pi*coma)**2)


def adapt_image_quality(edge, system_f_ratio, on_axis=None):
    """ build :class:`~.ImageQualityMetrics` from simulator results

    Args:
        edge: :class:`~.ImageQualityResult` at the edge of the field
        system_f_ratio: the focal ratio setting the Airy radius
        on_axis: :class:`~.ImageQualityResult` on axis, or None

    Returns:
        :class:`~.ImageQualityMetrics`; terms with missing inputs are nan
    """
    airy = airy_radius(system_f_ratio)
    coma = edge.spot_rms/airy
    astig = abs(edge.spot_rms_u - edge.spot_rms_v)/airy
    field_curv = abs(edge.best_focus_shift)
    spherical = on_axis.spot_rms/airy if on_axis is not None else nan

    return ImageQualityMetrics(field_angle_rad=edge.field_angle,
                               coma_waves=coma,
                               astig_waves=astig,
                               field_curvature_mm=field_curv,
                               spherical_waves=spherical,
                               wfe_rms_waves_edge=combined_wfe(coma,
                                                               spherical),
                               strehl_estimate=strehl_estimate(coma))

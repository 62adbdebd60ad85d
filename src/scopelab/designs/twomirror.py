#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Layout and conic constants for two mirror (folded) telescopes

    Coordinates: light from the sky travels toward +z. The primary vertex is
    at z = 0 and the primary bends toward -z away from the axis. The convex
    secondary faces the primary at z = -d and sends the light back through
    the primary's central hole to a focus at z = backfocus.

    The layout takes the backfocus as given rather than solving for it,
    which would collapse it to zero. The magnification m = Fs/Fp, the
    mirror separation follows from the secondary imaging the primary focus:

        m*(f_primary - d) = d + backfocus

.. Created on Tue Oct 20 10:12:07 2026

.. codeauthor: ScopeLab Developers
"""

import logging
from collections import namedtuple
from math import isfinite

import scopelab.optical.model_constants as mc
from scopelab.designs.metrics import (throughput_metrics, evaluate_plan,
                                      check_constraints)
from scopelab.elem.profiles import sag
from scopelab.elem.surface import (ConicSurface, PlaneSurface, Circular,
                                   reflector, transmitter, absorber)
from scopelab.optical.candidate import (Candidate, InputsRecord,
                                        GeometryMetrics)
from scopelab.raytr.opticalplan import EntranceSpec, SensorSpec, OpticalPlan
from scopelab.util.misc_math import is_finite_positive, is_finite_nonneg

logger = logging.getLogger(__name__)

TwoMirrorLayout = namedtuple('TwoMirrorLayout',
                             ['f_primary', 'f_system', 'm', 'back_focus',
                              'd', 'cone_radius', 'chief_height',
                              'secondary_diameter'])
TwoMirrorLayout.__doc__ = "first order layout of a two mirror telescope"
TwoMirrorLayout.f_primary.__doc__ = "primary focal length"
TwoMirrorLayout.f_system.__doc__ = "system focal length"
TwoMirrorLayout.m.__doc__ = "secondary magnification, f_system/f_primary"
TwoMirrorLayout.back_focus.__doc__ = "primary vertex to focal plane"
TwoMirrorLayout.d.__doc__ = "primary to secondary separation"
TwoMirrorLayout.cone_radius.__doc__ = "axial cone radius at the secondary"
TwoMirrorLayout.chief_height.__doc__ = \
    "edge of field chief ray height at the secondary"
TwoMirrorLayout.secondary_diameter.__doc__ = \
    "secondary diameter for a fully illuminated field"

# the central baffle sits this far in front of the secondary's edge
BAFFLE_GAP = 1.0


def two_mirror_layout(aperture, Fp, Fs, back_focus, field_radius):
    """ solve the first order layout, or return None if it is invalid

    Args:
        aperture: primary diameter (mm)
        Fp: primary focal ratio
        Fs: system focal ratio, must exceed `Fp`
        back_focus: primary vertex to focal plane (mm); negative or
                    non-finite values are taken as 0
        field_radius: radius of the fully illuminated field (mm)

    Returns:
        a :class:`TwoMirrorLayout` or None
    """
    if not is_finite_positive(aperture):
        return None
    if not (isfinite(Fp) and isfinite(Fs)) or Fp <= 0 or Fs <= Fp:
        return None

    f_primary = Fp*aperture
    f_system = Fs*aperture
    m = f_system/f_primary
    if not m > 1:
        return None

    b = back_focus if is_finite_nonneg(back_focus) else 0.
    d = (m*f_primary - b)/(m + 1)
    if not isfinite(d) or d <= 0 or d >= f_primary:
        return None

    fld = field_radius if is_finite_nonneg(field_radius) else 0.
    cone_radius = 0.5*aperture*(1 - d/f_primary)
    if not (isfinite(cone_radius) and cone_radius > 0):
        return None

    chief_height = fld*(b + d)/f_system if fld > 0 else 0.
    secondary_diameter = 2*(cone_radius + chief_height)
    if not (isfinite(secondary_diameter) and secondary_diameter > 0):
        return None

    return TwoMirrorLayout(f_primary, f_system, m, b, d, cone_radius,
                           chief_height, secondary_diameter)


def separation_ratio(layout):
    """ the ratio of the secondary to focus distance to the mirror
    separation
    """
    return (layout.d + layout.back_focus)/layout.d


def secondary_radius(layout):
    """ vertex radius of curvature magnitude of the convex secondary """
    m = layout.m
    return 2*m*(layout.f_primary - layout.d)/(m - 1)


def cassegrain_conics(layout):
    """ calculate the conic constants for a cassegrain telescope

        Returns:
            the conic constants of the primary and secondary mirrors
    """
    m = layout.m
    k_pri = -1.0
    k_sec = -4.0*m/(m - 1.0)**2 - 1.0
    return k_pri, k_sec


def ritchey_chretien_conics(layout):
    """ calculate the conic constants for a ritchey-chretien telescope

        Returns:
            the conic constants of the primary and secondary mirrors
    """
    m = layout.m
    s = separation_ratio(layout)
    k_pri = -2.0*s/m**3 - 1.0
    k_sec = -(4.0*m*(m - 1.0) + 2.0*(m + s))/(m - 1.0)**3 - 1.0
    return k_pri, k_sec


def folded_tube_length(layout):
    return (layout.f_primary*(1 - 1/layout.m) + layout.back_focus
            + mc.DEFAULT_TUBE_MARGIN_MM)


def folded_plan(layout, aperture, conics, obstruction_diameter, field_radius,
                reflectivity, corrector=None):
    """ build the optical plan of a folded telescope

    Args:
        layout: :class:`TwoMirrorLayout`
        aperture: primary diameter (mm)
        conics: (k_pri, k_sec)
        obstruction_diameter: diameter of the central baffle and of the
                              hole in the primary
        field_radius: radius of the fully illuminated field (mm)
        reflectivity: mirror coating reflectivity
        corrector: if not None, the transmission of a corrector window in
                   front of the secondary

    Returns:
        an :class:`~.OpticalPlan`
    """
    k_pri, k_sec = conics
    obs_radius = 0.5*obstruction_diameter
    primary = ConicSurface('primary', z0=0., R=2*layout.f_primary, K=k_pri,
                           sag_sign=-1,
                           aperture=Circular(0.5*aperture, obs_radius),
                           material=reflector(reflectivity))

    R2 = secondary_radius(layout)
    sec_radius = 0.5*layout.secondary_diameter
    secondary = ConicSurface('secondary', z0=-layout.d, R=R2, K=k_sec,
                             sag_sign=-1, aperture=Circular(sec_radius),
                             material=reflector(reflectivity))

    edge_sag = sag(sec_radius, R2, k_sec)
    if not isfinite(edge_sag):
        edge_sag = 0.
    z_baffle = -layout.d - edge_sag - BAFFLE_GAP
    baffle = PlaneSurface('baffle', p0=(0., 0., z_baffle),
                          n_hat=(0., 0., 1.), aperture=Circular(obs_radius),
                          material=absorber())

    surfaces = [primary, secondary, baffle]
    if corrector is not None:
        window = PlaneSurface('corrector', p0=(0., 0., z_baffle - BAFFLE_GAP),
                              n_hat=(0., 0., 1.),
                              aperture=Circular(0.5*aperture),
                              material=transmitter(corrector))
        surfaces.insert(0, window)

    sensor = PlaneSurface('sensor', p0=(0., 0., layout.back_focus),
                          n_hat=(0., 0., 1.),
                          aperture=Circular(max(1., 2*field_radius)),
                          material=absorber())
    entrance = EntranceSpec(z_start=-2*layout.f_primary,
                            pupil_radius=0.5*aperture,
                            field_angles=(0., field_radius/layout.f_system))
    return OpticalPlan(surfaces, entrance, SensorSpec(sensor))


def folded_candidate(kind, spec, params, ctx, baffle_factor, conics_fct,
                     corrector=None):
    """ generate a candidate for one of the folded design families

    Args:
        kind: the design kind
        spec: :class:`~.InputSpec`
        params: :class:`~.DesignParams`
        ctx: :class:`~.DesignContext`
        baffle_factor: obstruction diameter over secondary diameter
        conics_fct: function of a :class:`TwoMirrorLayout` returning
                    (k_pri, k_sec)
        corrector: corrector window transmission, or None if there is no
                   corrector

    Returns:
        a :class:`~.Candidate` or None if the focal ratios are invalid
    """
    D = spec.aperture_mm
    Fp, Fs = params.primary_f_ratio, params.system_f_ratio
    field_radius = spec.constraints.field_radius_mm
    if not is_finite_nonneg(field_radius):
        field_radius = 0.
    layout = two_mirror_layout(D, Fp, Fs, spec.back_focus_mm, field_radius)
    if layout is None:
        logger.debug("%s: no layout for D=%s Fp=%s Fs=%s", kind, D, Fp, Fs)
        return None

    obstruction_diameter = layout.secondary_diameter*baffle_factor
    geometry = GeometryMetrics(
        tube_length_mm=folded_tube_length(layout),
        back_focus_mm=layout.back_focus,
        secondary_diameter_mm=layout.secondary_diameter,
        obstruction_diameter_mm=obstruction_diameter,
        obstruction_ratio=obstruction_diameter/D)

    reflectivity = spec.coatings.reflectivity
    transmission = reflectivity**2
    if corrector is not None:
        transmission *= corrector
    throughput = throughput_metrics(D, obstruction_diameter, transmission)

    plan = folded_plan(layout, D, conics_fct(layout), obstruction_diameter,
                       field_radius, reflectivity, corrector=corrector)
    image_quality, audit = evaluate_plan(ctx, plan, Fs)

    candidate = Candidate(
        id=f"{kind}-Fp{Fp:.2f}-Fs{Fs:.2f}",
        kind=kind,
        inputs=InputsRecord(aperture_mm=D, primary_f_ratio=Fp,
                            system_f_ratio=Fs,
                            primary_focal_length_mm=layout.f_primary,
                            system_focal_length_mm=layout.f_system),
        geometry=geometry,
        throughput=throughput,
        image_quality=image_quality,
        plan=plan,
        audit=audit)
    return check_constraints(spec, candidate)

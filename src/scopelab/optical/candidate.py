#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Records describing one generated telescope candidate

    A :class:`Candidate` is created once per trial by a design generator.
    The score is filled in by a later pass that returns a new record; nothing
    here is ever modified in place.

.. Created on Mon Oct 19 11:14:22 2026

.. codeauthor: ScopeLab Developers
"""

import attr

nan = float('nan')


@attr.s(frozen=True)
class InputsRecord:
    aperture_mm = attr.ib()
    primary_f_ratio = attr.ib()
    system_f_ratio = attr.ib()
    primary_focal_length_mm = attr.ib()
    system_focal_length_mm = attr.ib()


@attr.s(frozen=True)
class GeometryMetrics:
    """ mechanical layout; obstruction_ratio is obstruction / aperture """
    tube_length_mm = attr.ib()
    back_focus_mm = attr.ib()
    secondary_diameter_mm = attr.ib()
    obstruction_diameter_mm = attr.ib()
    obstruction_ratio = attr.ib()


@attr.s(frozen=True)
class ThroughputMetrics:
    primary_area_mm2 = attr.ib()
    effective_area_mm2 = attr.ib()
    usable_light_efficiency = attr.ib()
    mirror_count = attr.ib()
    transmission_factor = attr.ib()


@attr.s(frozen=True)
class ImageQualityMetrics:
    """ spot size derived aberration proxies, in waves unless noted

    Attributes:
        field_angle_rad: the edge field angle evaluated
        coma_waves: edge field rms spot / Airy radius
        astig_waves: abs(tangential - sagittal edge rms) / Airy radius
        field_curvature_mm: magnitude of the edge field best focus shift
        spherical_waves: on axis rms spot / Airy radius
        wfe_rms_waves_edge: max of the coma and spherical proxies
        strehl_estimate: exp(-(2*pi*coma)**2)
    """
    field_angle_rad = attr.ib(default=nan)
    coma_waves = attr.ib(default=nan)
    astig_waves = attr.ib(default=nan)
    field_curvature_mm = attr.ib(default=nan)
    spherical_waves = attr.ib(default=nan)
    wfe_rms_waves_edge = attr.ib(default=nan)
    strehl_estimate = attr.ib(default=0.)


@attr.s(frozen=True)
class ConstraintResult:
    passed = attr.ib(default=True)
    reasons = attr.ib(default=(), converter=tuple)

    @passed.validator
    def _check_passed(self, attribute, value):
        if value != (len(self.reasons) == 0):
            raise ValueError("passed must be True iff there are no reasons")

    @classmethod
    def from_reasons(cls, reasons):
        reasons = tuple(reasons)
        return cls(passed=len(reasons) == 0, reasons=reasons)


@attr.s(frozen=True)
class ScoreBreakdown:
    usable_light = attr.ib(default=0.)
    aberration = attr.ib(default=0.)
    obstruction = attr.ib(default=0.)


@attr.s(frozen=True)
class ScoreResult:
    total = attr.ib(default=0.)
    terms = attr.ib(factory=ScoreBreakdown)


@attr.s(frozen=True, eq=False)
class Candidate:
    """ One generated design trial and all of its evaluated metrics

    Attributes:
        id: unique key combining the kind and the focal ratios
        kind: the design family
        inputs: :class:`InputsRecord`
        geometry: :class:`GeometryMetrics`
        throughput: :class:`ThroughputMetrics`
        image_quality: :class:`ImageQualityMetrics`
        constraints: :class:`ConstraintResult`
        score: :class:`ScoreResult`
        plan: the :class:`~.OpticalPlan` that was simulated, if any
        audit: the :class:`~.SimulationResult` of the plan, if any
    """
    id = attr.ib()
    kind = attr.ib()
    inputs = attr.ib()
    geometry = attr.ib()
    throughput = attr.ib()
    image_quality = attr.ib(factory=ImageQualityMetrics)
    constraints = attr.ib(factory=ConstraintResult)
    score = attr.ib(factory=ScoreResult)
    plan = attr.ib(default=None, repr=False)
    audit = attr.ib(default=None, repr=False)

    def listobj_str(self):
        g = self.geometry
        t = self.throughput
        iq = self.image_quality
        o_str = f"{self.id}: {self.kind}\n"
        o_str += (f"Fp={self.inputs.primary_f_ratio:.2f} "
                  f"Fs={self.inputs.system_f_ratio:.2f} "
                  f"D={self.inputs.aperture_mm:.1f}mm\n")
        o_str += (f"tube={g.tube_length_mm:.1f}mm "
                  f"backfocus={g.back_focus_mm:.1f}mm "
                  f"obstruction={g.obstruction_ratio:.3f}\n")
        o_str += (f"usable light={t.usable_light_efficiency:.3f} "
                  f"wfe={iq.wfe_rms_waves_edge:.3f} waves "
                  f"strehl={iq.strehl_estimate:.3f}\n")
        if self.constraints.passed:
            o_str += f"score={self.score.total:.4f}\n"
        else:
            o_str += "fails: " + "; ".join(self.constraints.reasons) + "\n"
        return o_str

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
""" tests for the focal ratio sweep and derived limits

.. codeauthor: ScopeLab Developers
"""

import unittest

import pytest
from pytest import approx

import scopelab.optical.model_constants as mc
from scopelab.designs.context import DesignContext, geometry_only
from scopelab.designs.metrics import constraint_reasons
from scopelab.optical.inputspec import InputSpec, ConstraintSpec, SweepSpec
from scopelab.raytr.opticalplan import SampleSpec
from scopelab.sweep.sweep import (enumerate_range, system_f_ratios,
                                  run_sweep, infer_derived_limits)

D = 304.8


def small_context():
    return DesignContext(sample_spec=SampleSpec(pupil_steps=5,
                                                rays_per_field=9,
                                                max_bounces=8))


def newtonian_spec(fp_min=4., fp_max=5., fp_step=0.5, max_tube=70.):
    return InputSpec(design_kinds=(mc.NEWTONIAN,),
                     constraints=ConstraintSpec(max_tube_length=max_tube),
                     sweep=SweepSpec(fp_min, fp_max, fp_step, 6., 16., 0.5))


class EnumerateRangeTestCase(unittest.TestCase):

    def test_inclusive_range(self):
        assert enumerate_range(4., 5., 0.5) == [4., 4.5, 5.]
        assert enumerate_range(2., 2., 1.) == [2.]

    def test_accumulated_error(self):
        assert enumerate_range(0.1, 0.3, 0.1) == [0.1, 0.2, 0.3]

    def test_empty_ranges(self):
        assert enumerate_range(5., 4., 0.5) == []
        assert enumerate_range(4., 5., 0.) == []
        assert enumerate_range(4., 5., -0.5) == []
        assert enumerate_range(4., 5., float('nan')) == []
        assert enumerate_range(4., float('inf'), 1.) == []

    def test_system_f_ratio_fallback(self):
        spec = InputSpec(target_system_f_ratio=9.,
                         sweep=SweepSpec(3., 4., 0.5, 12., 10., 0.5))
        assert system_f_ratios(spec) == [9.]
        spec = InputSpec(target_system_f_ratio=0.,
                         sweep=SweepSpec(3., 4., 0.5, 12., 10., 0.5))
        assert system_f_ratios(spec) == []


class NewtonianSweepTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.spec = newtonian_spec()
        cls.result = run_sweep(cls.spec, ctx=small_context())

    def test_candidates(self):
        candidates = self.result.candidates
        assert len(candidates) == 3
        for c, Fp in zip(candidates, (4., 4.5, 5.)):
            assert c.inputs.primary_f_ratio == Fp
            assert c.geometry.tube_length_mm == approx(Fp*D + 25.)
            assert c.constraints.passed

    def test_best_overall(self):
        result = self.result
        assert len(result.ranked) == 3
        best = max(result.ranked, key=lambda c: c.score.total)
        assert result.best_overall is result.ranked[0]
        assert result.best_overall.score.total == best.score.total
        assert result.best_by_kind[mc.NEWTONIAN] is result.best_overall
        assert result.best_by_kind[mc.CASSEGRAIN] is None
        assert set(result.best_by_kind) == set(mc.DESIGN_KINDS)

    def test_scores_filled(self):
        for c in self.result.ranked:
            assert 0. < c.score.total <= 1.
            assert 0. <= c.score.terms.aberration <= 1.

    def test_listobj_str(self):
        o_str = self.result.listobj_str()
        assert o_str.startswith("3 candidates generated, 3 passing")
        assert self.result.best_overall.id in o_str


class FullSweepTestCase(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.spec = InputSpec(sweep=SweepSpec(3., 4., 0.5, 8., 10., 1.))
        cls.result = run_sweep(cls.spec, top_n=5, ctx=small_context())

    def test_generated_counts(self):
        kinds = [c.kind for c in self.result.candidates]
        assert kinds.count(mc.NEWTONIAN) == 3
        for kind in (mc.CASSEGRAIN, mc.SCT, mc.RC):
            assert kinds.count(kind) == 9

    def test_monotonic_ranking(self):
        ranked = self.result.ranked
        assert len(ranked) > 1
        for a, b in zip(ranked, ranked[1:]):
            assert a.score.total >= b.score.total

    def test_constraint_consistency(self):
        cs = self.spec.constraints
        for c in self.result.candidates:
            g = c.geometry
            if c.constraints.passed:
                assert g.tube_length_mm <= cs.max_tube_length_mm
                assert g.obstruction_ratio <= cs.max_obstruction_ratio
                assert g.back_focus_mm >= cs.min_back_focus_mm
                assert constraint_reasons(self.spec, g) == []
            else:
                assert len(c.constraints.reasons) > 0
                assert c.id not in {r.id for r in self.result.ranked}

    def test_best_by_kind(self):
        for kind, best in self.result.best_by_kind.items():
            of_kind = [c for c in self.result.ranked if c.kind == kind]
            if best is None:
                assert of_kind == []
            else:
                assert best is of_kind[0]

    def test_top(self):
        assert len(self.result.top) == min(5, len(self.result.ranked))
        assert self.result.top == self.result.ranked[:5]

    def test_ranked_are_scored_copies(self):
        ids = {c.id for c in self.result.candidates}
        for c in self.result.ranked:
            assert c.id in ids
            assert c.constraints.passed


class EmptySweepTestCase(unittest.TestCase):

    def test_reversed_range(self):
        spec = newtonian_spec(fp_min=5., fp_max=4.)
        result = run_sweep(spec, ctx=geometry_only())
        assert result.candidates == []
        assert result.ranked == []
        assert result.top == []
        assert result.best_overall is None
        assert all(v is None for v in result.best_by_kind.values())
        assert len(result.best_by_kind) == 4

    def test_zero_step(self):
        spec = newtonian_spec(fp_step=0.)
        assert run_sweep(spec, ctx=geometry_only()).candidates == []

    def test_nothing_passes(self):
        spec = newtonian_spec(max_tube=10.)
        result = run_sweep(spec, ctx=geometry_only())
        assert len(result.candidates) == 3
        assert result.ranked == []
        assert result.best_overall is None
        assert "no candidate passes" in result.listobj_str()

    def test_equal_ratios_generate_nothing(self):
        spec = InputSpec(design_kinds=(mc.CASSEGRAIN,),
                         sweep=SweepSpec(4., 4., 1., 4., 4., 1.))
        result = run_sweep(spec, ctx=geometry_only())
        assert result.candidates == []

    def test_negative_top_n(self):
        result = run_sweep(newtonian_spec(), top_n=-3, ctx=geometry_only())
        assert len(result.ranked) == 3
        assert result.top == []

    def test_whole_float_top_n(self):
        result = run_sweep(newtonian_spec(), top_n=2.0, ctx=geometry_only())
        assert result.top == result.ranked[:2]

    def test_invalid_top_n(self):
        for top_n in (2.5, float('nan'), float('inf'), 'two', None):
            with pytest.raises(ValueError):
                run_sweep(newtonian_spec(), top_n=top_n, ctx=geometry_only())


class DerivedLimitsTestCase(unittest.TestCase):

    def test_newtonian_limits(self):
        spec = InputSpec(design_kinds=(mc.NEWTONIAN,))
        derived = infer_derived_limits(spec).derived_limits
        # Fp*304.8 + 25 must not exceed 60 inches
        assert derived.primary_f_ratio == (3., 4.75)
        assert derived.system_f_ratio == (3., 4.75)

    def test_spec_otherwise_unchanged(self):
        spec = InputSpec(design_kinds=(mc.NEWTONIAN,))
        inferred = infer_derived_limits(spec)
        assert inferred.constraints == spec.constraints
        assert inferred.sweep == spec.sweep
        assert spec.derived_limits is None

    def test_no_feasible_trials(self):
        spec = newtonian_spec(max_tube=10.)
        derived = infer_derived_limits(spec).derived_limits
        assert derived.primary_f_ratio is None
        assert derived.system_f_ratio is None

    def test_folded_limits_match_sweep(self):
        spec = InputSpec(design_kinds=(mc.CASSEGRAIN,),
                         sweep=SweepSpec(3., 5., 1., 8., 12., 2.))
        derived = infer_derived_limits(spec).derived_limits
        result = run_sweep(spec, ctx=geometry_only())
        fps = [c.inputs.primary_f_ratio for c in result.ranked]
        fss = [c.inputs.system_f_ratio for c in result.ranked]
        assert derived.primary_f_ratio == (min(fps), max(fps))
        assert derived.system_f_ratio == (min(fss), max(fss))

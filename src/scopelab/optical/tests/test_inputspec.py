#!/usr/bin/env python3
# -*- coding: utf-8 -*-
""" tests for the input specification, persistence and presets

.. codeauthor: ScopeLab Developers
"""

import unittest

import attr
import pytest
from pytest import approx

import scopelab.optical.model_constants as mc
from scopelab.optical.inputspec import (InputSpec, ConstraintSpec,
                                        CoatingSpec, DerivedLimits,
                                        InputSpecError, default_spec,
                                        relaxed_spec, spec_to_dict,
                                        spec_from_dict, save_spec, load_spec,
                                        presets, preset)
from scopelab.optical.candidate import ConstraintResult


class InputSpecTestCase(unittest.TestCase):

    def test_default_spec(self):
        spec = default_spec()
        assert spec.aperture_mm == approx(304.8)
        assert spec.design_kinds == mc.DESIGN_KINDS
        assert spec.constraints.max_tube_length_mm == approx(60*25.4)
        assert spec.constraints.min_back_focus_mm == 100.
        assert spec.back_focus_mm == 100.
        assert spec.coatings.reflectivity == mc.DEFAULT_REFLECTIVITY_PER_MIRROR
        assert spec.coatings.corrector == mc.DEFAULT_CORRECTOR_TRANSMISSION

    def test_relaxed_spec_keeps_backfocus_target(self):
        spec = default_spec()
        relaxed = relaxed_spec(spec)
        assert relaxed.constraints.max_tube_length_mm == mc.RELAXED_MAX_TUBE_MM
        assert relaxed.constraints.max_obstruction_ratio == 1.
        assert relaxed.constraints.min_back_focus_mm == 0.
        assert relaxed.back_focus_mm == 100.
        # the original spec is untouched
        assert spec.constraints.max_obstruction_ratio == 0.35
        assert spec.back_focus_target is None

    def test_malformed_fields(self):
        with pytest.raises(InputSpecError):
            InputSpec(aperture_units='furlong')
        with pytest.raises(InputSpecError):
            InputSpec(design_kinds=('newtonian', 'refractor'))
        with pytest.raises(InputSpecError):
            InputSpec(aperture='twelve')
        with pytest.raises(InputSpecError):
            CoatingSpec(reflectivity_per_mirror=0.)
        with pytest.raises(InputSpecError):
            CoatingSpec(corrector_transmission=1.5)
        with pytest.raises(InputSpecError):
            DerivedLimits(primary_f_ratio=(1., 2., 3.))
        with pytest.raises(TypeError):
            InputSpec(constraints={'max_tube_length': 10})

    def test_infeasible_values_are_not_errors(self):
        spec = InputSpec(aperture=-1.)
        assert spec.aperture_mm == -1.

    def test_dict_round_trip(self):
        spec = attr.evolve(default_spec(),
                           derived_limits=DerivedLimits((3., 5.), (6., 9.)))
        spec_dict = spec_to_dict(spec)
        assert spec_dict['constraints']['tube_length_units'] == 'inch'
        assert spec_from_dict(spec_dict) == spec

    def test_from_dict_defaults_and_unknown_keys(self):
        spec = spec_from_dict({'aperture': 200., 'aperture_units': 'mm',
                               'design_kinds': ['newtonian']})
        assert spec.design_kinds == ('newtonian',)
        assert spec.constraints == ConstraintSpec()
        with pytest.raises(InputSpecError):
            spec_from_dict({'apperture': 200.})
        with pytest.raises(InputSpecError):
            spec_from_dict({'sweep': {'fp_min': 3.}})
        with pytest.raises(InputSpecError):
            spec_from_dict(['aperture', 200.])


def test_save_and_load(tmp_path):
    spec = preset('imaging-12')
    file_pth = save_spec(spec, tmp_path / 'specs' / 'imaging')
    assert file_pth.suffix == '.json'
    assert load_spec(file_pth) == spec


def test_load_rejects_other_json(tmp_path):
    file_pth = tmp_path / 'other.json'
    file_pth.write_text('{"optical_model": {}}')
    with pytest.raises(InputSpecError):
        load_spec(file_pth)


def test_presets():
    names = [p.name for p in presets()]
    assert names == ['visual-16', 'imaging-12', 'large-aperture-constrained']
    assert preset('visual-16').design_kinds == ('newtonian',)
    with pytest.raises(KeyError):
        preset('refractor-4')


def test_constraint_result_pass_iff_no_reasons():
    assert ConstraintResult.from_reasons([]).passed
    failed = ConstraintResult.from_reasons(["Tube too long"])
    assert not failed.passed
    assert failed.reasons == ("Tube too long",)
    with pytest.raises(ValueError):
        ConstraintResult(passed=True, reasons=("x",))

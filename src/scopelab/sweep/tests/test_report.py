#!/usr/bin/env python3
# -*- coding: utf-8 -*-
""" tests for the pandas reports

.. codeauthor: ScopeLab Developers
"""

import unittest

import numpy as np
from pytest import approx

import scopelab.optical.model_constants as mc
from scopelab.designs.context import DesignContext, DesignParams
from scopelab.designs.newtonian import newtonian
from scopelab.optical.inputspec import InputSpec, ConstraintSpec, SweepSpec
from scopelab.raytr.opticalplan import SampleSpec
from scopelab.sweep.report import (candidates_df, candidate_columns,
                                   trace_df, image_quality_df)
from scopelab.sweep.sweep import run_sweep


class CandidatesDataFrameTestCase(unittest.TestCase):

    def test_one_row_per_candidate(self):
        spec = InputSpec(design_kinds=(mc.NEWTONIAN,),
                         constraints=ConstraintSpec(max_tube_length=60.),
                         sweep=SweepSpec(4., 5., 0.5, 6., 16., 0.5))
        ctx = DesignContext(simulate=False)
        result = run_sweep(spec, ctx=ctx)
        df = candidates_df(result.candidates)
        assert len(df) == 3
        assert list(df.columns) == candidate_columns[1:]
        assert df.index.name == 'id'
        row = df.loc['newtonian-F5.00']
        assert not row['passed']
        assert row['reasons'].startswith("Tube length")
        assert df.loc['newtonian-F4.00', 'passed']
        assert df.loc['newtonian-F4.00', 'tube_length_mm'] == \
            approx(4*304.8 + 25.)

    def test_empty(self):
        df = candidates_df([])
        assert len(df) == 0
        assert 'kind' in df.columns


class TraceDataFrameTestCase(unittest.TestCase):

    def setUp(self):
        ctx = DesignContext(sample_spec=SampleSpec(pupil_steps=5,
                                                   rays_per_field=9,
                                                   max_bounces=8))
        self.candidate = newtonian(InputSpec(), DesignParams(4., 4.), ctx)

    def test_trace_df(self):
        audit = self.candidate.audit
        ray = next(r for r in audit.traces if r.hit_sensor)
        df = trace_df(ray)
        assert list(df['surface']) == ['primary', 'secondary', 'sensor']
        assert df.index.names == ['seg']
        assert np.allclose(df['end'].iloc[-1], ray.sensor_hit)

    def test_image_quality_df(self):
        df = image_quality_df(self.candidate.audit)
        assert len(df) == 2
        assert df.index.name == 'field_angle'
        assert df['spot_rms'].iloc[0] < df['spot_rms'].iloc[-1]

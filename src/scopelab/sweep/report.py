#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Tabulate candidates and traced rays as pandas DataFrames

.. Created on Wed Oct 21 16:05:09 2026

.. codeauthor: ScopeLab Developers
"""

import pandas as pd

from scopelab.raytr.simulator import ImageQualityResult

candidate_columns = ['id', 'kind', 'primary_f_ratio', 'system_f_ratio',
                     'tube_length_mm', 'back_focus_mm',
                     'secondary_diameter_mm', 'obstruction_ratio',
                     'usable_light_efficiency', 'transmission_factor',
                     'wfe_rms_waves_edge', 'strehl_estimate', 'passed',
                     'score', 'reasons']


def candidate_row(c):
    g = c.geometry
    t = c.throughput
    iq = c.image_quality
    return [c.id, c.kind, c.inputs.primary_f_ratio, c.inputs.system_f_ratio,
            g.tube_length_mm, g.back_focus_mm, g.secondary_diameter_mm,
            g.obstruction_ratio, t.usable_light_efficiency,
            t.transmission_factor, iq.wfe_rms_waves_edge,
            iq.strehl_estimate, c.constraints.passed, c.score.total,
            "; ".join(c.constraints.reasons)]


def candidates_df(candidates):
    """ return a |DataFrame| with one row per candidate, indexed by id """
    df = pd.DataFrame([candidate_row(c) for c in candidates],
                      columns=candidate_columns)
    return df.set_index('id')


def trace_df(trace_ray):
    """ return a |DataFrame| of the segments of a :class:`~.TraceRay` """
    rows = [(s.surface_id, s.a, s.b) for s in trace_ray.segments]
    df = pd.DataFrame(rows, columns=['surface', 'start', 'end'])
    df.index.names = ['seg']
    return df


def image_quality_df(sim_result):
    """ return a |DataFrame| of the per field results of a simulation """
    df = pd.DataFrame(sim_result.image_quality,
                      columns=ImageQualityResult._fields)
    return df.set_index('field_angle')

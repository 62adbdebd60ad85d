#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Batch normalized, weighted scoring of candidates

    Scoring is a two phase operation. :func:`compute_score_bounds` reduces
    the passing candidates of a sweep to the range of edge field wavefront
    error observed, then :func:`score_candidate` maps each candidate onto the
    [0, 1] terms and their weighted total using those bounds.

.. Created on Wed Oct 21 09:12:40 2026

.. codeauthor: ScopeLab Developers
"""

from collections import namedtuple
from math import isfinite

import attr

import scopelab.optical.model_constants as mc
from scopelab.optical.candidate import ScoreBreakdown, ScoreResult
from scopelab.util.misc_math import clamp01

ScoreBounds = namedtuple('ScoreBounds', ['min_wfe', 'max_wfe'])
ScoreBounds.__doc__ = "range of wavefront error over a batch of candidates"
ScoreBounds.min_wfe.__doc__ = "best (smallest) finite wfe, in waves"
ScoreBounds.max_wfe.__doc__ = "worst (largest) finite wfe, in waves"

DEFAULT_BOUNDS = ScoreBounds(0., 1.)


def compute_score_bounds(candidates):
    """ the min and max finite `wfe_rms_waves_edge` of `candidates`

    Returns:
        :class:`ScoreBounds`, (0, 1) if no candidate has a finite wfe
    """
    wfes = [c.image_quality.wfe_rms_waves_edge for c in candidates]
    wfes = [w for w in wfes if isfinite(w)]
    if len(wfes) == 0:
        return DEFAULT_BOUNDS
    return ScoreBounds(min(wfes), max(wfes))


def usable_light_term(candidate):
    return clamp01(candidate.throughput.usable_light_efficiency)


def aberration_term(wfe, bounds):
    """ 1 for the best wfe in the batch, 0 for the worst or an unknown wfe """
    if not isfinite(wfe):
        return 0.
    span = bounds.max_wfe - bounds.min_wfe
    if not span > 0:
        return 1.
    return 1. - clamp01((wfe - bounds.min_wfe)/span)


def obstruction_term(obstruction_ratio):
    """ light loss plus a quadratic contrast penalty """
    o = clamp01(obstruction_ratio)
    penalty = o + mc.OBSTRUCTION_CONTRAST_COEFFICIENT*o*o
    return clamp01(1. - penalty)


def score_candidate(candidate, bounds, weights):
    """ returns a copy of `candidate` with its score filled in

    Args:
        candidate: the :class:`~.Candidate` to score
        bounds: :class:`ScoreBounds` of the batch
        weights: :class:`~.WeightSpec`; the tube length weight is not used
    """
    terms = ScoreBreakdown(
        usable_light=usable_light_term(candidate),
        aberration=aberration_term(
            candidate.image_quality.wfe_rms_waves_edge, bounds),
        obstruction=obstruction_term(candidate.geometry.obstruction_ratio))
    total = (weights.usable_light*terms.usable_light
             + weights.aberration*terms.aberration
             + weights.obstruction*terms.obstruction)
    return attr.evolve(candidate, score=ScoreResult(total=total, terms=terms))

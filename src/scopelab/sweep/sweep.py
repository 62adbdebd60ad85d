#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Enumerate the focal ratio grid, check constraints and rank candidates

    :func:`run_sweep` is the main entry point. Every (kind, Fp, Fs) trial is
    generated under a relaxed copy of the spec so that no geometry is rejected
    during generation; the real constraints are then applied by one central
    check. Candidates failing a constraint are kept in
    :attr:`SweepResult.candidates` but are not ranked.

    :func:`infer_derived_limits` runs the same enumeration without ray
    tracing to find the focal ratio ranges that can pass the constraints.

.. Created on Wed Oct 21 10:02:15 2026

.. codeauthor: ScopeLab Developers
"""

import logging
from math import isfinite

import attr

import scopelab.optical.model_constants as mc
from scopelab.designs.context import DesignContext, DesignParams, geometry_only
from scopelab.designs.generators import generator_for
from scopelab.designs.metrics import check_constraints
from scopelab.optical.inputspec import DerivedLimits, relaxed_spec
from scopelab.sweep.score import compute_score_bounds, score_candidate

logger = logging.getLogger(__name__)


def enumerate_range(min_value, max_value, step):
    """ inclusive list of values from `min_value` to `max_value` by `step`

    The upper bound is tolerant of floating point accumulation and values are
    rounded to remove accumulated noise. An empty list is returned if `step`
    is not positive or the range is reversed or not finite.
    """
    if not (isfinite(min_value) and isfinite(max_value)):
        return []
    if not step > 0 or max_value < min_value:
        return []
    values = []
    v = min_value
    while v <= max_value + mc.RANGE_EPSILON:
        values.append(round(v, mc.RANGE_DECIMALS))
        v += step
    return values


def primary_f_ratios(spec):
    sw = spec.sweep
    return enumerate_range(sw.primary_f_ratio_min, sw.primary_f_ratio_max,
                           sw.primary_f_ratio_step)


def system_f_ratios(spec):
    """ the swept system focal ratios

    If the configured range is empty the target system focal ratio is used
    alone, provided it is finite and positive.
    """
    sw = spec.sweep
    values = enumerate_range(sw.system_f_ratio_min, sw.system_f_ratio_max,
                             sw.system_f_ratio_step)
    if len(values) > 0:
        return values
    target = spec.target_system_f_ratio
    if isfinite(target) and target > 0:
        return [target]
    return []


def design_trials(spec):
    """ generator of (kind, generator, DesignParams) in enumeration order

    Newtonian trials have one system focal ratio equal to the primary's.
    Unknown kinds are skipped.
    """
    fp_values = primary_f_ratios(spec)
    fs_values = system_f_ratios(spec)
    for kind in spec.design_kinds:
        gen = generator_for(kind)
        if gen is None:
            continue
        for Fp in fp_values:
            if kind == mc.NEWTONIAN:
                yield kind, gen, DesignParams(Fp, Fp)
                continue
            for Fs in fs_values:
                yield kind, gen, DesignParams(Fp, Fs)


def generate_candidates(spec, ctx):
    """ generate every trial under the relaxed spec and check the real one """
    relaxed = relaxed_spec(spec)
    candidates = []
    for kind, gen, params in design_trials(spec):
        c = gen(relaxed, params, ctx)
        if c is None:
            continue
        candidates.append(check_constraints(spec, c))
    return candidates


def _empty_best_by_kind():
    return {kind: None for kind in mc.DESIGN_KINDS}


@attr.s(frozen=True, eq=False)
class SweepResult:
    """ The outcome of one :func:`run_sweep`

    Attributes:
        candidates: all generated candidates, passing or not, in enumeration
                    order
        ranked: the passing candidates, scored, sorted by descending total
                score
        best_overall: the first ranked candidate, or None
        best_by_kind: dict of the best ranked candidate of each design kind,
                      None for kinds with no passing candidate
        top: the first N ranked candidates
    """
    candidates = attr.ib(factory=list)
    ranked = attr.ib(factory=list)
    best_overall = attr.ib(default=None)
    best_by_kind = attr.ib(factory=_empty_best_by_kind)
    top = attr.ib(factory=list)

    def listobj_str(self):
        o_str = (f"{len(self.candidates)} candidates generated, "
                 f"{len(self.ranked)} passing\n")
        if self.best_overall is None:
            o_str += "no candidate passes the constraints\n"
            return o_str
        best = self.best_overall
        o_str += f"best overall: {best.id} score={best.score.total:.4f}\n"
        for kind, c in self.best_by_kind.items():
            if c is not None:
                o_str += f"  {kind}: {c.id} score={c.score.total:.4f}\n"
            else:
                o_str += f"  {kind}: none\n"
        return o_str


def rank_candidates(passing, weights):
    """ score `passing` against its own bounds and sort by descending score

    The sort is stable, so ties keep their enumeration order.
    """
    bounds = compute_score_bounds(passing)
    scored = [score_candidate(c, bounds, weights) for c in passing]
    return sorted(scored, key=lambda c: c.score.total, reverse=True)


def _top_count(top_n):
    """ the whole number of `top_n`, clamped at 0 """
    msg = f"top_n must be a whole number, got {top_n!r}"
    try:
        n = int(top_n)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(msg) from None
    if n != top_n:
        raise ValueError(msg)
    return max(0, n)


def run_sweep(spec, top_n=mc.DEFAULT_TOP_N, ctx=None):
    """ generate, check, score and rank every trial of `spec`

    Args:
        spec: the :class:`~.InputSpec` to explore
        top_n: length of the :attr:`SweepResult.top` slice, negative values
               are taken as 0. A float must have a whole value
        ctx: :class:`~.DesignContext`; if None, a default context is used

    Returns:
        a :class:`SweepResult`. If no candidate passes, `ranked` and `top`
        are empty and `best_overall` is None.

    Raises:
        ValueError: `top_n` is not a whole number
    """
    top_count = _top_count(top_n)
    if ctx is None:
        ctx = DesignContext()

    candidates = generate_candidates(spec, ctx)
    passing = [c for c in candidates if c.constraints.passed]
    logger.info("sweep: %d candidates generated, %d passing",
                len(candidates), len(passing))

    if len(passing) == 0:
        return SweepResult(candidates=candidates)

    ranked = rank_candidates(passing, spec.weights)

    best_by_kind = _empty_best_by_kind()
    for c in ranked:
        if best_by_kind.get(c.kind) is None:
            best_by_kind[c.kind] = c

    top = ranked[:top_count]
    logger.info("sweep: best overall %s, score %.4f",
                ranked[0].id, ranked[0].score.total)
    return SweepResult(candidates=candidates, ranked=ranked,
                       best_overall=ranked[0], best_by_kind=best_by_kind,
                       top=top)


def _limits(values):
    if len(values) == 0:
        return None
    return min(values), max(values)


def infer_derived_limits(spec):
    """ returns a copy of `spec` with the feasible focal ratio ranges

    The trials of `spec` are generated without ray tracing and checked
    against the real constraints. The min and max Fp and Fs among the passing
    trials are recorded in :attr:`~.InputSpec.derived_limits`; a range is
    None when nothing passes.
    """
    candidates = generate_candidates(spec, geometry_only())
    fp_passing = []
    fs_passing = []
    for c in candidates:
        if c.constraints.passed:
            fp_passing.append(c.inputs.primary_f_ratio)
            fs_passing.append(c.inputs.system_f_ratio)
    limits = DerivedLimits(primary_f_ratio=_limits(fp_passing),
                           system_f_ratio=_limits(fs_passing))
    logger.debug("derived limits: %s", limits)
    return attr.evolve(spec, derived_limits=limits)

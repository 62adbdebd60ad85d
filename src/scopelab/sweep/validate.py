#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Suggest the smallest constraint changes that admit a candidate

    When a spec admits no candidate, :func:`suggest_adjustment` looks at
    every trial generated under the relaxed constraints and picks the one
    needing the smallest relative loosening of the max tube length, the max
    obstruction ratio and the min backfocus. The returned spec has just
    those constraints moved, expressed in the user's units.

.. Created on Wed Oct 21 14:27:51 2026

.. codeauthor: ScopeLab Developers
"""

import logging
from collections import namedtuple

import attr

from scopelab.designs.context import geometry_only
from scopelab.optical.inputspec import relaxed_spec
from scopelab.sweep.sweep import design_trials
from scopelab.util.units import from_mm

logger = logging.getLogger(__name__)

MAX = 'max'
MIN = 'min'

SpecViolation = namedtuple('SpecViolation',
                           ['key', 'value', 'constraint', 'warning'])
SpecViolation.__doc__ = "a constraint moved to admit a candidate"
SpecViolation.key.__doc__ = "dotted name of the constraint field"
SpecViolation.value.__doc__ = "the new value, in the field's units"
SpecViolation.constraint.__doc__ = "'max' or 'min'"
SpecViolation.warning.__doc__ = "human readable description of the change"

AdjustmentResult = namedtuple('AdjustmentResult', ['spec', 'violations'])
AdjustmentResult.__doc__ = "an adjusted spec and the changes made to it"
AdjustmentResult.spec.__doc__ = "the adjusted InputSpec"
AdjustmentResult.violations.__doc__ = "list of SpecViolations"

ConstraintValues = namedtuple('ConstraintValues',
                              ['max_tube_mm', 'max_obstruction',
                               'min_back_focus_mm'])
ConstraintValues.__doc__ = "constraint limits normalized to mm"


def metric_delta(current, needed):
    """ sum of the relative changes needed to move `current` to `needed`

    Only loosening counts: a larger max tube or obstruction, or a smaller
    min backfocus.
    """
    tube = 0.
    if needed.max_tube_mm > current.max_tube_mm:
        tube = ((needed.max_tube_mm - current.max_tube_mm)
                / max(1., current.max_tube_mm))

    obs = 0.
    if needed.max_obstruction > current.max_obstruction:
        obs = ((needed.max_obstruction - current.max_obstruction)
               / max(1e-9, current.max_obstruction))

    back = 0.
    if needed.min_back_focus_mm < current.min_back_focus_mm:
        back = ((current.min_back_focus_mm - needed.min_back_focus_mm)
                / max(1., current.min_back_focus_mm))

    return tube + obs + back


def current_constraints(spec):
    cs = spec.constraints
    return ConstraintValues(cs.max_tube_length_mm, cs.max_obstruction_ratio,
                            cs.min_back_focus_mm)


def needed_constraints(current, candidate):
    """ the loosest limits `candidate` requires, never tighter than `current`
    for the backfocus
    """
    g = candidate.geometry
    return ConstraintValues(g.tube_length_mm, g.obstruction_ratio,
                            min(current.min_back_focus_mm, g.back_focus_mm))


def best_feasible_candidate(spec):
    """ the generated candidate closest to meeting the constraints of `spec`

    Returns:
        (candidate, needed ConstraintValues) or None if no trial of `spec`
        can be generated
    """
    current = current_constraints(spec)
    relaxed = relaxed_spec(spec)
    ctx = geometry_only()
    best = None
    best_delta = None
    for kind, gen, params in design_trials(spec):
        c = gen(relaxed, params, ctx)
        if c is None:
            continue
        needed = needed_constraints(current, c)
        delta = metric_delta(current, needed)
        if best is None or delta < best_delta:
            best = c, needed
            best_delta = delta
    return best


def suggest_adjustment(spec):
    """ loosen the constraints of `spec` just enough to admit a candidate

    Returns:
        an :class:`AdjustmentResult`. The spec is returned unchanged, with no
        violations, if it already admits a candidate or if no candidate can be
        generated at all.
    """
    best = best_feasible_candidate(spec)
    if best is None:
        logger.info("no candidate can be generated for this spec")
        return AdjustmentResult(spec, [])

    c, needed = best
    current = current_constraints(spec)
    cs = spec.constraints
    violations = []
    changes = {}

    if needed.max_tube_mm > current.max_tube_mm + 1e-9:
        units = cs.tube_length_units
        value = from_mm(needed.max_tube_mm, units)
        violations.append(SpecViolation(
            'constraints.max_tube_length', value, MAX,
            f"Max tube length increased to {value:.2f} {units} "
            f"to allow at least one {c.kind} candidate"))
        changes['max_tube_length'] = value

    if needed.max_obstruction > current.max_obstruction + 1e-12:
        value = needed.max_obstruction
        violations.append(SpecViolation(
            'constraints.max_obstruction_ratio', value, MAX,
            f"Max obstruction ratio increased to {value:.3f} "
            f"to allow at least one {c.kind} candidate"))
        changes['max_obstruction_ratio'] = value

    if needed.min_back_focus_mm < current.min_back_focus_mm - 1e-9:
        units = cs.back_focus_units
        value = from_mm(needed.min_back_focus_mm, units)
        violations.append(SpecViolation(
            'constraints.min_back_focus', value, MIN,
            f"Min backfocus decreased to {value:.2f} {units} "
            f"to allow at least one {c.kind} candidate"))
        changes['min_back_focus'] = value

    for v in violations:
        logger.info(v.warning)

    if len(changes) == 0:
        return AdjustmentResult(spec, violations)
    adjusted = attr.evolve(spec, constraints=attr.evolve(cs, **changes))
    return AdjustmentResult(adjusted, violations)

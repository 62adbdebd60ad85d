#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" The input specification for a design space exploration

    An :class:`InputSpec` is the single description of what to explore: the
    aperture, the design families, the constraints a candidate must meet, the
    coating efficiencies, the focal ratio grid to sweep and the score weights.
    All the records are immutable; use :func:`attr.evolve` to derive a
    modified spec.

    The shape of a spec is checked when it is built. A malformed field raises
    :class:`InputSpecError`. Numerically infeasible values, e.g. an empty
    sweep range, are not errors; they simply produce no candidates.

    Specs are persisted as JSON with :mod:`json_tricks`, see
    :func:`save_spec` and :func:`load_spec`.

.. Created on Mon Oct 19 10:31:50 2026

.. codeauthor: ScopeLab Developers
"""

import logging
import numbers
from collections import namedtuple
from pathlib import Path

import attr
import json_tricks

import scopelab.optical.model_constants as mc
from scopelab.util.units import UNITS, to_mm

logger = logging.getLogger(__name__)


class InputSpecError(ValueError):
    """ Exception raised for a malformed input specification """


def _real(instance, attribute, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InputSpecError(f"{attribute.name} must be a number, "
                             f"got {value!r}")


def _optional_real(instance, attribute, value):
    if value is not None:
        _real(instance, attribute, value)


def _units(instance, attribute, value):
    if value not in UNITS:
        raise InputSpecError(f"{attribute.name} must be one of {UNITS}, "
                             f"got {value!r}")


def _fraction(lower_open):
    def check(instance, attribute, value):
        if value is None:
            return
        _real(instance, attribute, value)
        lower_ok = value > 0 if lower_open else value >= 0
        if not (lower_ok and value <= 1):
            interval = '(0, 1]' if lower_open else '[0, 1]'
            raise InputSpecError(f"{attribute.name} must lie in {interval}, "
                                 f"got {value!r}")
    return check


def _design_kinds(instance, attribute, value):
    for kind in value:
        if kind not in mc.DESIGN_KINDS:
            raise InputSpecError(f"unknown design kind {kind!r}; expected "
                                 f"one of {mc.DESIGN_KINDS}")


def _range(instance, attribute, value):
    if value is None:
        return
    if len(value) != 2:
        raise InputSpecError(f"{attribute.name} must be a (min, max) pair")
    for v in value:
        _real(instance, attribute, v)


def _to_tuple(value):
    if isinstance(value, str):
        return (value,)
    try:
        return tuple(value)
    except TypeError:
        raise InputSpecError(f"expected a sequence, got {value!r}") from None


def _to_optional_tuple(value):
    return None if value is None else _to_tuple(value)


@attr.s(frozen=True)
class ConstraintSpec:
    """ Limits a candidate must satisfy to be ranked

    The user facing lengths carry their own unit tags; the `*_mm` properties
    give the millimeter values all comparisons are made in.
    """
    max_tube_length = attr.ib(default=60., validator=_real)
    tube_length_units = attr.ib(default='inch', validator=_units)
    max_obstruction_ratio = attr.ib(default=0.35, validator=_real)
    min_back_focus = attr.ib(default=100., validator=_real)
    back_focus_units = attr.ib(default='mm', validator=_units)
    field_radius = attr.ib(default=12., validator=_real)
    field_units = attr.ib(default='mm', validator=_units)

    @property
    def max_tube_length_mm(self):
        return to_mm(self.max_tube_length, self.tube_length_units)

    @property
    def min_back_focus_mm(self):
        return to_mm(self.min_back_focus, self.back_focus_units)

    @property
    def field_radius_mm(self):
        """ radius of the fully illuminated field at the focal plane """
        return to_mm(self.field_radius, self.field_units)


@attr.s(frozen=True)
class CoatingSpec:
    """ Coating efficiencies; None selects the model default """
    reflectivity_per_mirror = attr.ib(default=None,
                                      validator=_fraction(lower_open=True))
    corrector_transmission = attr.ib(default=None,
                                     validator=_fraction(lower_open=False))

    @property
    def reflectivity(self):
        if self.reflectivity_per_mirror is None:
            return mc.DEFAULT_REFLECTIVITY_PER_MIRROR
        return self.reflectivity_per_mirror

    @property
    def corrector(self):
        if self.corrector_transmission is None:
            return mc.DEFAULT_CORRECTOR_TRANSMISSION
        return self.corrector_transmission


@attr.s(frozen=True)
class SweepSpec:
    """ Inclusive focal ratio ranges to enumerate """
    primary_f_ratio_min = attr.ib(default=3., validator=_real)
    primary_f_ratio_max = attr.ib(default=10., validator=_real)
    primary_f_ratio_step = attr.ib(default=0.25, validator=_real)
    system_f_ratio_min = attr.ib(default=6., validator=_real)
    system_f_ratio_max = attr.ib(default=16., validator=_real)
    system_f_ratio_step = attr.ib(default=0.5, validator=_real)


@attr.s(frozen=True)
class WeightSpec:
    """ Linear weights of the score terms

    The weights need not sum to 1. `tube_length` is carried for display only
    and does not enter the total score.
    """
    usable_light = attr.ib(default=0.45, validator=_real)
    aberration = attr.ib(default=0.25, validator=_real)
    obstruction = attr.ib(default=0.15, validator=_real)
    tube_length = attr.ib(default=0.15, validator=_real)


@attr.s(frozen=True)
class DerivedLimits:
    """ Empirically feasible (min, max) focal ratio ranges, or None """
    primary_f_ratio = attr.ib(default=None, converter=_to_optional_tuple,
                              validator=_range)
    system_f_ratio = attr.ib(default=None, converter=_to_optional_tuple,
                             validator=_range)


@attr.s(frozen=True)
class InputSpec:
    """ Everything needed to generate, check and rank candidate telescopes

    Attributes:
        aperture: clear aperture of the primary mirror, in `aperture_units`
        aperture_units: 'mm' or 'inch'
        target_system_f_ratio: system focal ratio used when the system focal
                               ratio sweep range is empty
        design_kinds: the design families to generate
        constraints: :class:`ConstraintSpec`
        sweep: :class:`SweepSpec`
        weights: :class:`WeightSpec`
        coatings: :class:`CoatingSpec`
        back_focus_target: if not None, the backfocus (mm) used to lay out
                           two mirror designs instead of the minimum backfocus
                           constraint
        derived_limits: :class:`DerivedLimits` filled in by
                        :func:`~.infer_derived_limits`, or None
    """
    aperture = attr.ib(default=12., validator=_real)
    aperture_units = attr.ib(default='inch', validator=_units)
    target_system_f_ratio = attr.ib(default=6., validator=_real)
    design_kinds = attr.ib(default=mc.DESIGN_KINDS, converter=_to_tuple,
                           validator=_design_kinds)
    constraints = attr.ib(factory=ConstraintSpec,
                          validator=attr.validators.instance_of(
                              ConstraintSpec))
    sweep = attr.ib(factory=SweepSpec,
                    validator=attr.validators.instance_of(SweepSpec))
    weights = attr.ib(factory=WeightSpec,
                      validator=attr.validators.instance_of(WeightSpec))
    coatings = attr.ib(factory=CoatingSpec,
                       validator=attr.validators.instance_of(CoatingSpec))
    back_focus_target = attr.ib(default=None, validator=_optional_real)
    derived_limits = attr.ib(default=None, validator=attr.validators.optional(
        attr.validators.instance_of(DerivedLimits)))

    @property
    def aperture_mm(self):
        return to_mm(self.aperture, self.aperture_units)

    @property
    def back_focus_mm(self):
        """ the backfocus two mirror layouts are solved for """
        if self.back_focus_target is not None:
            return self.back_focus_target
        return self.constraints.min_back_focus_mm


def default_spec():
    """ returns the default exploration: a 12 inch aperture, all families """
    return InputSpec()


def relaxed_spec(spec):
    """ returns a copy of `spec` whose constraints admit any geometry

    The two mirror layout solves for the backfocus it is given, so the real
    minimum backfocus is pinned as the backfocus target. Without it the
    relaxed layout would collapse to zero backfocus.
    """
    cs = spec.constraints
    relaxed = attr.evolve(cs,
                          max_tube_length=mc.RELAXED_MAX_TUBE_MM,
                          tube_length_units='mm',
                          max_obstruction_ratio=1.,
                          min_back_focus=0.)
    return attr.evolve(spec, constraints=relaxed,
                       back_focus_target=spec.back_focus_mm)


# --- persistence
_sections = {
    'constraints': ConstraintSpec,
    'sweep': SweepSpec,
    'weights': WeightSpec,
    'coatings': CoatingSpec,
    'derived_limits': DerivedLimits,
    }


def _build(cls, attrs, where):
    if not isinstance(attrs, dict):
        raise InputSpecError(f"{where} must be a mapping, got {attrs!r}")
    names = {a.name for a in attr.fields(cls)}
    unknown = set(attrs) - names
    if unknown:
        raise InputSpecError(f"unknown {where} keys: {sorted(unknown)}")
    return cls(**attrs)


def spec_to_dict(spec):
    """ returns a plain dict (nested by section) for `spec` """
    return attr.asdict(spec, retain_collection_types=False)


def spec_from_dict(spec_dict):
    """ build an :class:`InputSpec` from a dict such as
    :func:`spec_to_dict` produces

    Missing keys take their defaults; unknown keys raise
    :class:`InputSpecError`.
    """
    if not isinstance(spec_dict, dict):
        raise InputSpecError(f"spec must be a mapping, got {spec_dict!r}")
    attrs = dict(spec_dict)
    for key, cls in _sections.items():
        if attrs.get(key) is not None:
            attrs[key] = _build(cls, attrs[key], key)
    return _build(InputSpec, attrs, 'spec')


def save_spec(spec, filename):
    """ write `spec` to a json file, creating parent directories """
    file_pth = Path(filename).with_suffix('.json')
    if not file_pth.parent.exists():
        file_pth.parent.mkdir(parents=True)

    fs_dict = {'input_spec': spec_to_dict(spec)}
    with open(file_pth, 'w') as f:
        json_tricks.dump(fs_dict, f, indent=1,
                         separators=(',', ':'), allow_nan=True)
    logger.debug("saved input spec to %s", file_pth)
    return file_pth


def load_spec(filename):
    """ read an :class:`InputSpec` from a json file written by
    :func:`save_spec`
    """
    file_pth = Path(filename)
    with open(file_pth, 'r') as f:
        contents = f.read()
    try:
        obj_dict = json_tricks.loads(contents)
    except ValueError as err:
        raise InputSpecError(f"{file_pth} is not valid json: {err}") from err
    if not isinstance(obj_dict, dict) or 'input_spec' not in obj_dict:
        raise InputSpecError(f"{file_pth} does not contain an input spec")
    return spec_from_dict(obj_dict['input_spec'])


# --- presets
Preset = namedtuple('Preset', ['name', 'label', 'description', 'spec'])
Preset.__doc__ = "A named starting point for an exploration"
Preset.name.__doc__ = "lookup key"
Preset.label.__doc__ = "short display title"
Preset.description.__doc__ = "one line summary"
Preset.spec.__doc__ = "the InputSpec"


def _preset_list():
    return [
        Preset('visual-16', "16-inch Visual Dobsonian",
               "Large-aperture visual scope prioritizing light grasp "
               "and simplicity",
               InputSpec(
                   aperture=16., aperture_units='inch',
                   target_system_f_ratio=5., design_kinds=(mc.NEWTONIAN,),
                   constraints=ConstraintSpec(
                       max_tube_length=80., tube_length_units='inch',
                       max_obstruction_ratio=0.25,
                       min_back_focus=0., back_focus_units='mm',
                       field_radius=10., field_units='mm'),
                   coatings=CoatingSpec(reflectivity_per_mirror=0.92,
                                        corrector_transmission=1.0),
                   sweep=SweepSpec(4., 6., 0.25, 5., 5., 1.),
                   weights=WeightSpec(usable_light=0.6, aberration=0.2,
                                      obstruction=0.1, tube_length=0.1))),
        Preset('imaging-12', "12-inch Imaging",
               "Balanced imaging scope with emphasis on aberration control",
               InputSpec(
                   aperture=12., aperture_units='inch',
                   target_system_f_ratio=8.,
                   design_kinds=(mc.NEWTONIAN, mc.CASSEGRAIN, mc.RC),
                   constraints=ConstraintSpec(
                       max_tube_length=60., tube_length_units='inch',
                       max_obstruction_ratio=0.35,
                       min_back_focus=100., back_focus_units='mm',
                       field_radius=15., field_units='mm'),
                   coatings=CoatingSpec(reflectivity_per_mirror=0.9,
                                        corrector_transmission=0.95),
                   sweep=SweepSpec(3., 6., 0.25, 6., 12., 0.5),
                   weights=WeightSpec(usable_light=0.35, aberration=0.4,
                                      obstruction=0.1, tube_length=0.15))),
        Preset('large-aperture-constrained', "36-inch Length-Constrained",
               "Extreme aperture under strict tube length constraints",
               InputSpec(
                   aperture=36., aperture_units='inch',
                   target_system_f_ratio=10., design_kinds=mc.DESIGN_KINDS,
                   constraints=ConstraintSpec(
                       max_tube_length=72., tube_length_units='inch',
                       max_obstruction_ratio=0.4,
                       min_back_focus=150., back_focus_units='mm',
                       field_radius=12., field_units='mm'),
                   coatings=CoatingSpec(reflectivity_per_mirror=0.92,
                                        corrector_transmission=0.9),
                   sweep=SweepSpec(2.5, 6., 0.25, 8., 16., 1.),
                   weights=WeightSpec(usable_light=0.3, aberration=0.3,
                                      obstruction=0.15, tube_length=0.25))),
        ]


def presets():
    """ returns the list of built in :class:`Preset` """
    return _preset_list()


def preset(name):
    """ returns the :class:`InputSpec` of the preset `name`

    Raises:
        KeyError: if there is no preset called `name`
    """
    for p in _preset_list():
        if p.name == name:
            return p.spec
    raise KeyError(name)

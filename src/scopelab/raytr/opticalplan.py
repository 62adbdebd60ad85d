#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" The traceable description of a candidate telescope

    An :class:`OpticalPlan` is built fresh by a design generator for every
    trial and is read only thereafter.

.. Created on Mon Oct 19 15:30:56 2026

.. codeauthor: ScopeLab Developers
"""

import attr


def _positive_int(instance, attribute, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{attribute.name} must be a positive integer, "
                         f"got {value!r}")


@attr.s(frozen=True)
class EntranceSpec:
    """ Launch description for the ray bundle

    Attributes:
        z_start: axial position rays are launched from
        pupil_radius: radius of the entrance pupil
        field_angles: field angles to evaluate, in radians; the first is on
                      axis and the last is the edge of the field
    """
    z_start = attr.ib()
    pupil_radius = attr.ib()
    field_angles = attr.ib(converter=tuple)


@attr.s(frozen=True)
class SensorSpec:
    """ the terminal absorbing :class:`~.PlaneSurface` """
    plane = attr.ib()

    @property
    def id(self):
        return self.plane.id


@attr.s(frozen=True, eq=False)
class OpticalPlan:
    """ ordered non-sensor surfaces, the entrance and the sensor """
    surfaces = attr.ib(converter=tuple)
    entrance = attr.ib()
    sensor = attr.ib()

    def listobj_str(self):
        ent = self.entrance
        o_str = (f"entrance: z={ent.z_start:.3f} "
                 f"pupil radius={ent.pupil_radius:.3f} "
                 f"field angles={list(ent.field_angles)}\n")
        for srf in self.surfaces:
            o_str += srf.listobj_str()
        o_str += self.sensor.plane.listobj_str()
        return o_str


@attr.s(frozen=True)
class SampleSpec:
    """ Sampling of the ray bundle, shared by every trial of a sweep

    Attributes:
        pupil_steps: grid points along each axis of the entrance pupil
        rays_per_field: rays picked from the pupil grid for each field angle
        max_bounces: surface interactions allowed before a ray is abandoned
    """
    pupil_steps = attr.ib(default=9, validator=_positive_int)
    rays_per_field = attr.ib(default=21, validator=_positive_int)
    max_bounces = attr.ib(default=8, validator=_positive_int)

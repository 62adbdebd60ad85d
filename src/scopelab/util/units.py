#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Conversions between the user facing length units and millimeters

.. Created on Mon Oct 19 09:40:03 2026

.. codeauthor: ScopeLab Developers
"""
from math import pi

MM_PER_INCH = 25.4

UNITS = ('mm', 'inch')


def to_mm(value, units):
    if units == 'mm':
        return value
    elif units == 'inch':
        return value*MM_PER_INCH
    raise ValueError(f"unknown length units: {units!r}")


def from_mm(value_mm, units):
    if units == 'mm':
        return value_mm
    elif units == 'inch':
        return value_mm/MM_PER_INCH
    raise ValueError(f"unknown length units: {units!r}")


def circle_area(diameter):
    """ area of a circle of the given diameter """
    return pi*(0.5*diameter)**2

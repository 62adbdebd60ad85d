#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Support for ray trace exception handling

    These exceptions end the trace of a single ray. They never escape the
    simulator, which records the ray as not reaching the sensor.

.. Created on Mon Oct 19 14:20:31 2026

.. codeauthor: ScopeLab Developers
"""


class TraceError(Exception):
    """ Exception raised when ray tracing a plan """
    def __init__(self, segments=None):
        self.segments = segments if segments is not None else []


class TraceMissedSurfaceError(TraceError):
    """ Exception raised when a ray leaves the plan without hitting a surface
    """
    def __init__(self, pt=None, d=None, segments=None):
        super().__init__(segments)
        self.pt = pt
        self.d = d

    def __str__(self):
        return f"ray from {self.pt} along {self.d} missed every surface"


class TraceAbsorbedError(TraceError):
    """ Exception raised when a ray is stopped by an absorber other than the
    sensor
    """
    def __init__(self, srf, int_pt, segments=None):
        super().__init__(segments)
        self.srf = srf
        self.int_pt = int_pt

    def __str__(self):
        return f"ray absorbed by {self.srf.id} at {self.int_pt}"


class TraceBounceLimitError(TraceError):
    """ Exception raised when a ray exhausts its bounce budget """
    def __init__(self, max_bounces, segments=None):
        super().__init__(segments)
        self.max_bounces = max_bounces

    def __str__(self):
        return f"ray exceeded {self.max_bounces} bounces"

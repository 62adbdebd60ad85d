#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Inputs shared by every design generator call

.. Created on Tue Oct 20 09:05:33 2026

.. codeauthor: ScopeLab Developers
"""

from collections import namedtuple

import attr

from scopelab.raytr.opticalplan import SampleSpec
from scopelab.raytr.simulator import OpticalSimulator

DesignParams = namedtuple('DesignParams', ['primary_f_ratio',
                                           'system_f_ratio'])
DesignParams.__doc__ = "the focal ratios of one design trial"
DesignParams.primary_f_ratio.__doc__ = "primary mirror focal ratio, Fp"
DesignParams.system_f_ratio.__doc__ = "overall system focal ratio, Fs"


@attr.s(frozen=True)
class DesignContext:
    """ Simulation settings passed to the generators

    Attributes:
        simulator: the :class:`~.OpticalSimulator` that traces plans
        sample_spec: :class:`~.SampleSpec` used for every plan
        simulate: if False, plans are built but not traced and the image
                  quality metrics are left unknown
    """
    simulator = attr.ib(factory=OpticalSimulator)
    sample_spec = attr.ib(factory=SampleSpec)
    simulate = attr.ib(default=True)


def geometry_only():
    """ a context that skips ray tracing """
    return DesignContext(simulate=False)

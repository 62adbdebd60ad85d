#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Classical Cassegrain generator: parabolic primary, hyperbolic secondary

.. Created on Tue Oct 20 11:02:40 2026

.. codeauthor: ScopeLab Developers
"""

import scopelab.optical.model_constants as mc
from scopelab.designs.context import DesignContext
from scopelab.designs.twomirror import folded_candidate, cassegrain_conics


def cassegrain(spec, params, ctx=None):
    """ generate a classical Cassegrain candidate

    Returns:
        a :class:`~.Candidate`, or None if `params` are physically invalid
    """
    if ctx is None:
        ctx = DesignContext()
    return folded_candidate(mc.CASSEGRAIN, spec, params, ctx,
                            mc.CASSEGRAIN_BAFFLE_FACTOR, cassegrain_conics)

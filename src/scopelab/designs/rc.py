#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Ritchey-Chrétien generator: two hyperbolic mirrors, free of coma

.. Created on Tue Oct 20 11:10:05 2026

.. codeauthor: ScopeLab Developers
"""

import scopelab.optical.model_constants as mc
from scopelab.designs.context import DesignContext
from scopelab.designs.twomirror import (folded_candidate,
                                        ritchey_chretien_conics)


def rc(spec, params, ctx=None):
    """ generate a Ritchey-Chrétien candidate

    Returns:
        a :class:`~.Candidate`, or None if `params` are physically invalid
    """
    if ctx is None:
        ctx = DesignContext()
    return folded_candidate(mc.RC, spec, params, ctx, mc.RC_BAFFLE_FACTOR,
                            ritchey_chretien_conics)

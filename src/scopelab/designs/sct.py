#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Schmidt-Cassegrain generator

    The corrector plate is modeled as a flat window in front of the
    secondary that costs transmission but does not bend rays; the mirrors
    use the Cassegrain conic constants.

.. Created on Tue Oct 20 11:16:52 2026

.. codeauthor: ScopeLab Developers
"""

import scopelab.optical.model_constants as mc
from scopelab.designs.context import DesignContext
from scopelab.designs.twomirror import folded_candidate, cassegrain_conics


def sct(spec, params, ctx=None):
    """ generate a Schmidt-Cassegrain candidate

    Returns:
        a :class:`~.Candidate`, or None if `params` are physically invalid
    """
    if ctx is None:
        ctx = DesignContext()
    return folded_candidate(mc.SCT, spec, params, ctx,
                            mc.SCT_BAFFLE_FACTOR, cassegrain_conics,
                            corrector=spec.coatings.corrector)

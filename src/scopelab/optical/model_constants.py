#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" model constants

.. Created on Mon Oct 19 10:02:17 2026

.. codeauthor: ScopeLab Developers
"""

# design kinds, in enumeration order
NEWTONIAN, CASSEGRAIN, SCT, RC = 'newtonian', 'cassegrain', 'sct', 'rc'
DESIGN_KINDS = (NEWTONIAN, CASSEGRAIN, SCT, RC)

# coatings
DEFAULT_REFLECTIVITY_PER_MIRROR = 0.9
DEFAULT_CORRECTOR_TRANSMISSION = 0.9

# mechanical allowances
DEFAULT_TUBE_MARGIN_MM = 25.0
NEWTONIAN_INTERCEPT_FRACTION = 0.25

# central obstruction diameter over geometric secondary diameter
CASSEGRAIN_BAFFLE_FACTOR = 1.06
RC_BAFFLE_FACTOR = 1.14
SCT_BAFFLE_FACTOR = 1.22

# contrast penalty: 1 - (o + c*o**2)
OBSTRUCTION_CONTRAST_COEFFICIENT = 0.15

# design wavelength, 550 nm
WAVELENGTH_MM = 0.00055
AIRY_FACTOR = 1.22

# numerical tolerances and iteration caps
NEWTON_MAX_ITER = 40
NEWTON_TOLERANCE = 1e-9
DEGENERATE_TOLERANCE = 1e-12
APERTURE_FUZZ = 1e-12
MIN_HIT_DISTANCE = 1e-9
RANGE_EPSILON = 1e-12
RANGE_DECIMALS = 10

# best focus search: +/- FOCUS_HALF_STEPS steps of
# max(FOCUS_MIN_STEP_MM, |z0|*FOCUS_STEP_FRACTION)
FOCUS_HALF_STEPS = 4
FOCUS_MIN_STEP_MM = 0.5
FOCUS_STEP_FRACTION = 1e-4

# fewest sensor hits with a meaningful rms spot size
MIN_SPOT_HITS = 3

# relaxed constraint set used during generation
RELAXED_MAX_TUBE_MM = 1e9

DEFAULT_TOP_N = 25

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
"""Utilities for sampling the entrance pupil

.. Created on Mon Oct 19 15:47:20 2026

.. codeauthor: ScopeLab Developers
"""

from math import floor

import numpy as np

import scopelab.optical.model_constants as mc


def grid_ray_generator(steps, radius):
    """Generator function to produce a 2d square regular grid.

    The grid spans [-radius, radius] along each axis with `steps` samples,
    row by row. A single step yields only the pupil center.
    """
    n = max(1, steps)
    for i in range(n):
        fy = 0. if n == 1 else 2*i/(n - 1) - 1
        for j in range(n):
            fx = 0. if n == 1 else 2*j/(n - 1) - 1
            yield np.array([fx*radius, fy*radius])


def pupil_grid(steps, radius):
    """ the grid points inside the circular pupil of `radius`

    Never empty: if no point falls inside, the pupil center is returned.
    """
    r2 = radius*radius + mc.APERTURE_FUZZ
    samples = [xy for xy in grid_ray_generator(steps, radius)
               if xy[0]*xy[0] + xy[1]*xy[1] <= r2]
    if len(samples) == 0:
        samples.append(np.array([0., 0.]))
    return samples


def pick_rays(samples, count):
    """ pick `count` samples evenly spaced through the list `samples` """
    n = max(1, count)
    if len(samples) <= n:
        return list(samples)
    last = len(samples) - 1
    picked = []
    for i in range(n):
        t = 0. if n == 1 else i/(n - 1)
        j = min(last, max(0, int(floor(t*last + 0.5))))
        picked.append(samples[j])
    return picked

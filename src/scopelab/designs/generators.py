#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright © 2026 ScopeLab Developers
""" Lookup of the design generator for each design kind

.. Created on Tue Oct 20 12:01:44 2026

.. codeauthor: ScopeLab Developers
"""

import scopelab.optical.model_constants as mc
from scopelab.designs.newtonian import newtonian
from scopelab.designs.cassegrain import cassegrain
from scopelab.designs.sct import sct
from scopelab.designs.rc import rc

generators = {
    mc.NEWTONIAN: newtonian,
    mc.CASSEGRAIN: cassegrain,
    mc.SCT: sct,
    mc.RC: rc,
    }


def generator_for(kind):
    """ the generator function for `kind`, or None if there is none """
    return generators.get(kind)

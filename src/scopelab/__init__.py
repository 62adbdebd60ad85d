# -*- coding: utf-8 -*-
""" The **scopelab** reflecting telescope design space explorer

    A trial telescope layout is generated from an input specification, traced
    with a small geometric ray tracer and ranked against user constraints.
    The package is organized in the following subpackages:

        - :mod:`~.optical`: the input specification, candidate records and
          model constants
        - :mod:`~.elem`: conic and plane surface models
        - :mod:`~.raytr`: ray-surface intersection, the optical plan
          simulator, best focus search and image quality metrics
        - :mod:`~.designs`: generators for Newtonian, Cassegrain,
          Schmidt-Cassegrain and Ritchey-Chrétien layouts
        - :mod:`~.sweep`: scoring, the parameter sweep and reporting

    The :mod:`~.util` subpackage provides vector math and unit conversions.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = 'unknown'


def listobj(obj):
    """ Print wrapper function for listobj_str() method of `obj`.

    listobj() is designed to be used in scripting environments where detailed,
    textual output is supported. Classes may implement the `listobj_str`
    method that returns a string containing a formatted description of the
    object, e.g. :meth:`.Candidate.listobj_str` and
    :meth:`.SweepResult.listobj_str`.
    """
    try:
        print(obj.listobj_str())
    except AttributeError:
        print(repr(obj))

""" Package for optical surface models

    The :mod:`~.profiles` module computes the sag, slope and normal of
    rotationally symmetric conic profiles. The :mod:`~.surface` module
    defines the conic and plane surfaces, their apertures and materials.
"""

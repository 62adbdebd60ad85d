""" Package of telescope design generators

    Each generator maps an :class:`~.InputSpec` and a trial
    :class:`~.DesignParams` to a :class:`~.Candidate`, or None when the
    combination is physically invalid. The generators are

        - :func:`~.newtonian.newtonian`: parabolic primary, flat diagonal
        - :func:`~.cassegrain.cassegrain`: parabolic primary, hyperbolic
          secondary
        - :func:`~.sct.sct`: Cassegrain layout behind a corrector window
        - :func:`~.rc.rc`: Ritchey-Chrétien, two hyperbolic mirrors

    The folded designs share the layout solver in :mod:`~.twomirror`.
    :mod:`~.generators` maps design kinds to their generator.
"""

""" Package for enumerating, scoring and ranking telescope candidates

    The :mod:`~.sweep.sweep` module runs the design generators over the focal
    ratio grid of an :class:`~.InputSpec`. The :mod:`~.sweep.score` module
    normalizes and weights the metrics of a batch of passing candidates.
    The :mod:`~.sweep.validate` module suggests constraint adjustments when no
    candidate passes, and :mod:`~.sweep.report` tabulates results with pandas.
"""

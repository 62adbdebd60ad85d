""" Package for the design space inputs and outputs

    The ``scopelab.optical`` subpackage holds the :class:`~.InputSpec` that
    describes what to explore, the :class:`~.Candidate` records the design
    generators produce, and the numeric model constants shared across the
    ray tracer, generators and scoring.
"""

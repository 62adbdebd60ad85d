""" Package for optical ray tracing and calculations

    The :mod:`~.raytr` subpackage provides the ray tracer and the image
    quality analyses built on it. These include:

        - Base level intersection, reflection and ray tracing,
          :mod:`~.raytrace`
        - The optical plan traced for a candidate, :mod:`~.opticalplan`
        - Pupil sample generation, :mod:`~.sampler`
        - Spot statistics and best focus search, :mod:`~.analyses`
        - Tracing of ray bundles per field angle, :mod:`~.simulator`
        - Conversion of spot sizes to aberration proxies,
          :mod:`~.imagequality`
        - Exception classes for reporting ray trace errors, :mod:`~.traceerror`
"""

from collections import namedtuple

Hit = namedtuple('Hit', ['t', 'p', 'surface'])
Hit.__doc__ = "a valid ray-surface intersection"
Hit.t.__doc__ = "distance along the unit ray direction"
Hit.p.__doc__ = "the point of incidence"
Hit.surface.__doc__ = "the surface that was hit"

TraceSegment = namedtuple('TraceSegment', ['a', 'b', 'surface_id'])
TraceSegment.__doc__ = "straight ray path between two points of incidence"
TraceSegment.a.__doc__ = "start point of the segment"
TraceSegment.b.__doc__ = "end point of the segment"
TraceSegment.surface_id.__doc__ = "id of the surface hit at the end point"

TraceRay = namedtuple('TraceRay', ['field_angle', 'segments', 'hit_sensor',
                                   'sensor_hit'])
TraceRay.__doc__ = "the recorded path of one ray through an optical plan"
TraceRay.field_angle.__doc__ = "field angle of the ray, in radians"
TraceRay.segments.__doc__ = "list of TraceSegments"
TraceRay.hit_sensor.__doc__ = "True if the ray reached the sensor"
TraceRay.sensor_hit.__doc__ = "the point on the sensor, or None"

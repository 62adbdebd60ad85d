#!/usr/bin/env python3
# -*- coding: utf-8 -*-
""" tests for surface intersection, reflection and the trace loop

.. codeauthor: ScopeLab Developers
"""

import unittest
from math import sqrt
from unittest import mock

import numpy as np
import numpy.testing as npt
import pytest
from pytest import approx

import scopelab.optical.model_constants as mc
from scopelab.elem.profiles import sag, dsag_dr, sag_z, conic_normal
from scopelab.elem.surface import (ConicSurface, PlaneSurface, Circular,
                                   reflector, transmitter, absorber)
from scopelab.raytr.raytrace import (intersect, intersect_plane,
                                     intersect_conic, reflect, trace_ray)
from scopelab.raytr.traceerror import (TraceAbsorbedError,
                                       TraceMissedSurfaceError,
                                       TraceBounceLimitError)
from scopelab.util.misc_math import normalize, vec3


def parabola(f=500., radius=50., inner_radius=0.):
    return ConicSurface('primary', z0=0., R=2*f, K=-1., sag_sign=-1,
                        aperture=Circular(radius, inner_radius),
                        material=reflector(0.9))


class ConicProfileTestCase(unittest.TestCase):

    def test_sphere_sag(self):
        R = 10.
        r = 6.
        assert sag(r, R, 0.) == approx(R - sqrt(R*R - r*r))

    def test_parabola_sag(self):
        f = 250.
        assert sag(30., 2*f, -1.) == approx(30.**2/(4*f))

    def test_sag_outside_domain(self):
        assert np.isnan(sag(12., 10., 0.))
        assert np.isnan(dsag_dr(12., 10., 0.))
        assert np.isnan(sag(1., 0., 0.))
        assert np.isnan(sag(1., float('inf'), 0.))

    def test_dsag_dr_matches_finite_difference(self):
        R, K, r = 180., -2.3, 25.
        h = 1e-5
        fd = (sag(r + h, R, K) - sag(r - h, R, K))/(2*h)
        assert dsag_dr(r, R, K) == approx(fd, rel=1e-7)

    def test_normal_is_surface_gradient(self):
        srf = parabola()
        p = np.array([0., 40., sag_z(parabola(), 0., 40.)])
        n = conic_normal(srf, p)
        assert np.linalg.norm(n) == approx(1.)
        # the tangent along y is perpendicular to the normal
        h = 1e-4
        t = np.array([0., 2*h,
                      sag_z(srf, 0., 40. + h) - sag_z(srf, 0., 40. - h)])
        assert np.dot(n, normalize(t)) == approx(0., abs=1e-8)
        npt.assert_allclose(conic_normal(srf, vec3(0., 0., 0.)),
                            [0., 0., 1.])


class IntersectTestCase(unittest.TestCase):

    def test_plane_intersection(self):
        n = normalize(vec3(1., 1., 1.))
        plane = PlaneSurface('plane', p0=(1., 2., 3.), n_hat=n,
                             aperture=Circular(100.), material=absorber())
        p = vec3(0., 0., 0.)
        d = normalize(vec3(1., 0.5, 0.2))
        hit = intersect(plane, p, d)
        t_truth = np.dot(vec3(1., 2., 3.) - p, n)/np.dot(d, n)
        assert hit.t == approx(t_truth, abs=1e-9)
        assert np.dot(hit.p - plane.p0, n) == approx(0., abs=1e-9)
        assert hit.surface is plane

    def test_plane_behind_and_parallel(self):
        plane = PlaneSurface('plane', p0=(0., 0., -5.), n_hat=(0., 0., 1.),
                             aperture=Circular(100.), material=absorber())
        assert intersect_plane(plane, vec3(0., 0., 0.),
                               vec3(0., 0., 1.)) is None
        assert intersect_plane(plane, vec3(0., 0., 0.),
                               vec3(1., 0., 0.)) is None

    def test_conic_round_trip(self):
        srf = ConicSurface('hyperboloid', z0=10., R=200., K=-2., sag_sign=1,
                           aperture=Circular(40.), material=reflector())
        x, y = 12., 16.
        expected = vec3(x, y, sag_z(srf, x, y))
        p = expected + vec3(3., -2., -50.)
        d = normalize(expected - p)
        hit = intersect_conic(srf, p, d)
        assert hit is not None
        npt.assert_allclose(hit.p, expected, atol=1e-6)
        assert hit.t == approx(np.linalg.norm(expected - p), abs=1e-6)

    def test_conic_seed_behind_ray(self):
        # heading away from the vertex plane, the seed is clamped to 0
        srf = parabola(f=100., radius=50.)
        hit = intersect(srf, vec3(20., 0., -0.5), vec3(0., 0., -1.))
        assert hit is not None
        assert hit.t == approx(0.5)
        assert hit.p[2] == approx(-20.**2/400.)
        # the surface is behind this ray
        assert intersect(srf, vec3(20., 0., -5.), vec3(0., 0., -1.)) is None

    def test_conic_outside_domain(self):
        sphere = ConicSurface('sphere', z0=0., R=10., K=0., sag_sign=1,
                              aperture=Circular(20.), material=reflector())
        assert intersect(sphere, vec3(12., 0., -5.), vec3(0., 0., 1.)) is None

    def test_conic_degenerate_derivative(self):
        # on axis and parallel to the vertex plane, df/dt is 0
        srf = parabola(f=100., radius=50.)
        assert intersect(srf, vec3(0., 0., 1.), vec3(1., 0., 0.)) is None

    def test_conic_iteration_limit(self):
        srf = ConicSurface('hyperboloid', z0=10., R=200., K=-2., sag_sign=1,
                           aperture=Circular(40.), material=reflector())
        p = vec3(15., 14., -40.)
        d = normalize(vec3(12., 16., sag_z(srf, 12., 16.)) - p)
        assert intersect_conic(srf, p, d) is not None
        # the seed on the vertex plane is off the surface
        with mock.patch.object(mc, 'NEWTON_MAX_ITER', 1):
            assert intersect_conic(srf, p, d) is None

    def test_direction_scale(self):
        plane = PlaneSurface('plane', p0=(0., 0., 5.), n_hat=(0., 0., 1.),
                             aperture=Circular(100.), material=absorber())
        srf = parabola(f=100., radius=50.)
        p = vec3(10., 0., -20.)
        d = vec3(0., 0., 1.)
        for s in (plane, srf):
            unit_hit = intersect(s, p, d)
            long_hit = intersect(s, p, 10.*d)
            assert long_hit.t == approx(unit_hit.t)
            npt.assert_allclose(long_hit.p, unit_hit.p)
        assert intersect(plane, p, 10.*d).t == approx(25.)

    def test_aperture_clipping(self):
        srf = parabola(radius=10.)
        assert intersect(srf, vec3(12., 0., -50.), vec3(0., 0., 1.)) is None
        assert intersect(srf, vec3(8., 0., -50.),
                         vec3(0., 0., 1.)) is not None

        holed = parabola(radius=10., inner_radius=2.)
        assert intersect(holed, vec3(1., 0., -50.), vec3(0., 0., 1.)) is None

        plane = PlaneSurface('window', p0=(0., 0., 5.), n_hat=(0., 0., 1.),
                             aperture=Circular(1.), material=transmitter())
        assert intersect(plane, vec3(2., 0., 0.), vec3(0., 0., 1.)) is None
        assert intersect(plane, vec3(0.5, 0., 0.),
                         vec3(0., 0., 1.)) is not None

    def test_unsupported_surface(self):
        with pytest.raises(TypeError):
            intersect(object(), vec3(0., 0., 0.), vec3(0., 0., 1.))


def test_reflection_law():
    rng = np.random.default_rng(7)
    for i in range(20):
        d = normalize(rng.normal(size=3))
        n = normalize(rng.normal(size=3))
        d_out = reflect(d, n)
        assert np.dot(d_out, n) == approx(-np.dot(d, n), abs=1e-12)
        assert np.linalg.norm(d_out) == approx(1., abs=1e-12)


class TraceRayTestCase(unittest.TestCase):

    def setUp(self):
        self.f = 500.
        self.primary = parabola(f=self.f)
        self.sensor = PlaneSurface('sensor', p0=(0., 0., -self.f),
                                   n_hat=(0., 0., 1.),
                                   aperture=Circular(5.),
                                   material=absorber())

    def test_parabola_focus(self):
        for y in (5., 20., 45.):
            segments, sensor_hit = trace_ray([self.primary], self.sensor,
                                             vec3(0., y, -400.),
                                             vec3(0., 0., 1.), 4)
            npt.assert_allclose(sensor_hit, [0., 0., -self.f], atol=1e-6)
            assert [s.surface_id for s in segments] == ['primary', 'sensor']

    def test_transmitter_passes_ray(self):
        window = PlaneSurface('window', p0=(0., 0., -300.),
                              n_hat=(0., 0., 1.), aperture=Circular(60.),
                              material=transmitter(0.9))
        segments, sensor_hit = trace_ray([window, self.primary], self.sensor,
                                         vec3(0., 20., -400.),
                                         vec3(0., 0., 1.), 6)
        assert [s.surface_id for s in segments] == ['window', 'primary',
                                                     'window', 'sensor']
        npt.assert_allclose(sensor_hit, [0., 0., -self.f], atol=1e-6)

    def test_absorbed(self):
        baffle = PlaneSurface('baffle', p0=(0., 0., -300.),
                              n_hat=(0., 0., 1.), aperture=Circular(10.),
                              material=absorber())
        with pytest.raises(TraceAbsorbedError) as exc_info:
            trace_ray([baffle, self.primary], self.sensor,
                      vec3(0., 5., -400.), vec3(0., 0., 1.), 4)
        assert exc_info.value.srf is baffle
        assert len(exc_info.value.segments) == 1

    def test_missed(self):
        with pytest.raises(TraceMissedSurfaceError):
            trace_ray([self.primary], self.sensor, vec3(0., 80., -400.),
                      vec3(0., 0., 1.), 4)

    def test_bounce_limit(self):
        lower = PlaneSurface('lower', p0=(0., 0., 0.), n_hat=(0., 0., 1.),
                             aperture=Circular(10.), material=reflector())
        upper = PlaneSurface('upper', p0=(0., 0., 10.), n_hat=(0., 0., -1.),
                             aperture=Circular(10.), material=reflector())
        far_sensor = PlaneSurface('sensor', p0=(1000., 0., 0.),
                                  n_hat=(1., 0., 0.), aperture=Circular(1.),
                                  material=absorber())
        with pytest.raises(TraceBounceLimitError) as exc_info:
            trace_ray([lower, upper], far_sensor, vec3(0., 0., 5.),
                      vec3(0., 0., 1.), 5)
        assert len(exc_info.value.segments) == 5

"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside
- Ray missing sphere
- Ray starting inside sphere (far root, outward normal)
- Ray tangent to sphere
- t-range filtering of both roots
- Geometric invariants over a sweep of rays
- The kernel-side hit_sphere function
"""

import math

import numpy as np
import pytest
import taichi as ti

INF = float("inf")


class TestSphereBasics:
    """Tests for Sphere construction."""

    def test_fields_are_coerced(self, red):
        """Test center becomes a frozen vector and radius a float."""
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((1, 2, 3), 1, red)
        assert sphere.center.dtype == np.float32
        assert not sphere.center.flags.writeable
        assert type(sphere.radius) is float
        assert sphere.material is red

    def test_sphere_is_a_surface(self, red):
        """Test Sphere implements the Surface capability."""
        from spheretrace.geometry.sphere import Sphere
        from spheretrace.geometry.surface import Surface

        assert isinstance(Sphere((0, 0, 0), 1.0, red), Surface)


class TestSphereIntersection:
    """Tests for Sphere.hit."""

    def test_hit_head_on(self, red):
        """Test the reference scenario: unit-distance sphere straight ahead."""
        from spheretrace.core.ray import Ray, vec3
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, -1.0), 0.5, red)
        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))

        hit = sphere.hit(ray, 0.0, INF)

        assert hit is not None
        assert hit.t == pytest.approx(0.5)
        np.testing.assert_allclose(hit.point, [0.0, 0.0, -0.5], atol=1e-6)
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0], atol=1e-6)
        assert hit.material is red

    def test_miss_parallel_offset(self, red):
        """Test a parallel ray offset past the radius misses."""
        from spheretrace.core.ray import Ray, vec3
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, -1.0), 0.5, red)
        ray = Ray(vec3(2.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))

        assert sphere.hit(ray, 0.0, INF) is None

    @pytest.mark.parametrize("t_range", [(0.0, INF), (-INF, INF), (-100.0, 100.0), (5.0, 6.0)])
    def test_negative_discriminant_misses_for_any_range(self, red, t_range):
        """Test a ray with no real roots misses regardless of the t-range."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -1.0), 0.5, red)
        ray = Ray((0.0, 1.0, 0.0), (0.3, 0.0, -1.0))

        assert sphere.hit(ray, *t_range) is None

    def test_hit_from_inside_uses_far_root(self, red):
        """Test a ray starting inside hits the far side with an outward normal."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 0.0), 1.0, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))

        hit = sphere.hit(ray, 0.001, INF)

        assert hit is not None
        assert hit.t == pytest.approx(1.0)
        # Normal points outward, i.e. along the ray, not against it
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0], atol=1e-6)

    def test_sphere_behind_ray_misses(self, red):
        """Test both roots negative means no hit for a forward range."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, 5.0), 1.0, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        assert sphere.hit(ray, 0.0, INF) is None

    def test_sphere_beyond_t_max_misses(self, red):
        """Test both roots past t_max means no hit."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -10.0), 1.0, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        assert sphere.hit(ray, 0.0, 8.5) is None

    def test_near_root_excluded_falls_back_to_far_root(self, red):
        """Test t_min past the near root yields the far root."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -3.0), 1.0, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        hit = sphere.hit(ray, 2.5, INF)

        assert hit is not None
        assert hit.t == pytest.approx(4.0)
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, -1.0], atol=1e-6)

    def test_bounds_are_inclusive(self, red):
        """Test a root exactly at t_min or t_max is accepted."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -1.0), 0.5, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        assert sphere.hit(ray, 0.5, 0.5).t == 0.5
        assert sphere.hit(ray, 0.0, 0.5).t == 0.5
        assert sphere.hit(ray, 1.5, 1.5).t == 1.5

    def test_unnormalized_direction(self, red):
        """Test t is measured in units of the direction's length."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -1.0), 0.5, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -4.0))

        hit = sphere.hit(ray, 0.0, INF)

        assert hit.t == pytest.approx(0.125)
        np.testing.assert_allclose(hit.point, [0.0, 0.0, -0.5], atol=1e-6)

    def test_tangent_ray_single_root(self, red):
        """Test a grazing ray reports its single root exactly once."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -1.0), 0.5, red)
        ray = Ray((0.5, 0.0, 0.0), (0.0, 0.0, -1.0))

        hit = sphere.hit(ray, 0.0, INF)
        assert hit is not None
        assert hit.t == pytest.approx(1.0)
        np.testing.assert_allclose(hit.point, [0.5, 0.0, -1.0], atol=1e-6)
        np.testing.assert_allclose(hit.normal, [1.0, 0.0, 0.0], atol=1e-6)

        # Excluding the single root leaves nothing to fall back to
        assert sphere.hit(ray, 0.0, 0.99) is None
        assert sphere.hit(ray, 1.01, INF) is None


class TestSphereInvariants:
    """Property checks over a sweep of rays."""

    @pytest.mark.parametrize("seed", range(5))
    def test_hits_lie_on_sphere_with_unit_normals(self, red, seed):
        """Test every hit is on the surface, in range, and has a unit normal."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        rng = np.random.default_rng(seed)
        center = rng.uniform(-2.0, 2.0, 3)
        radius = float(rng.uniform(0.25, 2.0))
        sphere = Sphere(center, radius, red)

        hits = 0
        for _ in range(200):
            origin = rng.uniform(-5.0, 5.0, 3)
            # Aim near the sphere so that a good share of rays hit it
            target = center + rng.uniform(-1.5, 1.5, 3) * radius
            direction = target - origin
            t_min = float(rng.uniform(-1.0, 1.0))
            t_max = t_min + float(rng.uniform(0.5, 20.0))
            ray = Ray(origin, direction)

            hit = sphere.hit(ray, t_min, t_max)
            if hit is None:
                continue
            hits += 1
            assert t_min <= hit.t <= t_max
            assert np.linalg.norm(hit.point - sphere.center) == pytest.approx(radius, abs=1e-3)
            assert np.linalg.norm(hit.normal) == pytest.approx(1.0, abs=1e-3)
            np.testing.assert_array_equal(hit.point, ray.at(hit.t))

        assert hits > 0

    def test_bounds_one_ulp_from_root(self, red):
        """Test bounds just past a float32 root are honoured in double precision."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -1.0), 0.9, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        near = sphere.hit(ray, 0.0, math.inf).t
        # 0.1 is not representable in float32, so the root is not 0.1 exactly
        assert near != 0.1

        # t_max one step below the near root: both roots are out of range
        assert sphere.hit(ray, 0.0, math.nextafter(near, -math.inf)) is None

        # t_min one step above the near root: the far root is the answer
        t_min = math.nextafter(near, math.inf)
        hit = sphere.hit(ray, t_min, math.inf)
        assert hit is not None
        assert hit.t >= t_min
        assert hit.t == pytest.approx(1.9, rel=1e-6)

        # Bounds exactly at the root still accept it
        assert sphere.hit(ray, near, near).t == near

    def test_returns_smallest_root_in_range(self, red):
        """Test the nearer of two in-range roots wins."""
        from spheretrace.core.ray import Ray
        from spheretrace.geometry.sphere import Sphere

        sphere = Sphere((0.0, 0.0, -3.0), 1.0, red)
        ray = Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))

        hit = sphere.hit(ray, -math.inf, math.inf)
        assert hit.t == pytest.approx(2.0)


class TestKernelSphere:
    """Tests for the kernel-side hit_sphere."""

    def _run(self, origin, direction, center, radius, t_min, t_max):
        from spheretrace.core.ray import RayData
        from spheretrace.geometry.sphere import SphereData, hit_sphere

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel(
            ox: ti.f32, oy: ti.f32, oz: ti.f32,
            dx: ti.f32, dy: ti.f32, dz: ti.f32,
            cx: ti.f32, cy: ti.f32, cz: ti.f32,
            r: ti.f32, lo: ti.f32, hi: ti.f32,
        ):
            ray = RayData(origin=ti.math.vec3(ox, oy, oz), direction=ti.math.vec3(dx, dy, dz))
            sphere = SphereData(center=ti.math.vec3(cx, cy, cz), radius=r)
            record = hit_sphere(ray, sphere, lo, hi)
            hit[None] = record.hit
            t_val[None] = record.t
            normal[None] = record.normal

        test_kernel(*origin, *direction, *center, radius, t_min, t_max)
        n = normal[None]
        return hit[None], t_val[None], (n[0], n[1], n[2])

    def test_kernel_matches_host(self):
        """Test hit_sphere agrees with Sphere.hit on the reference scenario."""
        did_hit, t, normal = self._run((0, 0, 0), (0, 0, -1), (0, 0, -1), 0.5, 0.0, 1e30)
        assert did_hit == 1
        assert abs(t - 0.5) < 1e-6
        assert abs(normal[2] - 1.0) < 1e-6

    def test_kernel_miss(self):
        """Test hit_sphere reports a miss for an offset parallel ray."""
        did_hit, _, _ = self._run((2, 0, 0), (0, 0, -1), (0, 0, -1), 0.5, 0.0, 1e30)
        assert did_hit == 0

    def test_kernel_inside_far_root(self):
        """Test hit_sphere falls back to the far root from inside."""
        did_hit, t, normal = self._run((0, 0, 0), (0, 0, 1), (0, 0, 0), 1.0, 0.001, 1e30)
        assert did_hit == 1
        assert abs(t - 1.0) < 1e-6
        assert abs(normal[2] - 1.0) < 1e-6

    def test_kernel_inclusive_bounds(self):
        """Test a root exactly at t_max is accepted."""
        did_hit, t, _ = self._run((0, 0, 0), (0, 0, -1), (0, 0, -1), 0.5, 0.0, 0.5)
        assert did_hit == 1
        assert abs(t - 0.5) < 1e-6

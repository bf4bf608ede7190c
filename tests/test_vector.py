"""Unit tests for the vector utilities.

Tests cover:
- Component-wise add/sub and scalar mul
- dot, length and normalize
- reflect about a unit normal
- Inputs are never mutated
"""

import taichi as ti


class TestArithmetic:
    """Tests for add, sub and mul."""

    def test_add_sub_mul(self):
        """Test the component-wise operations."""
        from orbitrace.core.vector import add, mul, sub, vec3

        total = ti.field(dtype=ti.math.vec3, shape=())
        diff = ti.field(dtype=ti.math.vec3, shape=())
        scaled = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 2.0, 3.0)
            b = vec3(4.0, -5.0, 0.5)
            total[None] = add(a, b)
            diff[None] = sub(a, b)
            scaled[None] = mul(a, -2.0)

        test_kernel()
        assert list(total[None].to_numpy()) == [5.0, -3.0, 3.5]
        assert list(diff[None].to_numpy()) == [-3.0, 7.0, 2.5]
        assert list(scaled[None].to_numpy()) == [-2.0, -4.0, -6.0]

    def test_operations_do_not_mutate_inputs(self):
        """Test that results are new values."""
        from orbitrace.core.vector import add, normalize, vec3

        original = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            a = vec3(3.0, 0.0, 4.0)
            shifted = add(a, vec3(1.0, 1.0, 1.0))
            unit = normalize(shifted)
            original[None] = a

        test_kernel()
        assert list(original[None].to_numpy()) == [3.0, 0.0, 4.0]


class TestDotAndLength:
    """Tests for dot, length and normalize."""

    def test_dot(self):
        """Test dot product of known vectors."""
        from orbitrace.core.vector import dot, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0))

        test_kernel()
        assert abs(result[None] - 12.0) < 1e-6

    def test_length(self):
        """Test length of a 3-4-0 vector."""
        from orbitrace.core.vector import length, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = length(vec3(3.0, 4.0, 0.0))

        test_kernel()
        assert abs(result[None] - 5.0) < 1e-6

    def test_normalize_gives_unit_length(self):
        """Test normalize returns a unit vector in the same direction."""
        from orbitrace.core.vector import length, normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())
        result_length = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            n = normalize(vec3(0.0, -3.0, 4.0))
            result[None] = n
            result_length[None] = length(n)

        test_kernel()
        n = result[None]
        assert abs(n[0]) < 1e-6
        assert abs(n[1] + 0.6) < 1e-6
        assert abs(n[2] - 0.8) < 1e-6
        assert abs(result_length[None] - 1.0) < 1e-6


class TestReflect:
    """Tests for reflect."""

    def test_reflect_off_floor(self):
        """Test a 45-degree ray bouncing off a horizontal surface."""
        from orbitrace.core.vector import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_reflect_head_on_reverses(self):
        """Test a ray hitting a surface head-on comes straight back."""
        from orbitrace.core.vector import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, 1.0))

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2] - 1.0) < 1e-6

    def test_reflect_preserves_length(self):
        """Test that reflecting about a unit normal keeps the length."""
        from orbitrace.core.vector import length, normalize, reflect, vec3

        before = ti.field(dtype=ti.f32, shape=())
        after = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = vec3(0.3, -2.0, 1.5)
            before[None] = length(v)
            after[None] = length(reflect(v, normalize(vec3(1.0, 2.0, -0.5))))

        test_kernel()
        assert abs(before[None] - after[None]) < 1e-5

    def test_reflect_about_itself_negates(self):
        """Test reflect(n, n) = -n for a unit vector n."""
        from orbitrace.core.vector import dot, normalize, reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())
        self_dot = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            n = normalize(vec3(2.0, -1.0, 0.5))
            result[None] = reflect(n, n) + n
            self_dot[None] = dot(n, n)

        test_kernel()
        r = result[None]
        for i in range(3):
            assert abs(r[i]) < 1e-6
        assert abs(self_dot[None] - 1.0) < 1e-6

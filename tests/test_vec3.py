import math

import numpy as np
import pytest

from random_art.vec3 import Vector3


class TestArithmetic:
    def test_add_sub(self) -> None:
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(0.5, -1.0, 2.0)
        assert a + b == Vector3(1.5, 1.0, 5.0)
        assert a - b == Vector3(0.5, 3.0, 1.0)

    def test_elementwise_and_scalar_multiply(self) -> None:
        a = Vector3(1.0, 2.0, 3.0)
        assert a * Vector3(2.0, 0.5, -1.0) == Vector3(2.0, 1.0, -3.0)
        assert a * 2.0 == Vector3(2.0, 4.0, 6.0)
        assert 2.0 * a == Vector3(2.0, 4.0, 6.0)

    def test_mix_is_unclamped(self) -> None:
        a = Vector3(1.0, 1.0, 1.0)
        b = Vector3(0.0, 0.0, 0.0)
        assert a.mix(b, 0.25) == Vector3(0.25, 0.25, 0.25)
        assert a.mix(b, 2.0) == Vector3(2.0, 2.0, 2.0)

    def test_length(self) -> None:
        assert Vector3(3.0, 4.0, 0.0).length() == pytest.approx(5.0)
        assert Vector3.splat(1.0).length() == pytest.approx(math.sqrt(3.0))


class TestValueSemantics:
    def test_equality_is_componentwise(self) -> None:
        assert Vector3(0.1, 0.2, 0.3) == Vector3(0.1, 0.2, 0.3)
        assert Vector3(0.1, 0.2, 0.3) != Vector3(0.1, 0.2, 0.4)

    def test_isclose(self) -> None:
        assert Vector3(0.1 + 0.2, 0.0, 0.0).isclose(Vector3(0.3, 0.0, 0.0))
        assert not Vector3(0.0, 0.0, 0.0).isclose(Vector3(0.0, 0.0, 1e-3), tol=1e-4)

    def test_to_tuple(self) -> None:
        assert Vector3(np.float64(1.0), 2, 3.5).to_tuple() == (1.0, 2.0, 3.5)

    def test_array_channels_broadcast(self) -> None:
        grid = np.array([[0.0, 1.0], [2.0, 3.0]])
        v = Vector3(grid, 1.0, grid) + Vector3.splat(1.0)
        np.testing.assert_array_equal(v.x, grid + 1.0)
        assert v.y == 2.0
        np.testing.assert_allclose(v.length(), np.sqrt(2 * (grid + 1.0) ** 2 + 4.0))

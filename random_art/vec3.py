"""
random_art/vec3.py - Three-channel value type used as an RGB color
"""
import numpy as np
from typing import Iterator, Tuple, Union

Channel = Union[float, np.ndarray]

class Vector3:
    """Elementwise 3-vector; channels may be floats or broadcastable arrays"""

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: Channel, y: Channel, z: Channel):
        self.x = x
        self.y = y
        self.z = z

    @classmethod
    def splat(cls, value: Channel) -> 'Vector3':
        return cls(value, value, value)

    def __add__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector3') -> 'Vector3':
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other) -> 'Vector3':
        if isinstance(other, Vector3):
            return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vector3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other) -> 'Vector3':
        return self.__mul__(other)

    def mix(self, other: 'Vector3', weight: Channel) -> 'Vector3':
        """weight * self + (1 - weight) * other, unclamped"""
        return self * weight + other * (1.0 - weight)

    def length(self) -> Channel:
        return np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def map(self, fn) -> 'Vector3':
        return Vector3(fn(self.x), fn(self.y), fn(self.z))

    def __iter__(self) -> Iterator[Channel]:
        return iter((self.x, self.y, self.z))

    def to_tuple(self) -> Tuple[float, float, float]:
        return (float(self.x), float(self.y), float(self.z))

    def isclose(self, other: 'Vector3', tol: float = 1e-9) -> bool:
        return all(np.all(np.abs(a - b) <= tol) for a, b in zip(self, other))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return all(np.all(a == b) for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self):
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"

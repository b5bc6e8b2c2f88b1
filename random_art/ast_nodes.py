"""
random_art/ast_nodes.py - Expression tree nodes, numeric evaluation and GLSL generation

Every node evaluates to a Vector3 over (x, y, t). The coordinates may be
floats or numpy arrays; arrays evaluate a whole pixel grid in one pass.
"""
import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Tuple

from .vec3 import Vector3
from .shaping import well_fn, tent_fn

class ASTNode(ABC):
    """Base class for all AST nodes"""

    arity = 0

    def __init__(self, *children: 'ASTNode'):
        if len(children) != self.arity:
            raise ValueError(f"{type(self).__name__} takes {self.arity} children, got {len(children)}")
        self.children: Tuple['ASTNode', ...] = tuple(children)

    @abstractmethod
    def evaluate(self, x, y, t=0.0) -> Vector3:
        """Evaluate the node given input coordinates and time"""
        pass

    @abstractmethod
    def to_glsl(self) -> str:
        """Translate to a GLSL expression of type vec3 over x, y, t"""
        pass

    def params(self) -> Dict[str, float]:
        """Numeric parameters carried by this node"""
        return {}

    @property
    def is_terminal(self) -> bool:
        return self.arity == 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        data: Dict[str, Any] = {'type': type(self).__name__}
        params = self.params()
        if params:
            data['params'] = params
        if self.children:
            data['children'] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ASTNode':
        """Deserialize from dictionary"""
        children = [node_from_dict(child) for child in data.get('children', [])]
        return cls(*children, **data.get('params', {}))

    def get_all_nodes(self) -> List['ASTNode']:
        """Get all nodes in this subtree"""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.get_all_nodes())
        return nodes

    def get_depth(self) -> int:
        """Longest root-to-leaf path, counted in edges"""
        if not self.children:
            return 0
        return 1 + max(child.get_depth() for child in self.children)

    def __repr__(self):
        return f"<{type(self).__name__} {self}>"

def _glsl_float(value: float) -> str:
    # repr always yields a valid GLSL float literal for finite values
    return repr(float(value))

def _select(cond, a, b):
    out = np.where(cond, a, b)
    return out if out.ndim else out.item()

def _floor_mod(a, b):
    # Sign follows the divisor, same as GLSL mod(); a zero divisor gives NaN
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.mod(a, b)

# Terminals

class VarX(ASTNode):
    """Horizontal plane coordinate"""

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return Vector3.splat(x)

    def to_glsl(self) -> str:
        return "vec3(x)"

    def __str__(self):
        return "x"

class VarY(ASTNode):
    """Vertical plane coordinate"""

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return Vector3.splat(y)

    def to_glsl(self) -> str:
        return "vec3(y)"

    def __str__(self):
        return "y"

class VarT(ASTNode):
    """Time"""

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return Vector3.splat(t)

    def to_glsl(self) -> str:
        return "vec3(t)"

    def __str__(self):
        return "t"

class Constant(ASTNode):
    """Numeric constant"""

    def __init__(self, value: float):
        super().__init__()
        self.value = float(value)

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return Vector3.splat(self.value)

    def to_glsl(self) -> str:
        return f"vec3({_glsl_float(self.value)})"

    def params(self) -> Dict[str, float]:
        return {'value': self.value}

    def __str__(self):
        return f"{self.value:.3f}"

class Circle(ASTNode):
    """Distance from (x, y) to a fixed center"""

    def __init__(self, center_x: float, center_y: float):
        super().__init__()
        self.center_x = float(center_x)
        self.center_y = float(center_y)

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return Vector3.splat(np.hypot(x - self.center_x, y - self.center_y))

    def to_glsl(self) -> str:
        center = f"vec2({_glsl_float(self.center_x)}, {_glsl_float(self.center_y)})"
        return f"vec3(length(vec2(x, y) - {center}))"

    def params(self) -> Dict[str, float]:
        return {'center_x': self.center_x, 'center_y': self.center_y}

    def __str__(self):
        return f"circle({self.center_x:.3f}, {self.center_y:.3f})"

# Unary

class UnaryOp(ASTNode):
    arity = 1

    @property
    def child(self) -> ASTNode:
        return self.children[0]

class Inverse(UnaryOp):
    """Reflect around a pivot: (p, p, p) - a

    The random grammar reflects around 1.0, the weighted grammar negates
    (pivot 0.0).
    """

    def __init__(self, child: ASTNode, pivot: float = 1.0):
        super().__init__(child)
        self.pivot = float(pivot)

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return Vector3.splat(self.pivot) - self.child.evaluate(x, y, t)

    def to_glsl(self) -> str:
        return f"(vec3({_glsl_float(self.pivot)}) - {self.child.to_glsl()})"

    def params(self) -> Dict[str, float]:
        return {'pivot': self.pivot}

    def __str__(self):
        if self.pivot == 0.0:
            return f"-{self.child}"
        return f"({self.pivot:g} - {self.child})"

class Sine(UnaryOp):

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return self.child.evaluate(x, y, t).map(np.sin)

    def to_glsl(self) -> str:
        return f"sin({self.child.to_glsl()})"

    def __str__(self):
        return f"sin({self.child})"

class Well(UnaryOp):

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return self.child.evaluate(x, y, t).map(well_fn)

    def to_glsl(self) -> str:
        return f"well_fn({self.child.to_glsl()})"

    def __str__(self):
        return f"well({self.child})"

class Tent(UnaryOp):

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return self.child.evaluate(x, y, t).map(tent_fn)

    def to_glsl(self) -> str:
        return f"tent_fn({self.child.to_glsl()})"

    def __str__(self):
        return f"tent({self.child})"

# Binary

class BinaryOp(ASTNode):
    arity = 2

    @property
    def left(self) -> ASTNode:
        return self.children[0]

    @property
    def right(self) -> ASTNode:
        return self.children[1]

class Sum(BinaryOp):

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return self.left.evaluate(x, y, t) + self.right.evaluate(x, y, t)

    def to_glsl(self) -> str:
        return f"({self.left.to_glsl()} + {self.right.to_glsl()})"

    def __str__(self):
        return f"({self.left} + {self.right})"

class Product(BinaryOp):

    def evaluate(self, x, y, t=0.0) -> Vector3:
        return self.left.evaluate(x, y, t) * self.right.evaluate(x, y, t)

    def to_glsl(self) -> str:
        return f"({self.left.to_glsl()} * {self.right.to_glsl()})"

    def __str__(self):
        return f"({self.left} * {self.right})"

class Mod(BinaryOp):
    """Channel-wise floor remainder"""

    def evaluate(self, x, y, t=0.0) -> Vector3:
        a = self.left.evaluate(x, y, t)
        b = self.right.evaluate(x, y, t)
        return Vector3(_floor_mod(a.x, b.x), _floor_mod(a.y, b.y), _floor_mod(a.z, b.z))

    def to_glsl(self) -> str:
        return f"mod({self.left.to_glsl()}, {self.right.to_glsl()})"

    def __str__(self):
        return f"({self.left} mod {self.right})"

# Ternary

class TernaryOp(ASTNode):
    arity = 3

class PerChannelMask(TernaryOp):
    """Per channel: mask > threshold picks a, otherwise b"""

    def __init__(self, mask: ASTNode, a: ASTNode, b: ASTNode, threshold: float):
        super().__init__(mask, a, b)
        self.threshold = float(threshold)

    def evaluate(self, x, y, t=0.0) -> Vector3:
        mask, a, b = (child.evaluate(x, y, t) for child in self.children)
        th = self.threshold
        return Vector3(
            _select(mask.x > th, a.x, b.x),
            _select(mask.y > th, a.y, b.y),
            _select(mask.z > th, a.z, b.z),
        )

    def to_glsl(self) -> str:
        mask, a, b = (child.to_glsl() for child in self.children)
        return f"mix({b}, {a}, greaterThan({mask}, vec3({_glsl_float(self.threshold)})))"

    def params(self) -> Dict[str, float]:
        return {'threshold': self.threshold}

    def __str__(self):
        mask, a, b = self.children
        return f"mask({mask} > {self.threshold:.3f}, {a}, {b})"

class BinaryMask(TernaryOp):
    """|mask| > threshold picks the whole of a, otherwise b"""

    def __init__(self, mask: ASTNode, a: ASTNode, b: ASTNode, threshold: float):
        super().__init__(mask, a, b)
        self.threshold = float(threshold)

    def evaluate(self, x, y, t=0.0) -> Vector3:
        mask, a, b = (child.evaluate(x, y, t) for child in self.children)
        cond = mask.length() > self.threshold
        return Vector3(_select(cond, a.x, b.x), _select(cond, a.y, b.y), _select(cond, a.z, b.z))

    def to_glsl(self) -> str:
        mask, a, b = (child.to_glsl() for child in self.children)
        return f"(length({mask}) > {_glsl_float(self.threshold)} ? {a} : {b})"

    def params(self) -> Dict[str, float]:
        return {'threshold': self.threshold}

    def __str__(self):
        mask, a, b = self.children
        return f"bmask(|{mask}| > {self.threshold:.3f}, {a}, {b})"

class SmoothMix(TernaryOp):
    """w * a + (1 - w) * b with w = |weight|; w outside [0, 1] extrapolates"""

    def evaluate(self, x, y, t=0.0) -> Vector3:
        weight, a, b = (child.evaluate(x, y, t) for child in self.children)
        return a.mix(b, weight.length())

    def to_glsl(self) -> str:
        weight, a, b = (child.to_glsl() for child in self.children)
        return f"mix({b}, {a}, length({weight}))"

    def __str__(self):
        weight, a, b = self.children
        return f"mix(|{weight}|, {a}, {b})"

class ColorMix(TernaryOp):
    """Red of the first child, green of the second, blue of the third"""

    def evaluate(self, x, y, t=0.0) -> Vector3:
        r, g, b = (child.evaluate(x, y, t) for child in self.children)
        return Vector3(r.x, g.y, b.z)

    def to_glsl(self) -> str:
        r, g, b = (child.to_glsl() for child in self.children)
        return f"vec3({r}.x, {g}.y, {b}.z)"

    def __str__(self):
        r, g, b = self.children
        return f"colormix({r}, {g}, {b})"

class RGB(ColorMix):
    """Root wrapper: the three children are the image's red, green and blue"""

    def __str__(self):
        r, g, b = self.children
        return f"rgb(\n  r={r},\n  g={g},\n  b={b}\n)"

NODE_TYPES = {cls.__name__: cls for cls in (
    VarX, VarY, VarT, Constant, Circle,
    Inverse, Sine, Well, Tent,
    Sum, Product, Mod,
    PerChannelMask, BinaryMask, SmoothMix, ColorMix, RGB,
)}

def node_from_dict(data: Dict[str, Any]) -> ASTNode:
    """Create node from dictionary representation"""
    node_type = data['type']
    if node_type not in NODE_TYPES:
        raise ValueError(f"Unknown node type: {node_type}")
    return NODE_TYPES[node_type].from_dict(data)

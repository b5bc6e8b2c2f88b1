"""
Shared fixtures, including a reference evaluator for the GLSL that
ASTNode.to_glsl() emits. Built-ins follow the GLSL 3.30 definitions
(mod(x, y) = x - y * floor(x / y), mix() with bvec3 selects).
"""
import re

import numpy as np
import pytest

_TOKEN = re.compile(r"\s*(?:(\d+\.?\d*(?:[eE][-+]?\d+)?)|([A-Za-z_]\w*)|(\S))")
_SWIZZLE = {'x': 0, 'y': 1, 'z': 2}

def _tokenize(source):
    tokens = []
    pos = 0
    source = source.strip()
    while pos < len(source):
        match = _TOKEN.match(source, pos)
        number, name, symbol = match.groups()
        if number is not None:
            tokens.append(('num', float(number)))
        elif name is not None:
            tokens.append(('name', name))
        else:
            tokens.append(('sym', symbol))
        pos = match.end()
    return tokens

def _well(v):
    w = 1.0 - 2.0 / (1.0 + v * v)
    w = w * w
    w = w * w
    return w * w

def _tent(v):
    return 1.0 - 2.0 * np.abs(v)

def _vec(*args):
    if len(args) == 1:
        return np.full(3, float(args[0]))
    return np.array([float(a) for a in args])

def _mod(a, b):
    with np.errstate(divide='ignore', invalid='ignore'):
        return a - b * np.floor(a / b)

def _mix(x, y, a):
    if isinstance(a, np.ndarray) and a.dtype == bool:
        return np.where(a, y, x)
    return x * (1.0 - a) + y * a

_FUNCTIONS = {
    'vec2': _vec,
    'vec3': _vec,
    'length': lambda v: float(np.sqrt(np.sum(v * v))),
    'sin': np.sin,
    'mod': _mod,
    'mix': _mix,
    'greaterThan': lambda a, b: a > b,
    'well_fn': _well,
    'tent_fn': _tent,
}

class GLSLExpression:
    """Recursive-descent evaluator for a single vec3 expression"""

    def __init__(self, source):
        self.tokens = _tokenize(source)
        self.pos = 0
        self.env = {}

    def evaluate(self, x, y, t):
        self.pos = 0
        self.env = {'x': float(x), 'y': float(y), 't': float(t)}
        value = self._ternary()
        assert self.pos == len(self.tokens), f"Trailing tokens at {self.pos}"
        return value

    def _peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else (None, None)

    def _expect(self, symbol):
        kind, value = self._peek()
        assert (kind, value) == ('sym', symbol), f"Expected {symbol!r}, got {value!r}"
        self.pos += 1

    def _ternary(self):
        cond = self._comparison()
        if self._peek() == ('sym', '?'):
            self.pos += 1
            a = self._ternary()
            self._expect(':')
            b = self._ternary()
            return a if cond else b
        return cond

    def _comparison(self):
        left = self._additive()
        if self._peek() == ('sym', '>'):
            self.pos += 1
            return left > self._additive()
        return left

    def _additive(self):
        value = self._multiplicative()
        while self._peek() in (('sym', '+'), ('sym', '-')):
            op = self.tokens[self.pos][1]
            self.pos += 1
            rhs = self._multiplicative()
            value = value + rhs if op == '+' else value - rhs
        return value

    def _multiplicative(self):
        value = self._unary()
        while self._peek() == ('sym', '*'):
            self.pos += 1
            value = value * self._unary()
        return value

    def _unary(self):
        if self._peek() == ('sym', '-'):
            self.pos += 1
            return -self._unary()
        return self._postfix()

    def _postfix(self):
        value = self._primary()
        while self._peek() == ('sym', '.'):
            self.pos += 1
            kind, name = self._peek()
            self.pos += 1
            value = float(value[_SWIZZLE[name]])
        return value

    def _primary(self):
        kind, value = self._peek()
        self.pos += 1
        if kind == 'num':
            return value
        if kind == 'sym':
            assert value == '(', f"Unexpected symbol {value!r}"
            inner = self._ternary()
            self._expect(')')
            return inner
        if self._peek() == ('sym', '('):
            self.pos += 1
            args = [self._ternary()]
            while self._peek() == ('sym', ','):
                self.pos += 1
                args.append(self._ternary())
            self._expect(')')
            return _FUNCTIONS[value](*args)
        return self.env[value]

@pytest.fixture
def glsl_eval():
    """Evaluate generated GLSL source at (x, y, t) and return a length-3 array"""
    def _evaluate(source, x, y, t=0.0):
        return np.asarray(GLSLExpression(source).evaluate(x, y, t), dtype=np.float64)
    return _evaluate

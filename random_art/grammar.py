"""
random_art/grammar.py - Seeded stochastic builders for expression trees

Every grammar owns its own random.Random stream, so the same seed, depth
and grammar always rebuild the same tree. generate_tree(0) returns a
terminal; generate_tree(d) builds every child at d - 1.
"""
import random
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Mapping, Sequence, Tuple, TypeVar, Union

from .ast_nodes import (
    ASTNode, VarX, VarY, VarT, Constant, Circle,
    Inverse, Sine, Well, Tent, Sum, Product, Mod,
    PerChannelMask, BinaryMask, SmoothMix, ColorMix, RGB,
)
from .errors import GrammarConfigError, ConstantPoolError

T = TypeVar('T')

CONSTANT_RANGE = (-1.0, 1.0)

LEAVES = ('x', 'y', 't', 'const', 'circle')

OPERATORS = {
    'sum': Sum,
    'product': Product,
    'mod': Mod,
    'sine': Sine,
    'well': Well,
    'tent': Tent,
    'inverse': Inverse,
    'per_channel_mask': PerChannelMask,
    'binary_mask': BinaryMask,
    'smooth_mix': SmoothMix,
    'color_mix': ColorMix,
}

Catalog = Union[Sequence[str], Mapping[str, float]]

def weighted_random_choice(rng: random.Random, choices: Sequence[Tuple[T, float]]) -> T:
    """Pick from (choice, weight) pairs with probability proportional to weight"""
    if not choices:
        raise ValueError("weighted_random_choice needs at least one choice")
    total = sum(weight for _, weight in choices)
    remaining = rng.random() * total
    for choice, weight in choices:
        if remaining < weight:
            return choice
        remaining -= weight
    # Rounding can leave the draw unresolved
    return choices[-1][0]

class ConstantPool:
    """A fixed set of pre-sampled constants shared by one generated tree"""

    def __init__(self, rng: random.Random, size: int = 8,
                 value_range: Tuple[float, float] = CONSTANT_RANGE):
        if size < 0:
            raise GrammarConfigError(f"Constant pool size must be >= 0, got {size}")
        self.values = [rng.uniform(*value_range) for _ in range(size)]

    def draw(self, rng: random.Random) -> float:
        if not self.values:
            raise ConstantPoolError("Cannot draw a constant from an empty pool")
        return rng.choice(self.values)

    def __len__(self):
        return len(self.values)

class ArtGrammar(ABC):
    """Base class for tree-building grammars"""

    def __init__(self, seed: int):
        self.seed = seed
        self.rng = random.Random(seed)

    @abstractmethod
    def generate_tree(self, depth: int) -> ASTNode:
        """Build a tree whose longest path is at most depth edges"""
        pass

    @staticmethod
    def _check_depth(depth: int) -> None:
        if depth < 0:
            raise ValueError(f"Tree depth must be >= 0, got {depth}")

def _normalize_catalog(catalog: Catalog, kind: str, known) -> List[Tuple[str, float]]:
    if isinstance(catalog, Mapping):
        entries = [(name, float(weight)) for name, weight in catalog.items()]
    else:
        entries = [(name, 1.0) for name in catalog]
    if not entries:
        raise GrammarConfigError(f"The {kind} catalog is empty")
    for name, weight in entries:
        if name not in known:
            raise GrammarConfigError(f"Unknown {kind} '{name}'")
        if not weight > 0:
            raise GrammarConfigError(f"Weight for {kind} '{name}' must be positive, got {weight}")
    return entries

class CatalogGrammar(ArtGrammar):
    """Grammar that picks operators and leaves from named catalogs"""

    inverse_pivot = 1.0
    default_operators: Catalog = ()
    default_leaves: Catalog = ()

    def __init__(self, seed: int, operators: Catalog = None, leaves: Catalog = None):
        super().__init__(seed)
        self.operators = _normalize_catalog(
            self.default_operators if operators is None else operators, 'operator', OPERATORS)
        self.leaves = _normalize_catalog(
            self.default_leaves if leaves is None else leaves, 'leaf', LEAVES)

    @abstractmethod
    def _choose(self, catalog: List[Tuple[str, float]]) -> str:
        pass

    @abstractmethod
    def _constant(self) -> float:
        pass

    def generate_tree(self, depth: int) -> ASTNode:
        self._check_depth(depth)
        if depth == 0:
            return self._build_leaf(self._choose(self.leaves))
        return self._build_operator(self._choose(self.operators), depth)

    def _build_leaf(self, name: str) -> ASTNode:
        if name == 'x':
            return VarX()
        if name == 'y':
            return VarY()
        if name == 't':
            return VarT()
        if name == 'const':
            return Constant(self._constant())
        return Circle(self._constant(), self._constant())

    def _build_operator(self, name: str, depth: int) -> ASTNode:
        cls = OPERATORS[name]
        children = [self.generate_tree(depth - 1) for _ in range(cls.arity)]
        if cls in (PerChannelMask, BinaryMask):
            return cls(*children, threshold=self._constant())
        if cls is Inverse:
            return Inverse(*children, pivot=self.inverse_pivot)
        return cls(*children)

class RandomArtGrammar(CatalogGrammar):
    """Uniform choice over a fixed catalog, constants from a shared pool

    Inverse reflects around 1.0 and the time variable is available.
    """

    default_operators = (
        'sum', 'sine', 'per_channel_mask', 'binary_mask', 'smooth_mix',
        'well', 'tent', 'product', 'inverse', 'mod',
    )
    default_leaves = ('x', 'y', 't', 'const', 'circle')

    def __init__(self, seed: int, operators: Catalog = None, leaves: Catalog = None,
                 pool_size: int = 8):
        super().__init__(seed, operators, leaves)
        self.constants = ConstantPool(self.rng, pool_size)

    def _choose(self, catalog: List[Tuple[str, float]]) -> str:
        return self.rng.choice(catalog)[0]

    def _constant(self) -> float:
        return self.constants.draw(self.rng)

class WeightedArtGrammar(CatalogGrammar):
    """Weighted choice over the catalogs, fresh constants per leaf

    Inverse negates (pivot 0.0) and there is no time variable.
    """

    inverse_pivot = 0.0
    default_operators = {
        'sum': 2.0,
        'product': 2.0,
        'sine': 1.0,
        'well': 1.0,
        'tent': 1.0,
        'inverse': 1.0,
        'mod': 0.5,
        'per_channel_mask': 1.0,
        'binary_mask': 1.0,
        'smooth_mix': 1.0,
        'color_mix': 1.0,
    }
    default_leaves = {'x': 2.0, 'y': 2.0, 'const': 1.0, 'circle': 1.0}

    def _choose(self, catalog: List[Tuple[str, float]]) -> str:
        return weighted_random_choice(self.rng, catalog)

    def _constant(self) -> float:
        return self.rng.uniform(*CONSTANT_RANGE)

class PerrigSongGrammar(ArtGrammar):
    """Grammar from Perrig & Song, "Hash Visualization" (1999)

    A ::= const | x | y | t
    C ::= A | sum(C, C) | product(C, C)     weights 1 : 2 : 2
    root ::= rgb(C, C, C)
    """

    def __init__(self, seed: int):
        super().__init__(seed)
        self._a_rules: List[Tuple[Callable[[], ASTNode], float]] = [
            (lambda: Constant(self.rng.uniform(*CONSTANT_RANGE)), 1.0),
            (VarX, 1.0),
            (VarY, 1.0),
            (VarT, 1.0),
        ]
        self._c_rules: List[Tuple[Callable[[int], ASTNode], float]] = [
            (lambda depth: self._rule_a(), 1.0),
            (lambda depth: Sum(self._rule_c(depth - 1), self._rule_c(depth - 1)), 2.0),
            (lambda depth: Product(self._rule_c(depth - 1), self._rule_c(depth - 1)), 2.0),
        ]

    def _rule_a(self) -> ASTNode:
        return weighted_random_choice(self.rng, self._a_rules)()

    def _rule_c(self, depth: int) -> ASTNode:
        if depth == 0:
            return self._rule_a()
        return weighted_random_choice(self.rng, self._c_rules)(depth)

    def generate_tree(self, depth: int) -> ASTNode:
        self._check_depth(depth)
        if depth == 0:
            return self._rule_a()
        return RGB(self._rule_c(depth - 1), self._rule_c(depth - 1), self._rule_c(depth - 1))

GRAMMARS: Dict[str, type] = {
    'perrig-song': PerrigSongGrammar,
    'random': RandomArtGrammar,
    'weighted': WeightedArtGrammar,
}

def create_grammar(name: str, seed: int, **kwargs) -> ArtGrammar:
    """Instantiate a grammar by its registered name"""
    if name not in GRAMMARS:
        raise GrammarConfigError(f"Unknown grammar '{name}', expected one of {sorted(GRAMMARS)}")
    return GRAMMARS[name](seed, **kwargs)

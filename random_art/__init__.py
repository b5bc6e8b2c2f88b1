"""
random_art - Procedural images from random expression trees

A seeded grammar builds an expression tree over (x, y, t). The tree is either
evaluated on the CPU into an RGB image or translated into a GLSL fragment
shader for real-time rendering.
"""

__version__ = "0.1.0"
__author__ = "Random Art Project"

from .vec3 import Vector3
from .ast_nodes import (
    ASTNode, VarX, VarY, VarT, Constant, Circle,
    Inverse, Sine, Well, Tent, Sum, Product, Mod,
    PerChannelMask, BinaryMask, SmoothMix, ColorMix, RGB,
    node_from_dict, NODE_TYPES
)
from .grammar import (
    ArtGrammar, RandomArtGrammar, WeightedArtGrammar, PerrigSongGrammar,
    ConstantPool, weighted_random_choice, create_grammar, GRAMMARS
)
from .errors import RandomArtError, GrammarConfigError, ConstantPoolError
from .evaluator import Evaluator
from .shader import build_fragment_shader

__all__ = [
    'Vector3',
    'ASTNode', 'VarX', 'VarY', 'VarT', 'Constant', 'Circle',
    'Inverse', 'Sine', 'Well', 'Tent', 'Sum', 'Product', 'Mod',
    'PerChannelMask', 'BinaryMask', 'SmoothMix', 'ColorMix', 'RGB',
    'node_from_dict', 'NODE_TYPES',
    'ArtGrammar', 'RandomArtGrammar', 'WeightedArtGrammar', 'PerrigSongGrammar',
    'ConstantPool', 'weighted_random_choice', 'create_grammar', 'GRAMMARS',
    'RandomArtError', 'GrammarConfigError', 'ConstantPoolError',
    'Evaluator',
    'build_fragment_shader'
]

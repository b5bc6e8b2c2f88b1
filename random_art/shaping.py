"""
random_art/shaping.py - Numba-compiled per-channel shaping functions
"""
from numba import vectorize

# Compiled eagerly; work on floats and on numpy arrays alike.

@vectorize(['float64(float64)'])
def well_fn(v):
    """(1 - 2/(1+v^2))^8"""
    return (1.0 - 2.0 / (1.0 + v * v)) ** 8

@vectorize(['float64(float64)'])
def tent_fn(v):
    """1 - 2|v|"""
    return 1.0 - 2.0 * abs(v)

"""
random_art/errors.py - Exceptions raised while configuring and running grammars
"""

class RandomArtError(ValueError):
    """Base class for random_art errors"""

class GrammarConfigError(RandomArtError):
    """A grammar was constructed with an empty or invalid catalog"""

class ConstantPoolError(RandomArtError):
    """A constant was requested from an empty pool"""

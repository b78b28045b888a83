"""
atomreg: active sets of atoms for forward-backward greedy methods
in atomic norm regularization.
"""
from .info import VERSION as __version__

"""
Mikrograd: a minimal scalar autograd engine.

This package provides reverse-mode automatic differentiation over scalar
Values, and small neural networks built out of them.
"""

from mikrograd.engine import DomainError, Value
from mikrograd import nn
from mikrograd.utils import draw_dot

__version__ = "0.1.0"
__all__ = ["Value", "DomainError", "nn", "draw_dot"]

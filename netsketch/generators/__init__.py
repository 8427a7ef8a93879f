"""
Code Generators Package.

One generator per (network kind, framework) pair behind a single registry
facade.
"""

from .base import CodeGenerator, GeneratedCode, keras_activation, pytorch_activation
from .keras import KerasGenerator
from .pytorch_cnn import PyTorchCNNGenerator
from .pytorch_fcn import PyTorchFCNGenerator
from .registry import generate_code, generate_parts, get_generator

__all__ = [
    "CodeGenerator",
    "GeneratedCode",
    "KerasGenerator",
    "PyTorchCNNGenerator",
    "PyTorchFCNGenerator",
    "generate_code",
    "generate_parts",
    "get_generator",
    "keras_activation",
    "pytorch_activation",
]

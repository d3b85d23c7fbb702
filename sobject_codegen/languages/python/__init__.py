"""
Python code generator module.

Generates Python dataclasses and enums from SObject descriptions.
"""

from .generator import PYTHON_TYPE_MAP, PythonGenerator, create_python_generator

__all__ = [
    "PythonGenerator",
    "PYTHON_TYPE_MAP",
    "create_python_generator",
]

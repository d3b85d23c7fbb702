"""
Java code generator module.

Generates camel-salesforce DTO classes from SObject descriptions.
"""

from .generator import JAVA_TYPE_MAP, JavaGenerator, create_java_generator

__all__ = [
    "JavaGenerator",
    "JAVA_TYPE_MAP",
    "create_java_generator",
]

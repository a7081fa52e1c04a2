"""
Mendelian inheritance checking for mendelcheck.

This module checks genotype calls of a family for compatibility with the
Mendelian modes of inheritance, and annotates variant tables with the modes
each variant is compatible with.
"""

from .analyzer import analyze_inheritance
from .checker import MendelianInheritanceChecker
from .modes import ModeOfInheritance, SubModeOfInheritance
from .parallel_analyzer import analyze_inheritance_parallel

__all__ = [
    "MendelianInheritanceChecker",
    "ModeOfInheritance",
    "SubModeOfInheritance",
    "analyze_inheritance",
    "analyze_inheritance_parallel",
]

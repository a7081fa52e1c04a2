"""
Exception classes for mendelcheck.

All errors raised by the library derive from MendelCheckError and carry an
optional ``details`` dictionary with machine-readable context:

- IncompatiblePedigreeError for genotype calls whose samples are not part of
  the pedigree
- PedParseError for malformed pedigree files and unresolvable pedigree links
"""

from typing import Dict, Iterable, Optional


class MendelCheckError(Exception):
    """Base exception for all mendelcheck errors."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize error.

        Parameters
        ----------
        message : str
            Error message
        details : dict, optional
            Additional error details
        """
        super().__init__(message)
        self.details = details or {}


class IncompatiblePedigreeError(MendelCheckError):
    """Raised when genotype calls contain samples that are not in the pedigree."""

    def __init__(self, message: str, unknown_samples: Optional[Iterable[str]] = None):
        """Initialize incompatible pedigree error."""
        unknown = sorted(set(unknown_samples or []))
        if unknown:
            message = f"{message}: unknown samples {', '.join(unknown)}"
        super().__init__(message, {"unknown_samples": unknown})


class PedParseError(MendelCheckError):
    """Raised when a pedigree file or pedigree structure cannot be parsed."""

    def __init__(self, message: str, line: Optional[str] = None):
        """Initialize PED parse error."""
        if line is not None:
            message = f'{message}: "{line}"'
        super().__init__(message, {"line": line})

"""
Use cases orchestrating the DAOs.
"""

from .seed_reference_data import SeedReferenceDataUseCase

__all__ = ["SeedReferenceDataUseCase"]

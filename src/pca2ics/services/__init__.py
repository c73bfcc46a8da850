"""Services module for pca2ics.

Provides:
- Conversion Service: load a workbook, convert, write results back
"""

from .conversion_service import ConversionService, ConversionReport

__all__ = ["ConversionService", "ConversionReport"]

"""
PCA -> ICS conversion: code resolution, row assembly and the batch driver.
"""

from pca2ics.convert.resolver import CodeResolver, ResolvedAccount, ResolvedJournal
from pca2ics.convert.assembler import (
    OUTPUT_COLUMNS,
    OUTPUT_FIELDS,
    OUTPUT_HEADERS,
    assemble_row,
    format_date,
)
from pca2ics.convert.converter import convert, ConversionResult

__all__ = [
    "CodeResolver",
    "ResolvedAccount",
    "ResolvedJournal",
    "OUTPUT_COLUMNS",
    "OUTPUT_FIELDS",
    "OUTPUT_HEADERS",
    "assemble_row",
    "format_date",
    "convert",
    "ConversionResult",
]

"""Default configuration values - no more magic numbers!

All default values should be defined here, not hardcoded in the code.
"""

from __future__ import annotations


# ================================================================
# Filtering Defaults
# ================================================================

DEFAULT_KEEP = 1
"""How many distinct top scores survive a filter run (higher = fuzzier)."""

DEFAULT_PROGRESS_STEP = 5
"""Progress is reported (and cancellation polled) every N percent."""

DEFAULT_ADVANCED_DELIMITERS: tuple[str, ...] = (".",)
"""Delimiters used to tokenize owner types in the developer view."""

DEFAULT_MAX_WORKERS = 2
"""Worker threads used for index building and filtering."""


# ================================================================
# Hierarchy Defaults
# ================================================================

NO_NAMESPACE = "(global)"
"""Label for entries that declare no namespace."""

DEFAULT_ROOT_LABEL = "ops"
"""Label of the root node of every tree."""

DEFAULT_ROOT_INVOCATION = "# @OpService ops"
"""Snippet carried by the root node (keeps it from being pruned)."""

DEFAULT_ROOT_OWNER_TYPE = "net.imagej.ops.OpService"
"""Owner type shown for the root node."""


# ================================================================
# Simplified View Defaults
# ================================================================

DEFAULT_SIMPLE_TYPES: tuple[str, ...] = ("Img",)
"""Input types that make an operation eligible for the user view."""

IMAGE_TYPES_PATTERN = (
    "ArrayImg|PlanarImg|RandomAccessibleInterval|IterableInterval|Img|Histogram1d"
    "|ImgPlus|Dataset"
)
"""Type names folded into ``Image`` in simplified signatures."""

NUMBER_TYPES_PATTERN = "int|short|long|double|float|byte|RealType"
"""Type names folded into ``Number`` in simplified signatures."""

DEFAULT_TYPE_ALIASES: dict[str, str] = {
    IMAGE_TYPES_PATTERN: "Image",
    NUMBER_TYPES_PATTERN: "Number",
}
"""Regex alternation -> display label, applied in insertion order."""


# ================================================================
# Logging Defaults
# ================================================================

DEFAULT_LOG_LEVEL = "WARNING"
"""Default console log level."""

DEFAULT_LOG_MAX_BYTES = 5 * 1024 * 1024
"""Rotate log files after 5 MB."""

DEFAULT_LOG_BACKUP_COUNT = 3
"""Number of rotated log files kept."""


# ================================================================
# Path Defaults
# ================================================================

DEFAULT_CONFIG_FILENAME = "op_finder.json"
"""Default configuration filename."""

PREFERENCES_DIRNAME = ".op-finder"
"""Directory (under the home directory) holding user preferences."""


# ================================================================
# Application Constants
# ================================================================

NAMESPACE = "op-finder"
"""Application namespace."""

COLUMN_NAMES: tuple[str, str, str] = ("Op signature", "Code to use", "Defined in class")
"""Column headers used when rendering trees and results."""

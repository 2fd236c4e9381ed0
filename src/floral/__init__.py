"""Floral - look up and explain the floral formulae of flowering plant families."""

__version__ = "0.1.0"

# Record model
from floral.formula import (
    Adnation,
    Connation,
    FloralPart,
    FloralRecord,
    FlowerType,
    Many,
    Ovary,
    Part,
    Range,
    SepalsPetals,
    Single,
    Symmetry,
    SymmetryKind,
    Tepals,
    Unknown,
    Whorl,
)

# Errors
from floral.errors import DatasetError, FloralError, NotFoundError

# Dataset loader
from floral.dataset import count_by_order, count_by_symmetry, load

# Lookup
from floral.query import QueryMode, find, query, suggest

# Rendering
from floral.render import render
from floral.explain import explain

__all__ = [
    # Model
    "Adnation",
    "Connation",
    "FloralPart",
    "FloralRecord",
    "FlowerType",
    "Many",
    "Ovary",
    "Part",
    "Range",
    "SepalsPetals",
    "Single",
    "Symmetry",
    "SymmetryKind",
    "Tepals",
    "Unknown",
    "Whorl",
    # Errors
    "DatasetError",
    "FloralError",
    "NotFoundError",
    # Dataset
    "count_by_order",
    "count_by_symmetry",
    "load",
    # Lookup
    "QueryMode",
    "find",
    "query",
    "suggest",
    # Rendering
    "explain",
    "render",
]

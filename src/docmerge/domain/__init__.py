"""Domain layer: errors, schemas and constants."""

from .errors import ErrorCodes, MergeError
from .schemas import (
    BatchResult,
    MatchResult,
    Record,
    RecordOutcome,
    RunLog,
    SheetData,
    VariablePair,
    VariableSet,
)

__all__ = [
    "MergeError",
    "ErrorCodes",
    "MatchResult",
    "VariablePair",
    "VariableSet",
    "Record",
    "RecordOutcome",
    "BatchResult",
    "SheetData",
    "RunLog",
]

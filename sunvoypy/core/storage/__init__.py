"""Output storage for run results."""
from .result_writer import ResultWriter

__all__ = [
    'ResultWriter',
]

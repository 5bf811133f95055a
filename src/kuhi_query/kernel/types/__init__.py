"""Kernel types – small framework-agnostic value types."""
from kuhi_query.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]

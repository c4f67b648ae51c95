"""Concrete filter types."""

from dependent_filter.services.filters.dependent import DependentFilter
from dependent_filter.services.filters.types.boolean import BooleanFilter
from dependent_filter.services.filters.types.select import SelectFilter

__all__ = [
    "BooleanFilter",
    "DependentFilter",
    "SelectFilter",
]

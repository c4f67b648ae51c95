"""Client-side controllers for the filter panel."""

from dependent_filter.frontend.dependent_select import DependentSelect, FilterPanel, SelectState
from dependent_filter.frontend.options_client import OptionsClient

__all__ = ["DependentSelect", "FilterPanel", "OptionsClient", "SelectState"]

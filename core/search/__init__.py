"""Search Module - filter specifications and the job search flow."""
from core.search.filters import (
    FilterSpec,
    FilterUpdate,
    apply_filter_update,
    count_active_filters
)

__all__ = ['FilterSpec', 'FilterUpdate', 'apply_filter_update', 'count_active_filters']

"""Cache key derivation for job searches."""
import hashlib
import json

from core.search.filters import FilterSpec


class FilterFingerprinter:
    """
    Pure logic for turning a filter specification into a cache key.
    """

    @staticmethod
    def calculate(filters: FilterSpec) -> str:
        """
        SHA256 over the canonical JSON form of the filters.

        FilterSpec already collapses whitespace and sorts skills, and keys
        are sorted here, so field order never affects the result.
        """
        raw_string = json.dumps(filters.canonical(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(raw_string.encode('utf-8')).hexdigest()

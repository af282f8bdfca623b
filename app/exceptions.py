"""
Application-specific exceptions. Routers translate these to HTTP errors.
"""


class GenerationCancelled(Exception):
    """Raised when schedule generation is aborted through its cancel event."""
    pass


class SectionSourceError(Exception):
    """Raised by a section source when fetching sections from the portal fails."""
    pass


class SectionSourceUnavailable(Exception):
    """Raised when uncached courses are requested but no section source is installed."""

    def __init__(self, missing: list[str]):
        super().__init__(f"No cached sections and no section source for: {', '.join(missing)}")
        self.missing = missing

"""
Custom exception classes for the timeline publisher.
"""


class TimelineError(Exception):
    """Base exception for all timeline publishing errors."""
    pass


class AssetNotFoundError(TimelineError):
    """Raised when a command references an asset the library does not hold."""

    def __init__(self, asset_id):
        super().__init__(f"Asset '{asset_id}' is not in the library")
        self.asset_id = asset_id


class TemplateNotFoundError(TimelineError):
    """Raised when the renderer has no template under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"No template named '{name}'")
        self.name = name


class TimelineValidationError(TimelineError):
    """Raised when strict validation finds structural errors in a timeline."""

    def __init__(self, results):
        errors = sum(
            len(issues)
            for category in results.values()
            for issue_type, issues in category.items()
            if "error" in issue_type
        )
        super().__init__(f"Timeline failed validation with {errors} error(s)")
        self.results = results


__all__ = [
    'TimelineError',
    'AssetNotFoundError',
    'TemplateNotFoundError',
    'TimelineValidationError',
]

from .errors import (
    RewriteError,
    MissingInput,
    MissingRequiredParameter,
    InvalidProxy,
    InvalidLiveDescriptor,
    InvalidPlaybackDescriptor,
    NoValidSource,
    BuildFailure,
)

__all__ = [
    "RewriteError",
    "MissingInput",
    "MissingRequiredParameter",
    "InvalidProxy",
    "InvalidLiveDescriptor",
    "InvalidPlaybackDescriptor",
    "NoValidSource",
    "BuildFailure",
]

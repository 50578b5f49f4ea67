class RewriteError(Exception):
    """Base exception for every failure of the rewrite pipeline."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingInput(RewriteError):
    def __init__(self):
        super().__init__("Missing query string")


class MissingRequiredParameter(RewriteError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing required parameter: {name}")


class InvalidProxy(RewriteError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid proxy address: {value!r}")


class InvalidLiveDescriptor(RewriteError):
    """Raised for a malformed ``rtp`` value. The resolver treats it as absent."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid live descriptor: {value!r}")


class InvalidPlaybackDescriptor(RewriteError):
    """Raised for a malformed ``rtsp`` value. The resolver treats it as absent."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid playback descriptor: {value!r}")


class NoValidSource(RewriteError):
    def __init__(self):
        super().__init__("No valid rtp or rtsp source")


class BuildFailure(RewriteError):
    status_code = 500

    def __init__(self, message: str = "Failed to build target URL"):
        super().__init__(message)

class ConfigError(Exception):
    pass


class UploadError(Exception):
    pass


class ReadFailure(UploadError):
    """Local file could not be read before upload."""


class RemoteFailure(UploadError):
    """Gitee rejected the request, or it never reached Gitee."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PromptClosedError(Exception):
    pass

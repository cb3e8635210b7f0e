"""
Pipeline error taxonomy.

Every failure of the fetch-decode-cache pipeline is raised to the immediate
caller as one of these. None of them are retried.
"""


class PipelineError(Exception):
    """Base class for fetch/decode/persist failures"""

    def __init__(self, message, output=''):
        super().__init__(message)
        self.output = output or ''


class FetchFailed(PipelineError):
    """Raised when the downloader could not start, exited nonzero or produced no file"""

    pass


class DecodeFailed(PipelineError):
    """Raised when the decoder could not start, failed mid-read or exited nonzero"""

    pass


class PersistFailed(PipelineError):
    """Raised when the decoded PCM could not be written to the cache"""

    pass


class PathError(PipelineError):
    """Raised when the cache directory tree could not be created"""

    pass

"""Exception hierarchy for skillscope.

Input errors (``ArchiveError`` and subclasses) carry a message that can be
shown to the user as-is. Remote errors keep the underlying message so a bad
credential, a bad network and a bad response shape stay distinguishable.
"""

from __future__ import annotations


class SkillscopeError(Exception):
    """Base class for all skillscope errors."""


class ArchiveError(SkillscopeError):
    """The supplied archive cannot be analyzed."""


class ZipArchiveError(ArchiveError):
    """The archive is still zipped."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Please extract the ZIP first and upload the conversations.json file inside it."
        )


class ArchiveParseError(ArchiveError):
    """The archive is not valid JSON."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Couldn't parse that file. "
            "Make sure it's the conversations.json from your Claude export."
        )


class ArchiveFormatError(ArchiveError):
    """The archive is JSON but not shaped like a conversation export."""


class ConfigError(SkillscopeError):
    """Invalid analyzer settings."""


class RemoteAnalysisError(SkillscopeError):
    """Base class for failures on the remote analysis path."""


class RemoteRequestError(RemoteAnalysisError):
    """The request never produced an HTTP response."""


class RemoteStatusError(RemoteAnalysisError):
    """The endpoint answered with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteResponseError(RemoteAnalysisError):
    """The endpoint answered, but the body does not conform to the expected shape."""


class AnalysisError(SkillscopeError):
    """An analysis run could not be performed."""


class AnalysisInProgressError(AnalysisError):
    """Another analysis run is still in flight on the same analyzer."""


__all__ = [
    "SkillscopeError",
    "ArchiveError",
    "ZipArchiveError",
    "ArchiveParseError",
    "ArchiveFormatError",
    "ConfigError",
    "RemoteAnalysisError",
    "RemoteRequestError",
    "RemoteStatusError",
    "RemoteResponseError",
    "AnalysisError",
    "AnalysisInProgressError",
]

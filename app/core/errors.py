"""Domain exceptions for metadata lookups."""


class MetadataError(Exception):
    """Base class for metadata failures."""


class UpstreamError(MetadataError):
    """A catalog provider answered with a non-2xx status or could not be reached.

    ``status_code`` is ``None`` when the request never got a response
    (connection refused, DNS failure, invalid JSON body...).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotFoundError(UpstreamError):
    """The provider reported the requested content as absent."""


class UnsupportedTypeError(MetadataError, ValueError):
    """A media type outside of movie/series reached a type-dependent function."""

    def __init__(self, media_type: object):
        super().__init__(f"Unsupported media type: {media_type!r}")
        self.media_type = media_type


class PosterResolutionFailure(MetadataError):
    """Poster lookup failed; callers degrade to "no poster"."""

"""Custom exception hierarchy for SongPicker.

All application exceptions inherit from :class:`SongPickerError`, which
carries an optional ``provider_name`` so error handlers can identify which
backing store (e.g. "json_file", "memory") caused the failure, and a
``status_code`` the HTTP layer uses when turning the error into a response.

The hierarchy is organized by the component that raises it:

    SongPickerError  (base -- catch-all for any SongPicker error)
    +-- ValidationError          (missing / empty input)           400
    +-- NotFoundError            (delete of an unknown song id)    404
    +-- ConflictError            (duplicate title + artist)        409
    +-- EmptyCatalogError        (selection has nothing to pick)   422
    +-- NoSongsForArtistError    (drawn artist has no songs)       422
    +-- BusyError                (another write is in progress)    429
    +-- StorageUnavailableError  (document store unreadable)       500
    +-- ConfigurationError       (startup / invalid config)        500

Callers handle errors at the level they care about -- e.g. retry on
BusyError, ask the user to fix input on ValidationError, or surface a
server failure on StorageUnavailableError.
"""


class SongPickerError(Exception):
    """Base exception for all SongPicker errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which store triggered the error.  The
    ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[json_file] songs.json is not valid JSON``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Catalog store errors (user input and write contention)
# ---------------------------------------------------------------------------

class ValidationError(SongPickerError):
    """Raised when a required field is missing or empty."""

    status_code = 400

    def __init__(
        self,
        message: str = "Title and artist name are required",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(SongPickerError):
    """Raised when a song id does not exist (usually stale client state)."""

    status_code = 404

    def __init__(
        self,
        message: str = "Song not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConflictError(SongPickerError):
    """Raised when a song with the same title and artist is already registered."""

    status_code = 409

    def __init__(
        self,
        message: str = "This song is already registered",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class BusyError(SongPickerError):
    """Raised when a write arrives while another write is still in flight.

    The store never queues writes; callers retry (backoff or user-triggered).
    """

    status_code = 429

    def __init__(
        self,
        message: str = "The catalog is busy, please try again shortly",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Selection engine errors
# ---------------------------------------------------------------------------

class EmptyCatalogError(SongPickerError):
    """Raised when the selection engine has no song or artist to draw from."""

    status_code = 422

    def __init__(
        self,
        message: str = "There are no songs to pick from",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NoSongsForArtistError(SongPickerError):
    """Raised by ``artist-equal`` when the drawn artist has no songs left.

    The draw is not retried; the caller lets the user pick again.
    """

    status_code = 422

    def __init__(
        self,
        artist_name: str,
        provider_name: str | None = None,
    ) -> None:
        self._artist_name = artist_name
        super().__init__(
            message=f"No songs found for {artist_name}. Please try again.",
            provider_name=provider_name,
        )

    @property
    def artist_name(self) -> str:
        return self._artist_name


# ---------------------------------------------------------------------------
# Storage / configuration errors
# ---------------------------------------------------------------------------

class StorageUnavailableError(SongPickerError):
    """Raised when a backing collection cannot be read or written."""

    status_code = 500

    def __init__(
        self,
        message: str = "Catalog storage is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(SongPickerError):
    """Raised when configuration is invalid or missing at startup."""

    status_code = 500

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)

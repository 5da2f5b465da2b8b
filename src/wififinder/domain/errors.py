"""Exception hierarchy for venue discovery."""


class WifiFinderError(Exception):
    """Base exception for all wififinder errors."""


class InvalidCoordinates(WifiFinderError, ValueError):
    """Latitude/longitude missing, non-numeric or zero."""

    def __init__(self, latitude: object, longitude: object):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(f"Invalid coordinates: lat={latitude!r} lon={longitude!r}")


class UpstreamUnavailable(WifiFinderError):
    """An external data source failed; callers recover with synthetic data."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"{source} unavailable: {detail}")


class AssemblyFailed(WifiFinderError):
    """Unexpected failure while merging or sorting venues."""

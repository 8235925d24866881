from __future__ import annotations


class LocatorFinderError(Exception):
    """Base class for failures at the CLI and browser boundaries."""


class DescriptionLoadError(LocatorFinderError):
    pass


class ElementCaptureError(LocatorFinderError):
    pass

# art_components/errors.py
"""
Exception types raised by the genetic art components.

Startup failures (bad input image, unusable rendering surface) derive from
GeneticArtError so the application can report them in one place and stop
before the generation loop starts.
"""


class GeneticArtError(Exception):
    """Base class for unrecoverable startup failures."""


class ImageSourceError(GeneticArtError):
    """The target image is missing, cannot be decoded, or has the wrong size."""


class RenderTargetError(GeneticArtError):
    """A rendering surface or display window could not be created."""


class StaleFitnessError(RuntimeError):
    """A chromosome's fitness was read before it was (re)computed."""

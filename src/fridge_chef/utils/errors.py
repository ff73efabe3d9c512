"""Error taxonomy for the generation pipelines.

- TransportFailure: the service call (or image download) could not complete.
- GenerationFailure: the call completed but returned content that cannot be used.

A missing inline image in an illustration response is not an error; the
illustrator falls back to a placeholder URL instead.
"""


class FridgeChefError(Exception):
    """Base class for all errors raised by the generation pipelines."""


class TransportFailure(FridgeChefError):
    """The underlying request could not complete (network, timeout, auth, quota)."""


class GenerationFailure(FridgeChefError, ValueError):
    """The service responded, but with empty, unparseable or off-schema content."""

"""Exception hierarchy.

InferenceError and its subclasses never leave the filter resolver; they
only select the keyword fallback. PersistenceError and TranscodeError end
the request.
"""


class VibecutError(Exception):
    """Base class for all vibecut errors."""


# ── Remote inference (recovered locally) ──────────────────────────

class InferenceError(VibecutError):
    """The remote filter suggestion could not be used."""


class MissingCredentialError(InferenceError):
    """No inference API key is configured."""


class InferenceRequestError(InferenceError):
    """Transport failure or non-2xx response from the inference service."""


class EnvelopeError(InferenceError):
    """The response envelope has no candidates[0].content.parts[0].text."""


class FilterPayloadError(InferenceError):
    """The candidate text is not JSON with a 'filters' list."""


# ── Fatal ─────────────────────────────────────────────────────────

class PersistenceError(VibecutError):
    """The license/project store could not be reached or written."""


class TranscodeError(VibecutError):
    """ffmpeg exited non-zero, timed out, or could not be launched."""

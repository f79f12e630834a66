"""Error taxonomy for the capture-to-delivery pipeline."""


class PipelineError(Exception):
    """Base class for pipeline errors."""


class ValidationError(PipelineError):
    """Raised when a delivery contact is missing or malformed."""


class UploadFailure(PipelineError):
    """Raised when the artifact could not be written to object storage."""


class RegistrationFailure(PipelineError):
    """Raised when the event backend did not accept the artifact record."""


class ConfigFetchFailure(PipelineError):
    """Raised when event branding could not be fetched."""


class IdentifierError(PipelineError):
    """Raised when the random source cannot produce an identifier."""


class CaptureError(PipelineError):
    """Raised when the capture device fails to return a frame."""


class SessionStateError(PipelineError):
    """Raised when an action is not allowed in the current session state."""

class ThesisAIError(Exception):
    """Base class for errors raised by the thesis AI pipeline."""


class UploadValidationError(ThesisAIError):
    """The uploaded file is missing, not a PDF, or too large."""


class AIServiceUnavailable(ThesisAIError):
    """The OpenAI client could not be initialized."""


class ExtractionError(ThesisAIError):
    """Text could not be extracted from the uploaded PDF."""

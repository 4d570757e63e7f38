class SpendWiseError(Exception):
    """Base class for every error raised by the application."""


class InputError(SpendWiseError):
    """
    Raised before any generator call when the request itself is unusable.
    """

    DEFAULT_MESSAGE = "Please provide some text from a receipt or invoice."

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class UnsupportedLanguageError(InputError):
    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Unsupported output language: {language}")


class GenerationError(SpendWiseError):
    """
    Single user-facing failure of the external generator.

    The message is stable on purpose: the underlying cause is logged
    and chained (``raise ... from exc``) but never shown to the user.
    """

    USER_MESSAGE = (
        "We encountered an error analyzing your text. "
        "Please ensure it's readable and try again."
    )

    def __init__(self):
        super().__init__(self.USER_MESSAGE)


class PersistenceReadError(SpendWiseError):
    """Stored history could not be decoded. Recovered locally as an empty log."""


class AnalysisInProgress(SpendWiseError):
    def __init__(self):
        super().__init__("An analysis is already running")


class ModelConfigError(SpendWiseError):
    pass


class PromptNotFound(SpendWiseError):
    pass

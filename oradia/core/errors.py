# oradia/core/errors.py
from typing import List


class ReadingError(Exception):
    """Base class for failures while turning a draw into a report."""


class IncompleteDrawError(ReadingError):
    def __init__(self, spread_subject: str, missing: List[str]):
        self.missing = missing
        super().__init__(f"Familles incomplètes pour {spread_subject} : {', '.join(missing)}")


class MissingCredentialError(ReadingError):
    def __init__(self):
        super().__init__("GEMINI_API_KEY absente côté serveur")


class UpstreamUnavailableError(ReadingError):
    """The generation service timed out or answered with an error. Retryable by the caller."""


class MalformedUpstreamResponseError(ReadingError):
    """The structured payload could not be parsed. Always recovered locally."""

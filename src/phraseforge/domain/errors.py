"""Exception hierarchy shared by every layer."""


class PhraseForgeError(Exception):
    """Base class for all PhraseForge errors."""


class ValidationError(PhraseForgeError, ValueError):
    """Caller supplied invalid input. Raised before anything is mutated."""


class PhraseNotFoundError(PhraseForgeError, LookupError):
    def __init__(self, phrase_id: str):
        super().__init__(f"Phrase not found: {phrase_id}")
        self.phrase_id = phrase_id


class PersistenceError(PhraseForgeError):
    """The backing store failed to read or write."""

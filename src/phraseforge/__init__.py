"""PhraseForge: spaced-repetition scheduling for bilingual phrase cards."""

from .consts import VERSION

__version__ = VERSION

# Infrastructure Adapters Package
from .memory import InMemoryCatalogRepository, InMemoryPhraseRepository, InMemoryStatsStore
from .yaml_store import YamlDocumentStore

__all__ = [
    "InMemoryPhraseRepository",
    "InMemoryStatsStore",
    "InMemoryCatalogRepository",
    "YamlDocumentStore",
]

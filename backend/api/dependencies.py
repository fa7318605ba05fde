"""Shared dependencies for API routes.

Each provider is cached so the whole app shares one embedder (and one
model handle) and one set of stores. Tests swap them out through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from config import settings
from services.embedding_provider import EmbeddingProvider, SentenceTransformerEmbedder
from services.match_generator import MatchGenerator
from services.match_store import InMemoryMatchStore, MatchStore
from services.profile_store import InMemoryProfileStore, ProfileStore


@lru_cache
def get_embedder() -> EmbeddingProvider:
    return SentenceTransformerEmbedder(settings.embedding_model)


@lru_cache
def get_profile_store() -> ProfileStore:
    if settings.profiles_path:
        return InMemoryProfileStore.from_json(settings.profiles_path)
    return InMemoryProfileStore()


@lru_cache
def get_match_store() -> MatchStore:
    return InMemoryMatchStore()


def get_match_generator(
    profiles: ProfileStore = Depends(get_profile_store),
    matches: MatchStore = Depends(get_match_store),
    embedder: EmbeddingProvider = Depends(get_embedder),
) -> MatchGenerator:
    return MatchGenerator(profiles, matches, embedder)

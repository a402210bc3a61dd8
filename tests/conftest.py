"""Shared fixtures: in-memory store, fake avatar probes, repository, preferences."""

import pytest
from fakes import FakeCapabilities

from contactavatar.application import AvatarResolver, ContactRepository
from contactavatar.infrastructure import InMemoryContactStore, InMemoryPreferenceStore


@pytest.fixture
def capabilities() -> FakeCapabilities:
    return FakeCapabilities()


@pytest.fixture
def store() -> InMemoryContactStore:
    return InMemoryContactStore()


@pytest.fixture
def repository(store, capabilities) -> ContactRepository:
    return ContactRepository(store, AvatarResolver(capabilities))


@pytest.fixture
def preferences() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()

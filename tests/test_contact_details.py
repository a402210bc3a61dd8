"""ContactDetails: load one contact and delete it."""

import pytest
from fakes import FailingStore, FakeCapabilities

from contactavatar.application import (
    AvatarResolver,
    ContactDetails,
    ContactRepository,
    DeleteFailed,
    DeleteSucceeded,
)
from contactavatar.domain import Contact


@pytest.mark.asyncio
async def test_load_and_delete(repository):
    contact_id = await repository.insert(Contact(name="Alice", phone="+12025551234"))
    details = ContactDetails(repository)

    loaded = await details.load(contact_id)
    assert loaded.name == "Alice"
    assert details.contact == loaded

    result = await details.delete()
    assert result == DeleteSucceeded(contact_id=contact_id)
    assert details.contact is None
    assert details.is_deleting is False
    assert await repository.get_by_id(contact_id) is None


@pytest.mark.asyncio
async def test_load_missing_contact(repository):
    details = ContactDetails(repository)
    assert await details.load(404) is None
    assert details.contact is None


@pytest.mark.asyncio
async def test_delete_without_loaded_contact(repository):
    result = await ContactDetails(repository).delete()
    assert isinstance(result, DeleteFailed)


@pytest.mark.asyncio
async def test_store_failures_are_reported_not_raised():
    store = FailingStore()
    store.fail_writes = False
    contact_id = await store.insert(Contact(name="Alice", phone="+12025551234"))
    store.fail_writes = True
    details = ContactDetails(ContactRepository(store, AvatarResolver(FakeCapabilities())))

    await details.load(contact_id)
    result = await details.delete()
    assert isinstance(result, DeleteFailed)
    assert "disk full" not in result.message
    assert details.contact is not None
    assert details.is_deleting is False

    store.fail_reads = True
    assert await details.load(contact_id) is None

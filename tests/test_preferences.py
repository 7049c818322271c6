"""
Tests: in-memory preferences store
"""
from datetime import datetime, timezone

import pytest

from sportshub.errors import ValidationError
from sportshub.preferences import PreferencesStore

SAVED_AT = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


def test_set_then_get():
    """Test that a saved record is returned"""
    store = PreferencesStore()
    store.set("c1", sports=["soccer"], teams=["Arsenal"], notifications_enabled=True, now=SAVED_AT)
    record = store.get("c1")
    assert record.sports == ["soccer"]
    assert record.teams == ["Arsenal"]
    assert record.notifications_enabled is True
    assert record.to_dict()["updatedAt"] == "2026-10-19T09:30:00Z"


def test_set_overwrites_whole_record():
    """Test that omitted fields reset rather than merge"""
    store = PreferencesStore()
    store.set("c1", sports=["soccer"], teams=["Arsenal"], notifications_enabled=True)
    store.set("c1", sports=["hockey"])
    record = store.get("c1")
    assert record.sports == ["hockey"]
    assert record.teams == []
    assert record.notifications_enabled is False
    assert len(store) == 1


def test_get_unknown_client_returns_default():
    """Test the default record"""
    record = PreferencesStore().get("ghost")
    assert record.client_id == "ghost"
    assert record.sports == []
    assert record.notifications_enabled is False
    assert record.updated_at is None


@pytest.mark.parametrize("client_id", [None, ""])
def test_set_requires_client_id(client_id):
    """Test that a missing client id is rejected"""
    with pytest.raises(ValidationError):
        PreferencesStore().set(client_id, sports=["soccer"])

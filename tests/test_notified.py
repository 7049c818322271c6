"""
Tests: client-local JSON store and the notified-match set
"""
import json
from datetime import datetime, timedelta, timezone

from sportshub.client import LocalStore, NotifiedSet
from sportshub.client.storage import NOTIFIED_MATCHES_KEY

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_store_persists_across_reload(tmp_path):
    """Test that a write is visible to a fresh store on the same file"""
    path = tmp_path / "state.json"
    LocalStore(path).set("client_id", "client-abc12345")
    assert LocalStore(path).get("client_id") == "client-abc12345"


def test_store_delete(tmp_path):
    """Test that delete removes the key from disk"""
    path = tmp_path / "state.json"
    store = LocalStore(path)
    store.set("a", 1)
    store.delete("a")
    assert json.loads(path.read_text()) == {}


def test_store_ignores_corrupt_file(tmp_path):
    """Test that unreadable state starts empty"""
    path = tmp_path / "state.json"
    path.write_text("{not json")
    assert LocalStore(path).get("client_id") is None


def test_notified_set_persists_ids(tmp_path):
    """Test that announced ids survive a restart"""
    path = tmp_path / "state.json"
    notified = NotifiedSet(LocalStore(path))
    notified.add("m1", "2026-10-19T13:30:00Z")
    reloaded = NotifiedSet(LocalStore(path))
    assert "m1" in reloaded
    assert reloaded.ids() == {"m1"}


def test_notified_set_reads_legacy_list(tmp_path):
    """Test that a bare list of ids is still understood"""
    path = tmp_path / "state.json"
    path.write_text(json.dumps({NOTIFIED_MATCHES_KEY: ["m1", "m2"]}))
    notified = NotifiedSet(LocalStore(path))
    assert len(notified) == 2
    assert "m2" in notified


def test_prune_evicts_only_old_matches(tmp_path):
    """Test retention eviction by kickoff time"""
    store = LocalStore(tmp_path / "state.json")
    notified = NotifiedSet(store, retention_days=7)
    notified.add("old", "2026-10-01T12:00:00Z")
    notified.add("recent", "2026-10-18T12:00:00Z")
    notified.add("unknown")
    notified.add("garbage", "??")

    assert notified.prune(NOW) == 1
    assert notified.ids() == {"recent", "unknown", "garbage"}
    assert "old" not in store.get(NOTIFIED_MATCHES_KEY)


def test_prune_keeps_boundary(tmp_path):
    """Test that a match started exactly at the cutoff is kept"""
    notified = NotifiedSet(LocalStore(tmp_path / "state.json"), retention_days=7)
    notified.add("edge", "2026-10-12T12:00:00Z")
    assert notified.prune(NOW) == 0
    assert notified.prune(NOW + timedelta(seconds=1)) == 1

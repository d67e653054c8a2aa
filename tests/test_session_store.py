from datetime import datetime, timedelta

from near_resume.schemas.resume import Resume
from near_resume.services.session_store import SessionStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def test_create_and_get():
    """
    Test a created session can be read back.
    """
    store = SessionStore(clock=FakeClock())
    session = store.create(original_filename="cv.pdf", original_text="text", resume=Resume())

    loaded = store.get(session.id)
    assert loaded is not None
    assert loaded.original_filename == "cv.pdf"
    assert loaded.expires_at - loaded.created_at == timedelta(hours=24)


def test_sessions_expire():
    """
    Test sessions vanish after the TTL and cleanup reports how many were removed.
    """
    clock = FakeClock()
    store = SessionStore(ttl_hours=24, clock=clock)
    first = store.create()
    store.create()

    clock.advance(hours=23)
    assert store.get(first.id) is not None

    clock.advance(hours=2)
    assert store.cleanup_expired() == 2
    assert store.get(first.id) is None
    assert len(store) == 0


def test_get_returns_a_copy():
    """
    Test mutating a loaded session does not change the stored one.
    """
    store = SessionStore(clock=FakeClock())
    session = store.create(resume=Resume(summary="Original."))

    loaded = store.get(session.id)
    loaded.resume.summary = "Changed."
    assert store.get(session.id).resume.summary == "Original."


def test_update_resume_and_messages():
    """
    Test chat messages and résumé updates are stored in order.
    """
    store = SessionStore(clock=FakeClock())
    session = store.create(resume=Resume(summary="Old."))

    store.add_message(session.id, "user", "Shorten the summary")
    store.update_resume(session.id, Resume(summary="New."))
    store.add_message(session.id, "assistant", "Updated your résumé.", [{"type": "summary", "description": "Shortened"}])

    messages = store.messages(session.id)
    assert [m.role for m in messages] == ["user", "assistant"]
    assert messages[1].changes == [{"type": "summary", "description": "Shortened"}]
    assert store.get(session.id).resume.summary == "New."


def test_unknown_and_deleted_sessions():
    """
    Test operations on missing sessions return empty results.
    """
    store = SessionStore(clock=FakeClock())
    session = store.create()

    assert store.delete(session.id) is True
    assert store.delete(session.id) is False
    assert store.get(session.id) is None
    assert store.add_message(session.id, "user", "hi") is None
    assert store.update_resume(session.id, Resume()) is None
    assert store.messages("missing") == []

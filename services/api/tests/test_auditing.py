from datetime import datetime, timezone

from message_api.schemas import Audit
from message_api.stores.auditing import Auditor, acting_as, current_actor

T1 = datetime(2026, 3, 1, tzinfo=timezone.utc)
T2 = datetime(2026, 3, 2, tzinfo=timezone.utc)


def test_first_write_sets_all_fields():
    audit = Auditor(clock=lambda: T1, actor=lambda: "alice").stamp(None)

    assert audit == Audit(created_on=T1, updated_on=T1, created_by="alice", modified_by="alice")


def test_later_write_keeps_creation_fields():
    existing = Audit(created_on=T1, updated_on=T1, created_by="alice", modified_by="alice")

    audit = Auditor(clock=lambda: T2, actor=lambda: "bob").stamp(existing)

    assert audit.created_on == T1
    assert audit.created_by == "alice"
    assert audit.updated_on == T2
    assert audit.modified_by == "bob"


def test_existing_row_without_creation_time_is_treated_as_new():
    audit = Auditor(clock=lambda: T2, actor=lambda: None).stamp(Audit())

    assert audit.created_on == T2


def test_acting_as_scopes_current_actor():
    assert current_actor() is None
    with acting_as("carol"):
        assert current_actor() == "carol"
        assert Auditor(clock=lambda: T1).stamp(None).created_by == "carol"
    assert current_actor() is None

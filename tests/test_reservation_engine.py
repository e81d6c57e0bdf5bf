"""Tests for hostname reservation and lifecycle transitions."""

import pytest

from helpers import InMemoryHostnameStore, InMemoryTemplateStore, make_simple_template
from hns.application.services import MAX_RESERVE_ATTEMPTS, ReservationEngine
from hns.domain.entities import HostnameStatus
from hns.domain.errors import (
    AllocationExhaustedError,
    DuplicateHostnameError,
    HostnameNotFoundError,
    NameLengthExceededError,
    StateConflictError,
    TemplateNotFoundError,
    ValidationFailure,
)


@pytest.fixture()
def engine(template_store, hostname_store):
    return ReservationEngine(template_store, hostname_store)


def _simple_engine(**template_kwargs):
    template = make_simple_template(**template_kwargs)
    store = InMemoryHostnameStore()
    return ReservationEngine(InMemoryTemplateStore(template), store), store


def test_reserve_creates_reserved_hostname(engine):
    hostname = engine.reserve(1, {"site": "nyc", "role": "web"}, "alice")

    assert hostname.name == "nycweb001"
    assert hostname.status is HostnameStatus.RESERVED
    assert hostname.reserved_by == "alice"
    assert hostname.sequence_num == 1
    assert hostname.reserved_at is not None


def test_consecutive_reservations_advance_the_sequence(engine):
    first = engine.reserve(1, {"site": "nyc"}, "alice")
    second = engine.reserve(1, {"site": "nyc"}, "bob")

    assert (first.name, second.name) == ("nyc001", "nyc002")


def test_reserve_requires_requester(engine):
    with pytest.raises(ValidationFailure):
        engine.reserve(1, {}, "  ")


def test_reserve_unknown_template(engine):
    with pytest.raises(TemplateNotFoundError):
        engine.reserve(42, {}, "alice")


def test_reserve_propagates_length_errors():
    engine, store = _simple_engine(max_length=6)
    store.add("srv999", sequence_num=999)

    with pytest.raises(NameLengthExceededError):
        engine.reserve(1, {}, "alice")


def test_reserve_retries_once_with_increment_on_collision():
    engine, store = _simple_engine(sequence_increment=5)
    # Highest stored number is 3, so the first candidate is srv004.
    store.add("srv003", sequence_num=3)
    store.add("srv004", sequence_num=0)

    hostname = engine.reserve(1, {}, "alice")

    assert hostname.name == "srv009"
    assert hostname.sequence_num == 9


def test_reserve_gives_up_after_two_collisions_without_third_attempt():
    engine, store = _simple_engine()
    store.add("srv003", sequence_num=3)
    store.add("srv004", sequence_num=0)
    store.add("srv005", sequence_num=0)
    store.create_calls.clear()
    rendered = []
    original_get_by_name = store.get_by_name

    def tracking_get_by_name(name):
        rendered.append(name)
        return original_get_by_name(name)

    store.get_by_name = tracking_get_by_name

    with pytest.raises(AllocationExhaustedError) as exc_info:
        engine.reserve(1, {}, "alice")

    assert rendered == ["srv004", "srv005"]
    assert len(rendered) == MAX_RESERVE_ATTEMPTS
    assert store.create_calls == []
    assert exc_info.value.attempts == 2
    assert exc_info.value.last_name == "srv005"


def test_concurrent_insert_counts_as_collision():
    engine, store = _simple_engine()
    original_create = store.create
    raced = []

    def racing_create(hostname):
        if not raced:
            raced.append(hostname.name)
            raise DuplicateHostnameError(hostname.name)
        return original_create(hostname)

    store.create = racing_create

    hostname = engine.reserve(1, {}, "alice")

    assert raced == ["srv001"]
    assert hostname.name == "srv002"


def test_commit_then_release(engine):
    reserved = engine.reserve(1, {"site": "lon"}, "alice")

    committed = engine.commit(reserved.id, "bob")
    assert committed.status is HostnameStatus.COMMITTED
    assert committed.committed_by == "bob"
    assert committed.committed_at is not None

    released = engine.release(reserved.id, "carol")
    assert released.status is HostnameStatus.RELEASED
    assert released.released_by == "carol"
    assert released.released_at is not None


def test_release_requires_committed_status(engine):
    reserved = engine.reserve(1, {"site": "lon"}, "alice")

    with pytest.raises(StateConflictError) as exc_info:
        engine.release(reserved.id, "bob")

    assert exc_info.value.current_status is HostnameStatus.RESERVED
    assert engine.get(reserved.id).status is HostnameStatus.RESERVED


def test_commit_on_committed_hostname_conflicts(engine):
    reserved = engine.reserve(1, {"site": "lon"}, "alice")
    engine.commit(reserved.id, "alice")

    with pytest.raises(StateConflictError) as exc_info:
        engine.commit(reserved.id, "bob")

    assert exc_info.value.current_status is HostnameStatus.COMMITTED
    assert engine.get(reserved.id).committed_by == "alice"


def test_released_hostname_is_terminal(engine):
    reserved = engine.reserve(1, {"site": "lon"}, "alice")
    engine.commit(reserved.id, "alice")
    engine.release(reserved.id, "alice")

    with pytest.raises(StateConflictError):
        engine.commit(reserved.id, "alice")
    with pytest.raises(StateConflictError):
        engine.release(reserved.id, "alice")


def test_transition_lost_to_concurrent_writer_reports_conflict(engine, hostname_store):
    reserved = engine.reserve(1, {"site": "lon"}, "alice")
    original_update = hostname_store.update_status

    def racing_update(hostname_id, **kwargs):
        original_update(hostname_id, **kwargs)
        return False

    hostname_store.update_status = racing_update

    with pytest.raises(StateConflictError) as exc_info:
        engine.commit(reserved.id, "bob")

    assert exc_info.value.current_status is HostnameStatus.COMMITTED


def test_commit_unknown_hostname(engine):
    with pytest.raises(HostnameNotFoundError):
        engine.commit(404, "alice")


def test_generate_does_not_persist(engine, hostname_store):
    assert engine.generate(1, 0, {"site": "nyc", "role": "db"}) == "nycdb001"
    assert hostname_store.hostnames == {}


def test_search_filters_and_rejects_unknown_fields(engine):
    engine.reserve(1, {"site": "nyc"}, "alice")
    second = engine.reserve(1, {"site": "lon"}, "bob")
    engine.commit(second.id, "bob")

    items, total = engine.search({"status": "committed", "reserved_by": None})
    assert total == 1
    assert items[0].name == "lon002"

    items, total = engine.search(name_contains="nyc")
    assert [item.name for item in items] == ["nyc001"]

    with pytest.raises(ValidationFailure):
        engine.search({"name": "nyc001"})
    with pytest.raises(ValidationFailure):
        engine.search({"status": "archived"})


def test_count_by_user_groups_by_status(engine):
    first = engine.reserve(1, {"site": "nyc"}, "alice")
    engine.reserve(1, {"site": "nyc"}, "alice")
    engine.commit(first.id, "alice")

    counts = engine.count_by_user("alice")

    assert counts == {
        HostnameStatus.RESERVED: 1,
        HostnameStatus.COMMITTED: 1,
        HostnameStatus.RELEASED: 0,
    }


def test_record_dns_verification(engine):
    reserved = engine.reserve(1, {"site": "nyc"}, "alice")

    assert engine.record_dns_verification(reserved.id, True).dns_verified is True
    with pytest.raises(HostnameNotFoundError):
        engine.record_dns_verification(999, True)

"""Tests for sequence number allocation."""

import pytest

from helpers import InMemoryHostnameStore, InMemoryTemplateStore, make_simple_template
from hns.application.services import SequenceAllocator
from hns.domain.entities import HostnameStatus
from hns.domain.errors import TemplateNotFoundError


@pytest.fixture()
def allocator(template_store, hostname_store):
    return SequenceAllocator(template_store, hostname_store)


def test_next_sequence_starts_at_sequence_start_for_empty_template():
    template = make_simple_template(sequence_start=500)
    allocator = SequenceAllocator(InMemoryTemplateStore(template), InMemoryHostnameStore())

    assert allocator.next_sequence(template.id) == 500


def test_next_sequence_is_highest_stored_plus_one(allocator, hostname_store):
    hostname_store.add("nyc001", sequence_num=1)
    hostname_store.add("nyc009", sequence_num=9)
    hostname_store.add("nyc004", sequence_num=4)

    assert allocator.next_sequence(1) == 10


def test_next_sequence_ignores_other_templates(allocator, hostname_store):
    hostname_store.add("lon050", template_id=2, sequence_num=50)

    assert allocator.next_sequence(1) == 1


def test_next_sequence_for_unknown_template_raises(allocator):
    with pytest.raises(TemplateNotFoundError):
        allocator.next_sequence(99)


def test_usage_for_template_without_hostnames(allocator):
    usage = allocator.usage(1)

    assert usage.total_sequences == 0
    assert usage.used_sequences == 0
    assert usage.next_sequence == 1
    assert usage.highest_sequence == 0
    assert usage.lowest_sequence == 0


def test_usage_counts_only_active_hostnames_as_used(allocator, hostname_store):
    hostname_store.add("a003", sequence_num=3)
    hostname_store.add("a005", sequence_num=5, status=HostnameStatus.COMMITTED)
    hostname_store.add("a008", sequence_num=8, status=HostnameStatus.RELEASED)

    usage = allocator.usage(1)

    assert usage.total_sequences == 3
    assert usage.used_sequences == 2
    assert usage.next_sequence == 9
    assert usage.highest_sequence == 8
    assert usage.lowest_sequence == 3


def test_find_gaps_lists_missing_numbers_in_order(allocator, hostname_store):
    for number in (2, 3, 6, 9):
        hostname_store.add(f"a{number:03d}", sequence_num=number)

    assert allocator.find_gaps(1) == [4, 5, 7, 8]
    assert allocator.find_gaps(1, max_gaps=3) == [4, 5, 7]


def test_find_gaps_is_empty_without_hostnames(allocator):
    assert allocator.find_gaps(1) == []

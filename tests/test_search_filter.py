"""Tests for search and status filtering."""

import pytest

from nodues.services.record_reconciler import reconcile
from nodues.services.search_filter import SearchFilterIndex, filter_records

from tests.conftest import enriched_item


@pytest.fixture
def records():
    return reconcile([
        enriched_item('1', name='Asha Verma', roll='23ICS001', status='Pending'),
        enriched_item('2', name='Rohan Das', roll='23ICS002', status='Approved'),
        enriched_item('3', name='Meera Iyer', roll='22ME014', status='in-progress'),
        enriched_item('4', name='Kabir Singh', roll='23ICS004', status='On Hold'),
        enriched_item('5', name='Nisha Rao', roll='21EC007', status='Denied'),
    ], []).records


def _ids(records):
    return [r.application_id for r in records]


def test_query_and_status_combined(records):
    assert _ids(SearchFilterIndex(records).filter('23ICS', 'pending')) == ['1']


def test_query_is_case_insensitive_and_trimmed(records):
    assert _ids(filter_records(records, '  meera  ')) == ['3']
    assert _ids(filter_records(records, '23ics')) == ['1', '2', '4']


def test_empty_query_and_all_status(records):
    assert _ids(filter_records(records)) == ['1', '2', '3', '4', '5']
    assert _ids(filter_records(records, '', 'All')) == ['1', '2', '3', '4', '5']


def test_status_filter_uses_classification(records):
    assert _ids(filter_records(records, status_filter='Pending')) == ['1', '3']
    assert _ids(filter_records(records, status_filter='rejected')) == ['5']
    assert _ids(filter_records(records, status_filter='cleared')) == ['2']


def test_unknown_status_filter_matches_same_label(records):
    assert _ids(filter_records(records, status_filter='on-hold')) == ['4']


def test_matches_course(records):
    assert len(filter_records(records, 'b.tech')) == 5


def test_no_match(records):
    assert filter_records(records, 'zzz') == []

"""Tests for status classification and aggregation."""

import pytest

from nodues.models import Stage
from nodues.services.status_classifier import (
    aggregate_status,
    classify_status,
    display_status,
    is_actionable,
    normalize_status_label,
    status_counts,
)
from nodues.services.record_reconciler import reconcile

from tests.conftest import enriched_item


@pytest.mark.parametrize('label, expected', [
    ('Cleared', 'Approved'),
    ('APPROVED', 'Approved'),
    ('In Progress', 'Pending'),
    ('in-progress', 'Pending'),
    ('in_progress', 'Pending'),
    (' pending ', 'Pending'),
    ('Rejected', 'Rejected'),
    ('denied', 'Rejected'),
    ('On Hold', 'Unknown'),
    ('', 'Unknown'),
    (None, 'Unknown'),
])
def test_classify_status(label, expected):
    assert classify_status(label) == expected


@pytest.mark.parametrize('label', ['Cleared', 'in-progress', 'Denied', 'Approved', 'weird status'])
def test_classification_is_idempotent(label):
    category = classify_status(label)
    assert classify_status(category) == category


def test_normalize_strips_separators_and_case():
    assert normalize_status_label('In - Progress_ ') == 'inprogress'


def test_unknown_status_is_displayed_verbatim():
    assert display_status('Awaiting Documents') == 'Awaiting Documents'
    assert display_status('cleared') == 'Approved'


def test_only_pending_labels_are_actionable():
    assert is_actionable('In Progress')
    assert not is_actionable('Approved')
    assert not is_actionable('Awaiting Documents')


def test_aggregate_rejected_if_any_stage_rejected():
    stages = [Stage('S-1', status='Approved'), Stage('S-2', status='Rejected'), Stage('S-3')]
    assert aggregate_status(stages) == 'Rejected'


def test_aggregate_approved_only_when_all_approved():
    assert aggregate_status([{'status': 'Cleared'}, {'status': 'approved'}]) == 'Approved'
    assert aggregate_status([{'status': 'Approved'}, {'status': 'Pending'}]) == 'Pending'


def test_aggregate_without_stages_is_pending():
    assert aggregate_status([]) == 'Pending'


def test_status_counts():
    records = reconcile([
        enriched_item('1', status='Pending'),
        enriched_item('2', status='in progress'),
        enriched_item('3', status='Cleared'),
        enriched_item('4', status='Denied'),
        enriched_item('5', status='On Hold'),
    ], []).records

    assert status_counts(records) == {
        'total': 5, 'pending': 2, 'approved': 1, 'rejected': 1, 'unknown': 1,
    }

from __future__ import annotations

from datetime import datetime, timezone

import pytest
import robespierre


def test_ids_of_different_kinds_are_distinct():
    value = '01HZ8Q5GQYB4V6ZCT7Y9DEXN2M'

    assert robespierre.UserID(value) == robespierre.UserID(value)
    assert robespierre.UserID(value) != robespierre.ChannelID(value)
    assert robespierre.ServerID(value) != value
    assert len({robespierre.UserID(value), robespierre.ChannelID(value)}) == 2


def test_ids_are_ordered_within_kind():
    a = robespierre.MessageID('01HZ8Q5GQYB4V6ZCT7Y9DEXN2M')
    b = robespierre.MessageID('01HZ8Q6R1WT3K0ZB2H4MNV7PQS')

    assert a < b
    assert sorted([b, a]) == [a, b]

    with pytest.raises(TypeError):
        a < robespierre.UserID('01HZ8Q6R1WT3K0ZB2H4MNV7PQS')  # noqa: B015


def test_id_requires_str():
    with pytest.raises(TypeError):
        robespierre.UserID(1)  # type: ignore


def test_ulid_new():
    a = robespierre.ulid_new()
    b = robespierre.ulid_new()

    assert len(a) == 26
    assert a != b
    assert set(a) <= set('0123456789ABCDEFGHJKMNPQRSTVWXYZ')


def test_created_at():
    nonce = robespierre.ulid_new(1700000000.0)

    assert robespierre.MessageID(nonce).created_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_member_id():
    a = robespierre.MemberID(server=robespierre.ServerID('A'), user=robespierre.UserID('B'))
    b = robespierre.MemberID(server=robespierre.ServerID('A'), user=robespierre.UserID('B'))

    assert a == b
    assert hash(a) == hash(b)
    assert robespierre.resolve_id(a) is a

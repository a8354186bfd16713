from __future__ import annotations

import pytest
import robespierre

from conftest import ME, user_payload


def test_patch_does_not_modify_snapshot(client: robespierre.Client):
    parser = client.state.parser
    user = parser.parse_user(user_payload(status={'text': 'À la lanterne'}))
    partial = parser.parse_partial_user(ME, {'username': 'robespierre', 'online': True})

    updated = robespierre.apply_patch(user, partial)

    assert updated is not user
    assert updated.name == 'robespierre'
    assert updated.online is True
    assert updated.status is not None and updated.status.text == 'À la lanterne'
    assert user.name == 'maximilien'
    assert user.online is False


def test_clear_wins_over_set(client: robespierre.Client):
    parser = client.state.parser
    user = parser.parse_user(user_payload(status={'text': 'old'}))
    partial = parser.parse_partial_user(ME, {'status': {'text': 'new'}})

    updated = robespierre.apply_patch(user, partial, (robespierre.UserField.status_text,))

    assert updated.status is not None
    assert updated.status.text is None
    assert user.status is not None and user.status.text == 'old'


def test_orphan_patch(client: robespierre.Client):
    partial = client.state.parser.parse_partial_user(ME, {'username': 'robespierre'})

    with pytest.raises(robespierre.OrphanPatchError) as exc_info:
        robespierre.apply_patch(None, partial)
    assert exc_info.value.id == ME

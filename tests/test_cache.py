from __future__ import annotations

import robespierre
from robespierre.cache import _USER_REQUEST

from conftest import ME, OTHER, SERVER, server_payload, user_payload


def test_map_cache_evicts_oldest():
    state = robespierre.State()
    cache = robespierre.MapCache(users_max_size=1)
    state.setup(cache=cache)

    cache.store_user(state.parser.parse_user(user_payload(ME)), _USER_REQUEST)
    cache.store_user(state.parser.parse_user(user_payload(OTHER)), _USER_REQUEST)

    assert list(cache.get_users_mapping()) == [OTHER]


def test_map_cache_disabled_partition():
    state = robespierre.State()
    cache = robespierre.MapCache(server_members_max_size=0)

    member = state.parser.parse_member({'_id': {'server': SERVER, 'user': ME}})
    cache.store_member(member, _USER_REQUEST)

    assert cache.get_member(member.id, _USER_REQUEST) is None


def test_empty_cache():
    state = robespierre.State()
    cache = state.cache

    assert isinstance(cache, robespierre.EmptyCache)
    user = state.parser.parse_user(user_payload())
    assert cache.commit_user(user, _USER_REQUEST) is user
    assert cache.get_user(ME, _USER_REQUEST) is None
    assert cache.get_users_mapping() == {}


def test_commit_is_idempotent_at_capacity():
    state = robespierre.State()
    cache = robespierre.MapCache(users_max_size=2)
    me = state.parser.parse_user(user_payload(ME))
    other = state.parser.parse_user(user_payload(OTHER))

    cache.commit_user(me, _USER_REQUEST)
    cache.commit_user(other, _USER_REQUEST)
    before = dict(cache.get_users_mapping())

    assert cache.commit_user(other, _USER_REQUEST) is other
    assert cache.commit_user(me, _USER_REQUEST) is me
    assert dict(cache.get_users_mapping()) == before
    assert list(cache.get_users_mapping()) == [ME, OTHER]


def test_evicted_server_takes_roles_and_members():
    state = robespierre.State()
    cache = robespierre.MapCache(servers_max_size=1)
    role_id = robespierre.RoleID('01HZ8QDG1H5J6K7M8N9P0QRSTV')
    newer_id = robespierre.ServerID('01HZ8QEH2J6K7M8N9P0QRSTVWX')

    server = state.parser.parse_server(
        server_payload(roles={role_id: {'name': 'Jacobins', 'permissions': {'a': 0, 'd': 0}}})
    )
    cache.store_server(server, _USER_REQUEST)
    cache.store_member(state.parser.parse_member({'_id': {'server': SERVER, 'user': ME}}), _USER_REQUEST)
    assert cache.get_role(SERVER, role_id, _USER_REQUEST) is not None

    cache.store_server(state.parser.parse_server(server_payload(_id=newer_id)), _USER_REQUEST)

    assert list(cache.get_servers_mapping()) == [newer_id]
    assert cache.get_role(SERVER, role_id, _USER_REQUEST) is None
    assert cache.get_roles_mapping_of(SERVER, _USER_REQUEST) is None
    assert cache.get_members_mapping_of(SERVER, _USER_REQUEST) is None

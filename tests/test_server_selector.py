import random
from collections import Counter

import pytest

from core.domain.models import ServerEntry
from core.errors import ConfigurationError
from core.services.server_selector import select_server


def test_returns_member_of_list():
    servers = [ServerEntry(address="a"), ServerEntry(address="b", api_key="k")]

    for _ in range(50):
        assert select_server(servers) in servers


def test_invalid_entries_are_never_chosen():
    valid = ServerEntry(address="edit.example.com")
    servers = [ServerEntry(address=""), valid, ServerEntry(address="   ", api_key="k")]
    rng = random.Random(7)

    assert {select_server(servers, rng=rng) for _ in range(100)} == {valid}


def test_empty_list_is_configuration_error():
    with pytest.raises(ConfigurationError, match="No servers configured"):
        select_server([])


def test_only_invalid_entries_is_configuration_error():
    with pytest.raises(ConfigurationError, match="No valid servers found"):
        select_server([ServerEntry(address="")])


def test_distribution_is_uniform():
    servers = [ServerEntry(address=name) for name in ("a", "b", "c")]
    rng = random.Random(1234)

    counts = Counter(select_server(servers, rng=rng).address for _ in range(6000))

    assert set(counts) == {"a", "b", "c"}
    for count in counts.values():
        assert abs(count - 2000) < 200

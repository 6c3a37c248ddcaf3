from dataclasses import dataclass

import pytest

from unixkit.hashmap import HashMap


@dataclass
class Device:
    address: int
    bytes: int


def device_map(capacity=16, hash_key=lambda k: k):
    return HashMap(capacity, key=lambda d: d.address, hash_key=hash_key)


def test_insert_new_node_reports_success():
    table = device_map()
    node = Device(10, 100)
    stored, inserted = table.insert(node)
    assert inserted is True
    assert stored is node
    assert len(table) == 1
    assert 10 in table


def test_insert_duplicate_returns_existing():
    table = device_map()
    first = Device(10, 100)
    table.insert(first)
    stored, inserted = table.insert(Device(10, 5))
    assert inserted is False
    assert stored is first
    assert len(table) == 1


def test_accumulate_through_existing_node():
    table = device_map()
    for address, size in [(1, 10), (2, 20), (1, 30)]:
        stored, inserted = table.insert(Device(address, size))
        if not inserted:
            stored.bytes += size
    assert table.get(1).bytes == 40
    assert table.get(2).bytes == 20


def test_get_missing_returns_none():
    table = device_map()
    table.insert(Device(3, 1))
    assert table.get(4) is None
    assert 4 not in table


def test_full_table_rejects_insert():
    table = device_map(capacity=2)
    table.insert(Device(0, 1))
    table.insert(Device(1, 1))
    assert table.insert(Device(2, 1)) == (None, False)
    assert len(table) == 2


def test_remove_returns_node_and_shrinks():
    table = device_map()
    node = Device(7, 70)
    table.insert(node)
    assert table.remove(7) is node
    assert len(table) == 0
    assert 7 not in table


def test_remove_missing_raises_key_error():
    table = device_map()
    with pytest.raises(KeyError):
        table.remove(99)


def test_remove_with_all_keys_colliding():
    table = device_map(capacity=8, hash_key=lambda k: 0)
    for address in range(5):
        table.insert(Device(address, address))
    table.remove(1)
    assert sorted(d.address for d in table) == [0, 2, 3, 4]
    for address in (0, 2, 3, 4):
        assert table.get(address).address == address


def test_iteration_follows_slot_order():
    table = device_map(capacity=8)
    for address in (5, 1, 3):
        table.insert(Device(address, 0))
    assert [d.address for d in table] == [1, 3, 5]


def test_resize_keeps_all_nodes():
    table = device_map(capacity=4)
    for address in range(4):
        table.insert(Device(address, address * 2))
    table.resize(16)
    assert table.capacity == 16
    assert len(table) == 4
    for address in range(4):
        assert table.get(address).bytes == address * 2


def test_resize_below_size_raises():
    table = device_map(capacity=4)
    for address in range(3):
        table.insert(Device(address, 0))
    with pytest.raises(ValueError):
        table.resize(2)


def test_zero_capacity_rejected():
    with pytest.raises(ValueError):
        HashMap(0)


def test_default_key_and_hash_store_plain_values():
    table = HashMap(8)
    table.insert("alpha")
    table.insert("beta")
    assert "alpha" in table
    assert table.remove("beta") == "beta"
    assert list(table) == ["alpha"]
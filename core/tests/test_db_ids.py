from __future__ import annotations

from uigen_core.db.ids import new_anon_id, new_id


def test_new_id_is_url_safe_hex() -> None:
    value = new_id()
    assert len(value) == 32
    assert all(c in "0123456789abcdef" for c in value)
    assert new_id() != value


def test_new_anon_id_is_unique() -> None:
    ids = {new_anon_id() for _ in range(50)}
    assert len(ids) == 50
    assert all("/" not in i for i in ids)

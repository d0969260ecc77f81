# 🧪 tests/shared/test_immutables_freeze.py
from __future__ import annotations

from types import MappingProxyType

import pytest

from catalog_ingest.shared.utils.immutables import freeze_str_mapping, is_frozen_mapping, thaw


def test_freeze_str_mapping_cleans_and_freezes() -> None:
    frozen = freeze_str_mapping({" Material ": " cotton  blend ", "": "x", "Empty": "", "Size": 5})

    assert isinstance(frozen, MappingProxyType)
    assert is_frozen_mapping(frozen)
    assert dict(frozen) == {"Material": "cotton blend", "Size": "5"}
    with pytest.raises(TypeError):
        frozen["new"] = "value"  # type: ignore[index]


def test_thaw_returns_plain_structures() -> None:
    data = {"a": MappingProxyType({"b": (1, 2)})}
    assert thaw(data) == {"a": {"b": [1, 2]}}
    assert freeze_str_mapping(None) == {}

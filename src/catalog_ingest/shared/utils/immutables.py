# 🧊 catalog_ingest/shared/utils/immutables.py
"""
🧊 Утиліти «заморожування» структур для доменних записів.

🔹 `freeze_str_mapping` — очищена незмінна мапа str → str (специфікації, атрибути варіантів).
🔹 `thaw` — зворотне перетворення у звичайні dict/list для серіалізації.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Mapping                      # 🧰 Перевірки типів колекцій
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any, Dict, Optional                   # 🧰 Типізація


# ================================
# ❄️ ЗАМОРОЖУВАННЯ
# ================================
def freeze_str_mapping(data: Optional[Mapping[Any, Any]]) -> MappingProxyType:
    """
    Повертає незмінну мапу з непорожніми рядковими ключами та значеннями.

    Порядок вставки зберігається; пари з порожнім ключем або значенням відкидаються.
    """
    cleaned: Dict[str, str] = {}
    for key, value in (data or {}).items():
        key_text = " ".join(str(key or "").split())      # 🧼 Стискаємо пробіли ключа
        value_text = " ".join(str(value if value is not None else "").split())
        if key_text and value_text:
            cleaned[key_text] = value_text
    return MappingProxyType(cleaned)


def is_frozen_mapping(obj: Any) -> bool:
    """Перевіряє, чи є обʼєкт замороженою мапою."""
    return isinstance(obj, MappingProxyType)


# ================================
# 🔥 РОЗМОРОЖУВАННЯ
# ================================
def thaw(obj: Any) -> Any:
    """Рекурсивно перетворює мапи на dict, а кортежі на list."""
    if isinstance(obj, Mapping):
        return {key: thaw(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [thaw(value) for value in obj]
    return obj

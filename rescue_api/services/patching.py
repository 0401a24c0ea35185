# rescue_api/services/patching.py
"""
Слияние частичных обновлений, общее для всех путей update.

Патч — pydantic-модель, все поля которой опциональны. `present_fields`
оставляет только присланное клиентом, поэтому отсутствующее поле и явный null
различимы. `apply_patch` считает явный null отсутствующим полем: хранимое
значение сохраняется.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from rescue_api.core.exceptions import FieldError
from rescue_api.services.validation import Rule, ensure_valid, validate_value


def present_fields(patch: BaseModel) -> Dict[str, Any]:
    return patch.model_dump(exclude_unset=True)


def pick(changes: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Часть `changes`, ограниченная `fields`, без явных null."""
    return {f: changes[f] for f in fields if f in changes and changes[f] is not None}


def apply_patch(
    target: Any,
    changes: Mapping[str, Any],
    rules: Mapping[str, Sequence[Rule]],
    fields: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Проверить каждое присланное поле, затем скопировать все в `target`.

    Если хоть одно поле не прошло, ничего не копируется. Возвращает имена
    применённых полей.
    """
    selected = pick(changes, fields if fields is not None else rules.keys())
    errors: List[FieldError] = []
    for field, value in selected.items():
        errors.extend(validate_value(rules, field, value))
    ensure_valid(errors)
    for field, value in selected.items():
        setattr(target, field, value)
    return list(selected)

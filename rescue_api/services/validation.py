# rescue_api/services/validation.py
"""
Проверка полей всех сущностей, которых касается агрегат команды.

Все функции чистые: читают атрибуты (или ключи словаря) и возвращают список
FieldError, ничего не бросают и не трогают сессию. Непустой список превращается
в ValidationError через `ensure_valid`.

Правила задаются таблицей на сущность: поле -> набор правил. Правило возвращает
строку-причину, если значение его нарушает, иначе None.
"""
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from rescue_api.core.exceptions import FieldError, ValidationError

Rule = Callable[[Any], Optional[str]]

MAX_SHIFT_HOURS = 99

# === ПРАВИЛА ===

def required(value: Any) -> Optional[str]:
    if value is None:
        return "required"
    if isinstance(value, str) and not value.strip():
        return "required"
    return None

def max_length(limit: int) -> Rule:
    def _check(value: Any) -> Optional[str]:
        if isinstance(value, str) and len(value) > limit:
            return f"exceeds max length {limit}"
        return None
    return _check

def non_negative(value: Any) -> Optional[str]:
    if value < 0:
        return "must not be negative"
    return None

def positive(value: Any) -> Optional[str]:
    if value <= 0:
        return "must be positive"
    return None

def max_digits(limit: int) -> Rule:
    def _check(value: Any) -> Optional[str]:
        if len(str(abs(int(value)))) > limit:
            return f"exceeds max digits {limit}"
        return None
    return _check

def is_integer(value: Any) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, int):
        return "must be an integer"
    return None

# === ТАБЛИЦЫ ПРАВИЛ ===

TEAM_RULES: Dict[str, Sequence[Rule]] = {
    "name": (required, max_length(50)),
    "member_count": (is_integer, non_negative, max_digits(2)),
    "leader": (max_length(50),),
}

SHIFT_RULES: Dict[str, Sequence[Rule]] = {
    "name": (required, max_length(50)),
}

TEAM_TYPE_RULES: Dict[str, Sequence[Rule]] = {
    "name": (required, max_length(50)),
}

COMPANY_RULES: Dict[str, Sequence[Rule]] = {
    "name": (required, max_length(50)),
}

LOCATION_RULES: Dict[str, Sequence[Rule]] = {
    "street": (required, max_length(50)),
    "house_number": (required, is_integer, positive, max_digits(5)),
    "district": (required, max_length(50)),
    "region": (required, max_length(50)),
}

MEMBER_RULES: Dict[str, Sequence[Rule]] = {
    "first_name": (required, max_length(50)),
    "paternal_surname": (required, max_length(50)),
    "maternal_surname": (required, max_length(50)),
    "phone": (required, is_integer, non_negative, max_digits(9)),
}

VEHICLE_RULES: Dict[str, Sequence[Rule]] = {
    "brand": (required, max_length(50)),
    "model": (required, max_length(50)),
    "plate": (required, max_length(6)),
    "driver": (required, max_length(50)),
    "status": (required, max_length(50)),
}

RESOURCE_RULES: Dict[str, Sequence[Rule]] = {
    "name": (required, max_length(100)),
    "resource_type": (required, max_length(50)),
    "quantity": (required, is_integer, non_negative),
}

# === ДВИЖОК ===

def _read(entity: Any, field: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(field)
    return getattr(entity, field, None)

def validate_value(rules: Mapping[str, Sequence[Rule]], field: str, value: Any) -> List[FieldError]:
    """
    Проверить одно значение по правилам поля `field`.

    Провал `required` останавливает цепочку; None у поля без `required`
    проходит, остальные правила не применяются.
    """
    checks = rules.get(field, ())
    for rule in checks:
        if value is None and rule is not required:
            return []
        reason = rule(value)
        if reason is not None:
            return [FieldError(field, reason)]
    return []

def validate_fields(rules: Mapping[str, Sequence[Rule]], entity: Any) -> List[FieldError]:
    errors: List[FieldError] = []
    for field in rules:
        errors.extend(validate_value(rules, field, _read(entity, field)))
    return errors

def shift_duration_hours(start: datetime, end: datetime) -> int:
    """Целые часы между start и end, дробная часть отбрасывается."""
    return int((end - start) // timedelta(hours=1))

def validate_shift_dates(start: Optional[datetime], end: Optional[datetime]) -> List[FieldError]:
    if start is None or end is None:
        return [FieldError("dates", "required")]
    if (start.tzinfo is None) != (end.tzinfo is None):
        return [FieldError("dates", "start and end must both be naive or both timezone-aware")]
    if start >= end:
        return [FieldError("dates", "start must be before end")]
    if shift_duration_hours(start, end) > MAX_SHIFT_HOURS:
        return [FieldError("duration_hours", f"exceeds max {MAX_SHIFT_HOURS} hours")]
    return []

def validate_shift(shift: Any) -> List[FieldError]:
    errors = validate_fields(SHIFT_RULES, shift)
    errors.extend(validate_shift_dates(_read(shift, "start_at"), _read(shift, "end_at")))
    return errors

def validate_location(location: Any) -> List[FieldError]:
    if location is None:
        return [FieldError("location", "required")]
    return [FieldError(f"location.{e.field}", e.reason) for e in validate_fields(LOCATION_RULES, location)]

def validate_company(company: Any) -> List[FieldError]:
    errors = validate_fields(COMPANY_RULES, company)
    errors.extend(validate_location(_read(company, "location")))
    return errors

def validate_team(team: Any) -> List[FieldError]:
    return validate_fields(TEAM_RULES, team)

def validate_team_aggregate(team: Any) -> List[FieldError]:
    """
    Проверка уровня агрегата, выполняется после проверки полей.

    Отклоняет пустые name и leader. Правила полей пропускают пустого leader,
    поэтому оркестратор запускает обе проверки.
    """
    errors: List[FieldError] = []
    if _read(team, "name") is None:
        errors.append(FieldError("name", "must not be null"))
    if _read(team, "leader") is None:
        errors.append(FieldError("leader", "must not be null"))
    return errors

_VALIDATORS: Dict[str, Callable[[Any], List[FieldError]]] = {
    "team": validate_team,
    "shift": validate_shift,
    "company": validate_company,
    "location": lambda loc: validate_fields(LOCATION_RULES, loc),
    "team_type": lambda tt: validate_fields(TEAM_TYPE_RULES, tt),
    "member": lambda m: validate_fields(MEMBER_RULES, m),
    "vehicle": lambda v: validate_fields(VEHICLE_RULES, v),
    "resource": lambda r: validate_fields(RESOURCE_RULES, r),
}

def validate(kind: str, entity: Any) -> List[FieldError]:
    """Проверить `entity` правилами, зарегистрированными для `kind`."""
    key = getattr(kind, "value", kind)
    try:
        validator = _VALIDATORS[key]
    except KeyError:
        raise ValueError(f"No validation rules for entity kind '{key}'") from None
    return validator(entity)

def ensure_valid(errors: Iterable[FieldError]) -> None:
    errors = list(errors)
    if errors:
        raise ValidationError(errors)

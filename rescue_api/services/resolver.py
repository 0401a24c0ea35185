# rescue_api/services/resolver.py
from typing import Any, Iterable, List, Mapping
import logging

from rescue_api.core.exceptions import NotFoundError, ValidationError
from rescue_api.crud.base import EntityKind, ReferenceLookup

logger = logging.getLogger("Rescue.Resolver")


class RelationshipResolver:
    """
    Превращает идентификаторы в сохранённые строки.

    Пакет разрешается целиком или никак: первый отсутствующий id бросает
    NotFoundError, и вызывающий код ничего из пакета не получает.
    """

    def __init__(self, lookups: Mapping[EntityKind, ReferenceLookup]):
        self._lookups = dict(lookups)

    def _lookup(self, kind: EntityKind) -> ReferenceLookup:
        try:
            return self._lookups[kind]
        except KeyError:
            raise ValueError(f"No lookup registered for '{kind.value}'") from None

    def resolve(self, kind: EntityKind, entity_id: int) -> Any:
        return self._lookup(kind).get(entity_id)

    def resolve_many(self, kind: EntityKind, ids: Iterable[int]) -> List[Any]:
        lookup = self._lookup(kind)
        resolved: List[Any] = []
        seen = set()
        for entity_id in ids:
            if entity_id in seen:
                continue
            seen.add(entity_id)
            try:
                resolved.append(lookup.get(entity_id))
            except NotFoundError:
                logger.warning(f"Batch resolution of {kind.value} aborted: id={entity_id} missing")
                raise
        return resolved

    @staticmethod
    def extract_ids(items: Iterable[Any], field: str = "items") -> List[int]:
        """
        Собрать id из присланных элементов коллекции.

        Элемент может быть числом, словарём с ключом "id" или объектом с
        атрибутом `id`; прочие данные элемента игнорируются.
        """
        ids: List[int] = []
        for index, item in enumerate(items):
            if isinstance(item, Mapping):
                entity_id = item.get("id")
            elif isinstance(item, int) and not isinstance(item, bool):
                entity_id = item
            else:
                entity_id = getattr(item, "id", None)
            if entity_id is None:
                raise ValidationError.single(f"{field}[{index}].id", "required")
            ids.append(entity_id)
        return ids

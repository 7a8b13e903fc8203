"""Search criteria, filters and sortings evaluated against catalog entities."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from ..exceptions import InvalidCriteriaError, InvalidFilterError

T = TypeVar("T")

ASCENDING = "ASC"
DESCENDING = "DESC"

AND = "AND"
OR = "OR"

_MISSING = object()


def read_field(entity: object, path: str) -> Any:
    """Resolve a dotted field path such as ``product.parent_id`` on an entity.

    A leading ``product.`` is ignored. Unknown attributes resolve to ``None``.
    """
    if path.startswith("product."):
        path = path[len("product."):]
    value: Any = entity
    for part in path.split("."):
        if isinstance(value, dict):
            value = value.get(part, _MISSING)
        else:
            value = getattr(value, part, _MISSING)
        if value is _MISSING or value is None:
            return None
    return value


class Filter:
    """Base class of all filters."""

    def matches(self, entity: object) -> bool:
        raise NotImplementedError


@dataclass
class EqualsFilter(Filter):
    field: str
    value: Any

    def matches(self, entity: object) -> bool:
        actual = read_field(entity, self.field)
        if isinstance(actual, (list, tuple, set)):
            return self.value in actual
        return actual == self.value


@dataclass
class EqualsAnyFilter(Filter):
    field: str
    values: List[Any]

    def matches(self, entity: object) -> bool:
        actual = read_field(entity, self.field)
        if isinstance(actual, (list, tuple, set)):
            return any(value in actual for value in self.values)
        return actual in self.values


@dataclass
class ContainsFilter(Filter):
    field: str
    value: str

    def matches(self, entity: object) -> bool:
        actual = read_field(entity, self.field)
        if actual is None:
            return False
        return str(self.value).casefold() in str(actual).casefold()


@dataclass
class RangeFilter(Filter):
    field: str
    gte: Optional[Any] = None
    lte: Optional[Any] = None
    gt: Optional[Any] = None
    lt: Optional[Any] = None

    def matches(self, entity: object) -> bool:
        actual = read_field(entity, self.field)
        if actual is None:
            return False
        if self.gte is not None and not actual >= self.gte:
            return False
        if self.lte is not None and not actual <= self.lte:
            return False
        if self.gt is not None and not actual > self.gt:
            return False
        if self.lt is not None and not actual < self.lt:
            return False
        return True


@dataclass
class MultiFilter(Filter):
    operator: str = AND
    queries: List[Filter] = field(default_factory=list)

    def matches(self, entity: object) -> bool:
        if self.operator == OR:
            return any(query.matches(entity) for query in self.queries)
        return all(query.matches(entity) for query in self.queries)


@dataclass
class NotFilter(MultiFilter):
    """Negation of the combined ``queries``."""

    def matches(self, entity: object) -> bool:
        return not super().matches(entity)


@dataclass
class ProductVisibilityFilter(Filter):
    """Products whose visibility in ``sales_channel_id`` is at least ``visibility``."""

    sales_channel_id: str
    visibility: int

    def matches(self, entity: object) -> bool:
        visibilities = read_field(entity, "visibilities") or {}
        return visibilities.get(self.sales_channel_id, 0) >= self.visibility


class ProductAvailableFilter(MultiFilter):
    """Active products visible in the sales channel at the required level."""

    def __init__(self, sales_channel_id: str, visibility: int) -> None:
        super().__init__(
            AND,
            [
                EqualsFilter("product.active", True),
                ProductVisibilityFilter(sales_channel_id, visibility),
            ],
        )
        self.sales_channel_id = sales_channel_id
        self.visibility = visibility


class ProductCloseoutFilter(NotFilter):
    """Excludes closeout products that are out of stock."""

    def __init__(self) -> None:
        super().__init__(
            AND,
            [
                EqualsFilter("product.is_closeout", True),
                EqualsFilter("product.available", False),
            ],
        )


@dataclass
class FieldSorting:
    field: str
    direction: str = ASCENDING

    def __post_init__(self) -> None:
        self.direction = self.direction.upper()
        if self.direction not in (ASCENDING, DESCENDING):
            raise InvalidCriteriaError(f"unsupported sort direction '{self.direction}'")


def _check_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise InvalidCriteriaError(f"limit must not be negative, got {limit}")


@dataclass
class Criteria:
    """Query description handed to repositories and extension hooks."""

    ids: List[str] = field(default_factory=list)
    filters: List[Filter] = field(default_factory=list)
    sortings: List[FieldSorting] = field(default_factory=list)
    limit: Optional[int] = None
    associations: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_limit(self.limit)

    def add_filter(self, *filters: Filter) -> "Criteria":
        self.filters.extend(filters)
        return self

    def add_sorting(self, *sortings: FieldSorting) -> "Criteria":
        self.sortings.extend(sortings)
        return self

    def set_limit(self, limit: Optional[int]) -> "Criteria":
        _check_limit(limit)
        self.limit = limit
        return self

    def add_association(self, name: str) -> "Criteria":
        if name not in self.associations:
            self.associations.append(name)
        return self

    def has_filter(self, filter_type: type) -> bool:
        return any(isinstance(item, filter_type) for item in self.filters)

    def matches(self, entity: object) -> bool:
        if self.ids and read_field(entity, "id") not in self.ids:
            return False
        return all(item.matches(entity) for item in self.filters)


def _sort_key(value: Any) -> Any:
    if isinstance(value, str):
        return value.casefold()
    return value


def sort_entities(entities: Iterable[T], sortings: Sequence[FieldSorting]) -> List[T]:
    """Stable multi-key sort; entities lacking a sort value go last."""
    items = list(entities)
    for sorting in reversed(sortings):
        present = [item for item in items if read_field(item, sorting.field) is not None]
        missing = [item for item in items if read_field(item, sorting.field) is None]
        try:
            present.sort(
                key=lambda item: _sort_key(read_field(item, sorting.field)),
                reverse=sorting.direction == DESCENDING,
            )
        except TypeError as exc:
            raise InvalidCriteriaError(f"cannot sort by '{sorting.field}': {exc}") from exc
        items = present + missing
    return items


def _require(raw: Dict[str, Any], key: str) -> Any:
    if key not in raw:
        raise InvalidFilterError(f"'{raw.get('type')}' filter requires '{key}'")
    return raw[key]


def _compile_queries(raw: Dict[str, Any]) -> List[Filter]:
    queries = _require(raw, "queries")
    if not isinstance(queries, list) or not queries:
        raise InvalidFilterError(f"'{raw.get('type')}' filter requires a non-empty 'queries' list")
    return [filter_from_dict(query) for query in queries]


def _operator(raw: Dict[str, Any]) -> str:
    operator = str(raw.get("operator", AND)).upper()
    if operator not in (AND, OR):
        raise InvalidFilterError(f"unsupported operator '{operator}'")
    return operator


_FILTER_FACTORIES: Dict[str, Callable[[Dict[str, Any]], Filter]] = {
    "equals": lambda raw: EqualsFilter(_require(raw, "field"), _require(raw, "value")),
    "equalsAny": lambda raw: EqualsAnyFilter(_require(raw, "field"), list(_require(raw, "values"))),
    "contains": lambda raw: ContainsFilter(_require(raw, "field"), _require(raw, "value")),
    "range": lambda raw: RangeFilter(_require(raw, "field"), **dict(_require(raw, "parameters"))),
    "multi": lambda raw: MultiFilter(_operator(raw), _compile_queries(raw)),
    "not": lambda raw: NotFilter(_operator(raw), _compile_queries(raw)),
}


def filter_from_dict(raw: Dict[str, Any]) -> Filter:
    """Compile a serialized filter tree as stored on product streams."""
    if not isinstance(raw, dict):
        raise InvalidFilterError(f"expected an object, got {type(raw).__name__}")
    filter_type = raw.get("type")
    factory = _FILTER_FACTORIES.get(str(filter_type))
    if factory is None:
        raise InvalidFilterError(f"unknown filter type '{filter_type}'")
    try:
        return factory(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidFilterError(f"'{filter_type}' filter: {exc}") from exc

# variant_engine/services/variant_service/query.py
from __future__ import annotations

from typing import Optional, Sequence, Union

from variant_engine.core.config import settings
from variant_engine.core.logging import ENGINE_LOGGER, get_logger
from variant_engine.domain.enums import StatusFilter
from variant_engine.schemas.variant import VariantCombination, VariantStats

logger = get_logger(f"{ENGINE_LOGGER}.variants")


def _is_all(value: object) -> bool:
    return value is None or value == "" or value == settings.FILTER_ALL_SENTINEL


def search(combinations: Sequence[VariantCombination], query: Optional[str]) -> list[VariantCombination]:
    """Subcadena sin distinguir mayúsculas en cualquier valor de atributo o en el SKU."""
    if not isinstance(query, str) or not query:
        if query is not None and not isinstance(query, str):
            logger.debug("Ignoring non-text search query", extra={"query": query})
        return list(combinations)

    needle = query.lower()
    return [
        combo
        for combo in combinations
        if needle in combo.sku.lower() or any(needle in value.lower() for value in combo.attributes.values())
    ]


def filter_by_attribute(
    combinations: Sequence[VariantCombination],
    attribute_name: Optional[str] = None,
    value: Optional[str] = None,
) -> list[VariantCombination]:
    if _is_all(attribute_name) or _is_all(value):
        return list(combinations)

    # Fila sin ese atributo (filtro que quedó apuntando a un atributo eliminado): no restringe
    return [combo for combo in combinations if combo.attributes.get(attribute_name, value) == value]


def filter_by_status(
    combinations: Sequence[VariantCombination],
    status: Union[StatusFilter, str, None] = StatusFilter.all,
) -> list[VariantCombination]:
    try:
        status = StatusFilter(status) if status is not None else StatusFilter.all
    except ValueError:
        logger.debug("Ignoring unknown status filter", extra={"status": status})
        status = StatusFilter.all

    if status is StatusFilter.active:
        return [combo for combo in combinations if combo.is_active]
    if status is StatusFilter.inactive:
        return [combo for combo in combinations if not combo.is_active]
    return list(combinations)


def query_combinations(
    combinations: Sequence[VariantCombination],
    *,
    search_text: Optional[str] = None,
    attribute_name: Optional[str] = None,
    attribute_value: Optional[str] = None,
    status: Union[StatusFilter, str, None] = None,
) -> list[VariantCombination]:
    """Todos los predicados se combinan con AND; el orden de aplicación no cambia el resultado."""
    rows = search(combinations, search_text)
    rows = filter_by_attribute(rows, attribute_name, attribute_value)
    return filter_by_status(rows, status)


def compute_stats(combinations: Sequence[VariantCombination]) -> VariantStats:
    total = len(combinations)
    active = sum(1 for combo in combinations if combo.is_active)
    total_value = sum(combo.price for combo in combinations)
    return VariantStats(
        total=total,
        active=active,
        inactive=total - active,
        in_stock=sum(1 for combo in combinations if combo.inventory > 0),
        total_value=total_value,
        average_price=(total_value / total) if total else 0.0,
        total_inventory=sum(combo.inventory for combo in combinations),
        low_stock=sum(1 for combo in combinations if combo.inventory < settings.LOW_STOCK_THRESHOLD),
    )

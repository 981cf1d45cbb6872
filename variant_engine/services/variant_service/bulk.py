# variant_engine/services/variant_service/bulk.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Sequence, Union

from variant_engine.core.logging import ENGINE_LOGGER, get_logger
from variant_engine.schemas.variant import BulkPatch, VariantCombination
from variant_engine.services.exceptions import (
    DomainValidationError,
    MalformedPatchError,
    UnknownTargetError,
)

logger = get_logger(f"{ENGINE_LOGGER}.variants")

_NUMERIC_FIELDS = ("price", "inventory", "compare_price", "weight")
_EDITABLE_FIELDS = frozenset(
    {"title", "price", "compare_price", "sku", "barcode", "weight", "is_active", "inventory", "images"}
)


def _as_patch(patch: Union[BulkPatch, Mapping[str, Any]]) -> BulkPatch:
    if isinstance(patch, BulkPatch):
        return patch
    return BulkPatch.model_validate(dict(patch))


def _check_non_negative(payload: Mapping[str, Any]) -> None:
    for field in _NUMERIC_FIELDS:
        value = payload.get(field)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedPatchError(f"{field} debe ser numérico")
        if value < 0:
            raise MalformedPatchError(f"{field} no puede ser negativo")


def apply_bulk_update(
    combinations: Sequence[VariantCombination],
    target_ids: Iterable[str],
    patch: Union[BulkPatch, Mapping[str, Any]],
    *,
    strict: bool = False,
) -> list[VariantCombination]:
    """
    Aplica el mismo cambio a las combinaciones cuyo id está en `target_ids`.

    Un valor numérico 0 o ausente deja el campo como está. Ids desconocidos
    se ignoran (la selección de la UI puede ir detrás de la regeneración),
    salvo con strict=True.
    """
    patch = _as_patch(patch)
    _check_non_negative(patch.model_dump())

    targets = set(target_ids)
    known = {combo.id for combo in combinations}
    missing = targets - known
    if missing:
        if strict:
            raise UnknownTargetError("Combinaciones inexistentes en la lista actual", missing_ids=missing)
        logger.warning("Ignoring unknown bulk update targets", extra={"missing_ids": sorted(missing)})

    changes: dict[str, Any] = {
        field: value
        for field, value in patch.model_dump().items()
        if field in _NUMERIC_FIELDS and value is not None and value > 0
    }
    if patch.is_active is not None:
        changes["is_active"] = patch.is_active

    if not changes:
        return list(combinations)

    result = [combo.model_copy(update=changes) if combo.id in targets else combo for combo in combinations]
    logger.info(
        "Bulk update applied",
        extra={"targeted": len(targets), "updated": len(targets & known), "ignored": len(missing), "fields": sorted(changes)},
    )
    return result


def update_combination(
    combinations: Sequence[VariantCombination],
    combination_id: str,
    **changes: Any,
) -> list[VariantCombination]:
    """Edición directa de una fila; id y attributes no se pueden modificar."""
    locked = {"id", "attributes"} & changes.keys()
    if locked:
        raise DomainValidationError(f"Campos no editables: {', '.join(sorted(locked))}")
    unknown = changes.keys() - _EDITABLE_FIELDS
    if unknown:
        raise DomainValidationError(f"Campos desconocidos: {', '.join(sorted(unknown))}")
    _check_non_negative(changes)

    for field in ("sku", "barcode"):
        if isinstance(changes.get(field), str):
            changes[field] = changes[field].strip()

    result: list[VariantCombination] = []
    found = False
    for combo in combinations:
        if combo.id == combination_id:
            # dict(combo) conserva attributes como AttributeAssignment, sin pasar por el serializer
            result.append(VariantCombination.model_validate({**dict(combo), **changes}))
            found = True
        else:
            result.append(combo)

    if not found:
        raise UnknownTargetError(f"Combinación {combination_id} no encontrada", missing_ids={combination_id})
    return result


def set_active(
    combinations: Sequence[VariantCombination],
    target_ids: Iterable[str],
    active: bool,
) -> list[VariantCombination]:
    return apply_bulk_update(combinations, target_ids, BulkPatch(is_active=active))


def remove_combinations(
    combinations: Sequence[VariantCombination],
    target_ids: Iterable[str],
) -> list[VariantCombination]:
    targets = set(target_ids)
    return [combo for combo in combinations if combo.id not in targets]

# variant_engine/services/variant_service/reconcile.py
from __future__ import annotations

import uuid
from typing import Iterable, Optional, Sequence

from variant_engine.core.logging import ENGINE_LOGGER, get_logger
from variant_engine.schemas.variant import AttributeAssignment, RegenerationResult, VariantCombination
from variant_engine.services.exceptions import InvalidAttributeError

from .generation import AttributeSetLike, generate
from .identity import AssignmentLike, BarcodeSynthesizer, synthesize_sku, synthesize_title

logger = get_logger(f"{ENGINE_LOGGER}.variants")


def new_combination_id() -> str:
    return str(uuid.uuid4())


def build_default_combination(
    assignment: AssignmentLike,
    barcodes: Optional[BarcodeSynthesizer] = None,
) -> VariantCombination:
    assignment = AttributeAssignment.of(assignment)
    return VariantCombination(
        id=new_combination_id(),
        attributes=assignment,
        title=synthesize_title(assignment),
        price=0,
        compare_price=0,
        sku=synthesize_sku(assignment),
        barcode=(barcodes or BarcodeSynthesizer()).synthesize(assignment),
        weight=0,
        is_active=True,
        inventory=0,
        images=(),
    )


def reconcile(
    generated: Iterable[AssignmentLike],
    existing: Sequence[VariantCombination],
    barcodes: Optional[BarcodeSynthesizer] = None,
) -> list[VariantCombination]:
    """
    Cruza las asignaciones generadas con la lista ya editada.

    - Asignación con combinación existente de igual contenido -> se emite tal cual.
    - Asignación nueva -> combinación con valores por defecto.
    - Combinaciones existentes que ya no se generan -> se descartan.

    El orden de salida es el de `generated`.
    """
    assignments = [AttributeAssignment.of(a) for a in generated]
    existing = list(existing)

    keys = [a.key for a in assignments]
    if len(keys) != len(set(keys)):
        raise InvalidAttributeError("Las asignaciones generadas contienen combinaciones repetidas")

    by_key: dict[frozenset[tuple[str, str]], VariantCombination] = {}
    for combo in existing:
        by_key.setdefault(combo.attributes.key, combo)

    if barcodes is None:
        barcodes = BarcodeSynthesizer(issued=(combo.barcode for combo in existing))

    result: list[VariantCombination] = []
    for assignment in assignments:
        current = by_key.get(assignment.key)
        if current is not None:
            result.append(current)
        else:
            result.append(build_default_combination(assignment, barcodes))
    return result


def regenerate(attributes: AttributeSetLike, existing: Sequence[VariantCombination]) -> RegenerationResult:
    """Valida, genera y reconcilia. Si algo falla no se devuelve nada parcial."""
    existing = list(existing)
    combinations = reconcile(generate(attributes), existing)

    previous_ids = {combo.id for combo in existing}
    kept = sum(1 for combo in combinations if combo.id in previous_ids)
    result = RegenerationResult(
        combinations=combinations,
        created=len(combinations) - kept,
        kept=kept,
        dropped=len(previous_ids) - kept,
    )
    logger.info(
        "Variant combinations regenerated",
        extra={
            "total_count": len(combinations),
            "created_count": result.created,
            "kept_count": result.kept,
            "dropped_count": result.dropped,
        },
    )
    return result

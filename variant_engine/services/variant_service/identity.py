# variant_engine/services/variant_service/identity.py
from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Iterable, Optional, Union

from variant_engine.core.config import settings
from variant_engine.core.logging import ENGINE_LOGGER, get_logger
from variant_engine.schemas.variant import AttributeAssignment

logger = get_logger(f"{ENGINE_LOGGER}.variants")

AssignmentLike = Union[AttributeAssignment, Mapping[str, str]]


def synthesize_sku(assignment: AssignmentLike) -> str:
    """
    SKU legible y determinista: por cada par atributo/valor, en orden,
    los primeros caracteres del nombre y del valor en mayúsculas.

    {"Color": "Red", "Size": "Small"} -> "COL-RED-SIZ-SMA"
    """
    size = settings.SKU_SEGMENT_LENGTH
    sep = settings.SKU_SEPARATOR
    parts = [
        f"{name[:size].upper()}{sep}{value[:size].upper()}"
        for name, value in AttributeAssignment.of(assignment).items()
    ]
    return sep.join(parts)


def synthesize_title(assignment: AssignmentLike) -> str:
    return " / ".join(AttributeAssignment.of(assignment).values())


class BarcodeSynthesizer:
    """
    Emite códigos de barra numéricos (prefijo fijo + sufijo aleatorio).

    Evita repetir sufijos dentro de un mismo lote; no garantiza unicidad
    global, el campo es editable por el usuario apenas se crea.
    """

    def __init__(self, issued: Optional[Iterable[str]] = None, rng: Optional[random.Random] = None) -> None:
        self.prefix = settings.BARCODE_PREFIX
        self.suffix_length = settings.BARCODE_SUFFIX_LENGTH
        self.max_attempts = settings.BARCODE_MAX_ATTEMPTS
        self.issued: set[str] = {code for code in (issued or ()) if code}
        self._rng = rng or random.SystemRandom()

    def _candidate(self) -> str:
        suffix = self._rng.randrange(10 ** self.suffix_length)
        return f"{self.prefix}{suffix:0{self.suffix_length}d}"

    def synthesize(self, assignment: AssignmentLike) -> str:
        candidate = self._candidate()
        attempts = 1
        while candidate in self.issued and attempts < self.max_attempts:
            candidate = self._candidate()
            attempts += 1

        if candidate in self.issued:
            logger.warning(
                "Barcode collision not avoided",
                extra={"barcode": candidate, "attempts": attempts, "sku": synthesize_sku(assignment)},
            )
        self.issued.add(candidate)
        return candidate


def synthesize_barcode(assignment: AssignmentLike, synthesizer: Optional[BarcodeSynthesizer] = None) -> str:
    return (synthesizer or BarcodeSynthesizer()).synthesize(assignment)

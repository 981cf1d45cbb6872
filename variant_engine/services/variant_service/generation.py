# variant_engine/services/variant_service/generation.py
from collections.abc import Mapping
from itertools import product
from math import prod
from typing import Iterable, Union

from variant_engine.schemas.variant import Attribute, AttributeAssignment, AttributeSet
from variant_engine.services.exceptions import InvalidAttributeError

AttributeSetLike = Union[AttributeSet, Mapping[str, Iterable[str]], Iterable[Attribute]]


def as_attribute_set(data: AttributeSetLike) -> AttributeSet:
    if isinstance(data, AttributeSet):
        return data
    if isinstance(data, Mapping):
        return AttributeSet.from_mapping(data)
    return AttributeSet(attributes=tuple(data))


def validate_attribute_set(data: AttributeSetLike) -> AttributeSet:
    """Rechaza nombres vacíos o repetidos y valores vacíos o repetidos (sin deduplicar)."""
    attribute_set = as_attribute_set(data)

    seen_names: set[str] = set()
    for attr in attribute_set.attributes:
        if not attr.name.strip():
            raise InvalidAttributeError("El nombre del atributo no puede estar vacío")
        if attr.name in seen_names:
            raise InvalidAttributeError(f"Atributo duplicado: {attr.name!r}")
        seen_names.add(attr.name)

        seen_values: set[str] = set()
        for value in attr.values:
            if not value.strip():
                raise InvalidAttributeError(f"Valor vacío en el atributo {attr.name!r}")
            if value in seen_values:
                raise InvalidAttributeError(f"Valor duplicado {value!r} en el atributo {attr.name!r}")
            seen_values.add(value)

    return attribute_set


def count_combinations(data: AttributeSetLike) -> int:
    attribute_set = as_attribute_set(data)
    if not attribute_set.attributes:
        return 0
    return prod(len(attr.values) for attr in attribute_set.attributes)


def generate(data: AttributeSetLike) -> list[AttributeAssignment]:
    """
    Producto cartesiano de los valores de cada atributo.

    El orden es tipo odómetro: el último atributo avanza más rápido. Un set
    vacío devuelve [] (no una única combinación vacía); un atributo sin
    valores anula todo el producto.
    """
    attribute_set = validate_attribute_set(data)
    if not attribute_set.attributes:
        return []

    names = attribute_set.names
    return [
        AttributeAssignment(pairs=tuple(zip(names, values)))
        for values in product(*(attr.values for attr in attribute_set.attributes))
    ]

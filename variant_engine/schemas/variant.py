# variant_engine/schemas/variant.py
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Attribute(BaseModel):
    """Eje de variación con nombre (p.ej. Color) y sus valores en orden."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: tuple[str, ...] = ()


class AttributeSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    attributes: tuple[Attribute, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Iterable[str]]) -> "AttributeSet":
        """Construye el set desde {"Color": ["Red", "Blue"], ...} respetando el orden."""
        return cls(attributes=tuple(Attribute(name=name, values=tuple(values)) for name, values in data.items()))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(attr.name for attr in self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)


class AttributeAssignment(BaseModel):
    """
    Asignación cerrada nombre de atributo -> valor elegido.

    Se guarda como tupla ordenada de pares para conservar el orden de los
    atributos (el SKU depende de él). La identidad natural de una combinación
    es `key`, que ignora el orden.
    """

    model_config = ConfigDict(frozen=True)

    pairs: tuple[tuple[str, str], ...] = ()

    @field_validator("pairs")
    @classmethod
    def validate_unique_names(cls, v: tuple[tuple[str, str], ...]) -> tuple[tuple[str, str], ...]:
        names = [name for name, _ in v]
        if len(names) != len(set(names)):
            raise ValueError("Un atributo no puede aparecer dos veces en la misma asignación")
        return v

    @classmethod
    def of(cls, data: Union["AttributeAssignment", Mapping[str, str], Iterable[tuple[str, str]]]) -> "AttributeAssignment":
        if isinstance(data, AttributeAssignment):
            return data
        if isinstance(data, Mapping):
            return cls(pairs=tuple(data.items()))
        return cls(pairs=tuple(data))

    @property
    def key(self) -> frozenset[tuple[str, str]]:
        return frozenset(self.pairs)

    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.pairs)

    def values(self) -> tuple[str, ...]:
        return tuple(value for _, value in self.pairs)

    def items(self) -> tuple[tuple[str, str], ...]:
        return self.pairs

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for attr_name, value in self.pairs:
            if attr_name == name:
                return value
        return default

    def as_dict(self) -> dict[str, str]:
        return dict(self.pairs)

    def matches(self, other: Union["AttributeAssignment", Mapping[str, str]]) -> bool:
        return self.key == AttributeAssignment.of(other).key


class VariantCombination(BaseModel):
    """Una variante vendible concreta dentro del producto cartesiano de atributos."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    attributes: AttributeAssignment
    title: str = ""

    price: float = Field(0, ge=0)
    compare_price: float = Field(0, ge=0)

    sku: str = ""
    barcode: str = ""

    weight: float = Field(0, ge=0)
    is_active: bool = True
    inventory: int = Field(0, ge=0)

    images: tuple[str, ...] = ()

    @field_validator("attributes", mode="before")
    @classmethod
    def coerce_attributes(cls, v: Any) -> Any:
        # Un mapping siempre es nombre -> valor; un atributo puede llamarse "pairs"
        if isinstance(v, (AttributeAssignment, Mapping)):
            return AttributeAssignment.of(v)
        return v

    @field_serializer("attributes")
    def serialize_attributes(self, attributes: AttributeAssignment) -> dict[str, str]:
        return attributes.as_dict()

    @property
    def has_discount(self) -> bool:
        return self.compare_price > self.price


class BulkPatch(BaseModel):
    """
    Cambio uniforme para varias combinaciones.

    En price/inventory/compare_price/weight, None o 0 significan "sin cambio".
    is_active=None deja el estado como está.
    """

    price: Optional[float] = None
    inventory: Optional[int] = None
    compare_price: Optional[float] = None
    weight: Optional[float] = None
    is_active: Optional[bool] = None


class VariantStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    average_price: float = 0.0
    in_stock: int = Field(0, description="combinaciones con inventory > 0")
    total_value: float = Field(0.0, description="suma de price de todas las combinaciones")
    total_inventory: int = 0
    low_stock: int = Field(0, description="combinaciones con inventory < LOW_STOCK_THRESHOLD")


class RegenerationResult(BaseModel):
    combinations: list[VariantCombination] = []
    created: int = 0
    kept: int = 0
    dropped: int = 0

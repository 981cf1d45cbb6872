# Re-exporta funciones del motor de variantes:
from .generation import (
    as_attribute_set,
    validate_attribute_set,
    count_combinations,
    generate,
)

from .identity import (
    BarcodeSynthesizer,
    synthesize_sku,
    synthesize_title,
    synthesize_barcode,
)

from .reconcile import (
    build_default_combination,
    reconcile,
    regenerate,
)

from .query import (
    search,
    filter_by_attribute,
    filter_by_status,
    query_combinations,
    compute_stats,
)

from .bulk import (
    apply_bulk_update,
    update_combination,
    set_active,
    remove_combinations,
)

__all__ = [
    # generation
    "as_attribute_set", "validate_attribute_set", "count_combinations", "generate",
    # identity
    "BarcodeSynthesizer", "synthesize_sku", "synthesize_title", "synthesize_barcode",
    # reconcile
    "build_default_combination", "reconcile", "regenerate",
    # query
    "search", "filter_by_attribute", "filter_by_status", "query_combinations", "compute_stats",
    # bulk
    "apply_bulk_update", "update_combination", "set_active", "remove_combinations",
]

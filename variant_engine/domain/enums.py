# variant_engine/domain/enums.py
import enum


class StatusFilter(str, enum.Enum):
    all = "all"
    active = "active"
    inactive = "inactive"

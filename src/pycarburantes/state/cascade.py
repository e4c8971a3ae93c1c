"""Filter dependency table.

Changing a field re-derives (and may clear) the fields listed after it.
The table is the only place the hierarchy is declared.
"""

from __future__ import annotations

from pycarburantes.models.filters import FilterField

# Ancestor -> descendants, ordered from the closest descendant outwards.
CASCADE: dict[FilterField, tuple[FilterField, ...]] = {
    FilterField.BRAND: (FilterField.PROVINCE, FilterField.MUNICIPALITY, FilterField.LOCALITY),
    FilterField.PROVINCE: (FilterField.MUNICIPALITY, FilterField.LOCALITY),
    FilterField.MUNICIPALITY: (FilterField.LOCALITY,),
    FilterField.LOCALITY: (),
    FilterField.FUEL_TYPE: (),
}


def descendants_of(field: FilterField) -> tuple[FilterField, ...]:
    return CASCADE.get(FilterField(field), ())


def ancestors_of(field: FilterField) -> tuple[FilterField, ...]:
    field = FilterField(field)
    return tuple(ancestor for ancestor, children in CASCADE.items() if field in children)

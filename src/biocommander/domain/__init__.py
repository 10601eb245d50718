"""Domain model and rules for Bio Commander.

This package holds the whole game engine as plain in-memory values:

* Dataclasses describing every game entity (see :mod:`models`).
* Closed enumerations and the static unit catalog.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions for placement, abilities, resources, turns, victory
  and zone expansion, plus the :mod:`actions` dispatcher tying them together.

Nothing here performs I/O; persistence goes through a thin repository adapter.
"""

from . import (
    abilities,
    actions,
    catalog,
    enums,
    expansion,
    models,
    placement,
    resources,
    rules_config,
    seed_data,
    turns,
    victory,
    zones,
)

__all__ = [
    "abilities",
    "actions",
    "catalog",
    "enums",
    "expansion",
    "models",
    "placement",
    "resources",
    "rules_config",
    "seed_data",
    "turns",
    "victory",
    "zones",
]

"""Ability catalog: validates ability data once, then serves read-only lookups."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from config import ABILITY_DATA_FILE
from content.abilities import ABILITY_DATA, CLASS_ABILITIES
from models.abilities import AbilityDefinition

logger = logging.getLogger(__name__)


class AbilityCatalog:
    """Read-only table of AbilityDefinition keyed by id.

    Raw records are validated on construction, so a malformed entry fails
    with pydantic.ValidationError at load time rather than mid-combat.
    """

    def __init__(
        self,
        records: Iterable[dict | AbilityDefinition],
        class_abilities: dict[str, list[str]] | None = None,
    ) -> None:
        self._abilities: dict[str, AbilityDefinition] = {}
        for record in records:
            ability = (
                record if isinstance(record, AbilityDefinition)
                else AbilityDefinition.model_validate(record)
            )
            if ability.id in self._abilities:
                raise ValueError(f"Duplicate ability id: {ability.id}")
            self._abilities[ability.id] = ability
        self._class_abilities = dict(class_abilities or {})

    def get(self, ability_id: str) -> AbilityDefinition | None:
        return self._abilities.get(ability_id)

    def __contains__(self, ability_id: object) -> bool:
        return ability_id in self._abilities

    def __iter__(self) -> Iterator[AbilityDefinition]:
        return iter(self._abilities.values())

    def __len__(self) -> int:
        return len(self._abilities)

    def class_ability_ids(self, class_name: str) -> list[str]:
        """Ability ids granted to a class that exist in this catalog."""
        return [a for a in self._class_abilities.get(class_name, []) if a in self._abilities]

    def for_class(self, class_name: str) -> list[AbilityDefinition]:
        return [self._abilities[a] for a in self.class_ability_ids(class_name)]


def load_catalog(path: str | None = None) -> AbilityCatalog:
    """Build the ability catalog from a JSON file or the built-in table.

    The JSON file may hold a list of ability records or an object keyed by
    ability id. Class ability sets always come from the built-in table.

    Args:
        path: JSON file to read. Defaults to ABILITY_DATA_FILE, then the
            built-in table.

    Returns:
        A validated AbilityCatalog.
    """
    path = path or ABILITY_DATA_FILE
    if not path:
        return AbilityCatalog(ABILITY_DATA, CLASS_ABILITIES)

    with open(Path(path)) as f:
        data = json.load(f)
    records = list(data.values()) if isinstance(data, dict) else data
    catalog = AbilityCatalog(records, CLASS_ABILITIES)
    logger.info("Loaded %d abilities from %s", len(catalog), path)
    return catalog

"""
Infrastructure layer: read-only species catalog.
"""
import logging
from typing import Dict, List, Optional

from app.data.kenya_species import AGRO_ECOLOGICAL_ZONES, COUNTIES, SPECIES
from app.domain.errors import SpeciesNotFound
from app.domain.models import TreeSpecies

logger = logging.getLogger(__name__)


class SpeciesCatalog:
    """
    Reference dataset of tree species, counties and agro-ecological zones.

    Records are parsed once at construction and never mutated afterwards.
    Iteration order is the catalog order, which ranking relies on for
    stable tie handling.
    """

    def __init__(self, records: Optional[List[dict]] = None):
        records = SPECIES if records is None else records
        self._trees: List[TreeSpecies] = [TreeSpecies(**record) for record in records]
        self._by_id: Dict[str, TreeSpecies] = {tree.id: tree for tree in self._trees}
        logger.info(f"Loaded species catalog with {len(self._trees)} species")

    def all(self) -> List[TreeSpecies]:
        return list(self._trees)

    def get(self, tree_id: str) -> TreeSpecies:
        """
        Look up a species by id.

        Raises:
            SpeciesNotFound: If no species has the given id
        """
        try:
            return self._by_id[tree_id]
        except KeyError:
            raise SpeciesNotFound(f"Tree species '{tree_id}' not found")

    def __len__(self) -> int:
        return len(self._trees)

    @property
    def counties(self) -> List[str]:
        return sorted(COUNTIES)

    @property
    def agro_zones(self) -> List[str]:
        return list(AGRO_ECOLOGICAL_ZONES)


# Singleton instance
_catalog: Optional[SpeciesCatalog] = None


def get_species_catalog() -> SpeciesCatalog:
    """
    Get or create the singleton species catalog.

    Returns:
        SpeciesCatalog instance
    """
    global _catalog
    if _catalog is None:
        _catalog = SpeciesCatalog()
    return _catalog

"""
Implementation Domain Layer
===========================

Contains:
- Entities: StageSet, Interaction
- Value Objects: SubItem catalogue, stage requirements
- Domain Services: StageRules (completion predicates, progress)
"""

from sitetrack.implementation.domain.entities import Interaction, StageSet
from sitetrack.implementation.domain.value_objects import (
    ASSISTED_OPERATION_STAGE,
    PROGRESS_STAGES,
    STAGE_COUNT,
    STAGE_REQUIREMENTS,
    STAGE_TITLES,
    SUB_ITEMS,
    SUB_ITEMS_BY_FIELD,
    StageRules,
    SubItem,
)

__all__ = [
    "Interaction",
    "StageSet",
    "ASSISTED_OPERATION_STAGE",
    "PROGRESS_STAGES",
    "STAGE_COUNT",
    "STAGE_REQUIREMENTS",
    "STAGE_TITLES",
    "SUB_ITEMS",
    "SUB_ITEMS_BY_FIELD",
    "StageRules",
    "SubItem",
]

"""Hospital vocabularies."""

from enum import Enum


class ExternalLevelOfCare(str, Enum):
    """Level of care as stored by the upstream hospitals API."""
    BASIC = "basic"
    ADVANCED = "advanced"
    TERTIARY = "tertiary"
    TRAUMA_CENTER = "trauma_center"


class LevelOfCare(str, Enum):
    """Level of care as displayed by the application."""
    PRIMARY = "Primary"
    SECONDARY = "Secondary"
    TERTIARY = "Tertiary"
    QUATERNARY = "Quaternary"

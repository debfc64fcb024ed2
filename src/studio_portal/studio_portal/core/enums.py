from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Authorities a backend user can hold."""

    USER = "ROLE_USER"
    MANAGER = "ROLE_MANAGER"
    ADMIN = "ROLE_ADMIN"

    @property
    def label(self) -> str:
        return self.value.replace("ROLE_", "").title()


class LabeledEnum(str, Enum):
    """String enum whose members carry a display label as second tuple item."""

    def __new__(cls, value: str, label: str):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        return obj

    @classmethod
    def parse(cls, value):
        """Return the member for ``value`` or None when it is empty/unknown."""
        if not value:
            return None
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


class ProjectCategory(LabeledEnum):
    ARCHITECTURE = ("ARCHITECTURE", "Architecture")
    INTERIOR = ("INTERIOR", "Interior")
    STRUCTURE = ("STRUCTURE", "Structure")
    URBAN = ("URBAN", "Urban")
    LANDSCAPE = ("LANDSCAPE", "Landscape")
    ACOUSTIC = ("ACOUSTIC", "Acoustic")
    OTHER = ("OTHER", "Other")


class ProjectStatus(LabeledEnum):
    IN_DISCUSSION = ("IN_DISCUSSION", "In discussion")
    PROGRESS = ("PROGRESS", "Progress")
    ON_HOLD = ("ON_HOLD", "On hold")
    COMPLETED = ("COMPLETED", "Completed")
    ARCHIVED = ("ARCHIVED", "Archived")


class ProjectPriority(LabeledEnum):
    LOW = ("LOW", "Low")
    MEDIUM = ("MEDIUM", "Medium")
    HIGH = ("HIGH", "High")
    URGENT = ("URGENT", "Urgent")


class ProjectStage(LabeledEnum):
    """Delivery stages of an architecture project."""

    STAGE_01_PREPARATION_BRIEF = ("STAGE_01_PREPARATION_BRIEF", "Stage 01: Preparation & Brief")
    STAGE_02_CONCEPT_DESIGN = ("STAGE_02_CONCEPT_DESIGN", "Stage 02: Concept Design")
    STAGE_03_DESIGN_DEVELOPMENT = ("STAGE_03_DESIGN_DEVELOPMENT", "Stage 03: Design Development")
    STAGE_04_TECHNICAL_DESIGN = ("STAGE_04_TECHNICAL_DESIGN", "Stage 04: Technical Design")
    STAGE_05_CONSTRUCTION = ("STAGE_05_CONSTRUCTION", "Stage 05: Construction")
    STAGE_06_HANDOVER = ("STAGE_06_HANDOVER", "Stage 06: Handover")
    STAGE_07_USE = ("STAGE_07_USE", "Stage 07: Use")


class TaskStatus(LabeledEnum):
    TO_DO = ("TO_DO", "To Do")
    IN_PROGRESS = ("IN_PROGRESS", "In Progress")
    IN_REVIEW = ("IN_REVIEW", "In Review")
    DONE = ("DONE", "Done")
    CHECKED = ("CHECKED", "Checked")
    ON_HOLD = ("ON_HOLD", "On Hold")


class TaskPriority(LabeledEnum):
    LOW = ("LOW", "Low")
    MEDIUM = ("MEDIUM", "Medium")
    HIGH = ("HIGH", "High")
    URGENT = ("URGENT", "Urgent")


class AttendanceMark(str, Enum):
    """Per-day value of the attendance calendar."""

    PRESENT = "present"
    ABSENT = "absent"
    NO_DATA = "no-data"

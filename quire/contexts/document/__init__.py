"""
Document Context

Responsibilities:
- Normalizes raw resume mappings (wizard, YAML editor, AI tailoring) to ResumeData
- Defines resume sections and the user-editable section order

Owns: Resume record shape, section definitions, section-order edits
Never: Decides page placement or measures content
"""

from quire.contexts.document.exceptions import InvalidResumeStructureError, UnknownSectionError
from quire.contexts.document.resume_document import (
    AdditionalItem,
    AwardEntry,
    Contact,
    EducationEntry,
    ProjectEntry,
    PublicationEntry,
    ResumeData,
    WorkEntry,
    load_resume,
    normalize_resume,
)
from quire.contexts.document.sections import (
    DEFAULT_SECTIONS,
    SectionDefinition,
    SectionKind,
    SectionOrder,
    move_down,
    move_section,
    move_up,
    reorder,
    set_hidden,
)

__all__ = [
    # Resume record
    "ResumeData",
    "Contact",
    "WorkEntry",
    "EducationEntry",
    "ProjectEntry",
    "AwardEntry",
    "PublicationEntry",
    "AdditionalItem",
    "normalize_resume",
    "load_resume",
    # Sections
    "DEFAULT_SECTIONS",
    "SectionDefinition",
    "SectionKind",
    "SectionOrder",
    "move_section",
    "move_up",
    "move_down",
    "reorder",
    "set_hidden",
    # Errors
    "InvalidResumeStructureError",
    "UnknownSectionError",
]

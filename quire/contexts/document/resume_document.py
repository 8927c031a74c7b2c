"""
Resume Document Structure

Defines the normalized resume record consumed by the Layout context.
Raw input comes from the form wizard, the YAML editor, or an AI-tailored YAML;
normalize_resume() turns any of these into a ResumeData instance with every
expected field present and typed.

Layout never sees raw YAML or form values, only ResumeData plus a section order.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from omegaconf import OmegaConf

from quire.contexts.document.exceptions import InvalidResumeStructureError

SkillValue = Union[str, List[str]]


@dataclass(frozen=True)
class Contact:
    phone: str = ""
    email: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""

    @property
    def is_empty(self) -> bool:
        return not any((self.phone, self.email, self.location, self.linkedin, self.github))


@dataclass(frozen=True)
class WorkEntry:
    """
    One job in the work history.

    Attributes:
        company: Employer name
        title: Job title
        location: City/region of the role
        dates: Free-form date range (e.g., "March 2021 - Present")
        tagline: Optional one-line description of the company
        responsibilities: Bullet points, one per line
    """

    company: str = ""
    title: str = ""
    location: str = ""
    dates: str = ""
    tagline: str = ""
    responsibilities: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class EducationEntry:
    institution: str = ""
    location: str = ""
    graduation_date: str = ""
    details: str = ""


@dataclass(frozen=True)
class ProjectEntry:
    name: str = ""
    dates: str = ""
    url: str = ""
    bullets: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AwardEntry:
    title: str = ""
    issuer: str = ""
    date: str = ""
    details: str = ""


@dataclass(frozen=True)
class PublicationEntry:
    title: str = ""
    venue: str = ""
    date: str = ""
    authors: str = ""


@dataclass(frozen=True)
class AdditionalItem:
    """
    Free-form entry the user places individually (e.g., "Volunteering", "Interests").

    Each item has its own stable identity so it can be pinned to a page on its own
    rather than as part of a section.
    """

    id: str
    title: str = ""
    body: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResumeData:
    """
    Normalized resume record.

    Every list is present (possibly empty) and entries are typed, so collectors
    can iterate without existence checks.
    """

    name: str = ""
    contact: Contact = field(default_factory=Contact)
    work_experience: List[WorkEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    projects: List[ProjectEntry] = field(default_factory=list)
    awards: List[AwardEntry] = field(default_factory=list)
    publications: List[PublicationEntry] = field(default_factory=list)
    skills: Dict[str, SkillValue] = field(default_factory=dict)
    additional: List[AdditionalItem] = field(default_factory=list)

    @property
    def has_header(self) -> bool:
        """True if there is a name or any contact detail to put in the header."""
        return bool(self.name) or not self.contact.is_empty

    @property
    def skill_rows(self) -> List[tuple]:
        """(label, value) rows for the skills table, skipping empty values."""
        rows = []
        for key, value in self.skills.items():
            text = "; ".join(value) if isinstance(value, list) else value
            if text:
                rows.append((format_skill_label(key), text))
        return rows

    def section_entries(self, section_id: str) -> List[Any]:
        """
        Get the entries backing a section.

        Args:
            section_id: Section identifier (e.g., "work_experience", "skills")

        Returns:
            List of entries; for "skills" the skill rows; empty list for unknown ids
        """
        if section_id == "skills":
            return self.skill_rows
        entries = getattr(self, section_id, None)
        return list(entries) if isinstance(entries, list) else []


def format_skill_label(key: str) -> str:
    """Turn a skills key into a table label: 'hard_skills' -> 'Hard Skills'."""
    return " ".join(word[:1].upper() + word[1:] for word in key.replace("_", " ").split())


# =============================================================================
# Normalization
# =============================================================================


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_lines(value: Any, field_name: str) -> List[str]:
    """Accept a list of lines or a newline-separated string; drop blank lines."""
    if value is None:
        return []
    if isinstance(value, str):
        candidates = value.split("\n")
    elif isinstance(value, (list, tuple)):
        candidates = [_as_text(item) for item in value]
    else:
        raise InvalidResumeStructureError(
            "Expected a list or newline-separated string", field_name=field_name, value=value
        )
    return [line.strip() for line in candidates if line and line.strip()]


def _as_list(value: Any, field_name: str) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidResumeStructureError("Expected a list", field_name=field_name, value=value)
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise InvalidResumeStructureError(
                "Expected a mapping", field_name=f"{field_name}[{i}]", value=item
            )
    return list(value)


def _normalize_skills(value: Any) -> Dict[str, SkillValue]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidResumeStructureError("Expected a mapping", field_name="skills", value=value)

    skills: Dict[str, SkillValue] = {}
    for key, raw in value.items():
        if isinstance(raw, (list, tuple)):
            items = [_as_text(item) for item in raw if _as_text(item)]
            if items:
                skills[str(key)] = items
        elif _as_text(raw):
            skills[str(key)] = _as_text(raw)
    return skills


def normalize_resume(raw: Any) -> ResumeData:
    """
    Normalize a raw resume mapping (from YAML or the form wizard) to ResumeData.

    Operations:
    1. Missing fields default to empty values
    2. Responsibilities/bullets given as a newline string are split into lines
    3. Work entries without company and title, and education entries without
       an institution, are dropped (incomplete wizard cards)
    4. Additional items without an id get a positional id "item-<n>", moving
       to the next free number when an explicit id already uses it

    Args:
        raw: Parsed mapping

    Returns:
        ResumeData instance

    Raises:
        InvalidResumeStructureError: If raw is not a mapping or a field has the wrong shape
    """
    if not isinstance(raw, dict):
        raise InvalidResumeStructureError(
            "YAML must contain an object with resume fields.", value=raw
        )

    contact_raw = raw.get("contact") or {}
    if not isinstance(contact_raw, dict):
        raise InvalidResumeStructureError("Expected a mapping", field_name="contact", value=contact_raw)
    contact = Contact(**{key: _as_text(contact_raw.get(key)) for key in Contact.__dataclass_fields__})

    work = []
    for i, job in enumerate(_as_list(raw.get("work_experience"), "work_experience")):
        entry = WorkEntry(
            company=_as_text(job.get("company")),
            title=_as_text(job.get("title")),
            location=_as_text(job.get("location")),
            dates=_as_text(job.get("dates")),
            tagline=_as_text(job.get("tagline")),
            responsibilities=_as_lines(
                job.get("responsibilities"), f"work_experience[{i}].responsibilities"
            ),
        )
        if entry.company or entry.title:
            work.append(entry)

    education = []
    for edu in _as_list(raw.get("education"), "education"):
        entry = EducationEntry(
            institution=_as_text(edu.get("institution")),
            location=_as_text(edu.get("location")),
            graduation_date=_as_text(edu.get("graduation_date")),
            details=_as_text(edu.get("details")),
        )
        if entry.institution:
            education.append(entry)

    projects = [
        ProjectEntry(
            name=_as_text(proj.get("name")),
            dates=_as_text(proj.get("dates")),
            url=_as_text(proj.get("url")),
            bullets=_as_lines(proj.get("bullets"), f"projects[{i}].bullets"),
        )
        for i, proj in enumerate(_as_list(raw.get("projects"), "projects"))
        if _as_text(proj.get("name"))
    ]

    awards = [
        AwardEntry(
            title=_as_text(award.get("title")),
            issuer=_as_text(award.get("issuer")),
            date=_as_text(award.get("date")),
            details=_as_text(award.get("details")),
        )
        for award in _as_list(raw.get("awards"), "awards")
        if _as_text(award.get("title"))
    ]

    publications = [
        PublicationEntry(
            title=_as_text(pub.get("title")),
            venue=_as_text(pub.get("venue")),
            date=_as_text(pub.get("date")),
            authors=_as_text(pub.get("authors")),
        )
        for pub in _as_list(raw.get("publications"), "publications")
        if _as_text(pub.get("title"))
    ]

    additional = []
    raw_items = _as_list(raw.get("additional"), "additional")
    explicit_ids = {_as_text(item.get("id")) for item in raw_items} - {""}
    seen_ids = set()
    for i, item in enumerate(raw_items, start=1):
        item_id = _as_text(item.get("id"))
        if not item_id:
            n = i
            while f"item-{n}" in explicit_ids or f"item-{n}" in seen_ids:
                n += 1
            item_id = f"item-{n}"
        if item_id in seen_ids:
            raise InvalidResumeStructureError(
                "Duplicate additional item id", field_name=f"additional[{i - 1}].id", value=item_id
            )
        seen_ids.add(item_id)
        additional.append(
            AdditionalItem(
                id=item_id,
                title=_as_text(item.get("title")),
                body=_as_lines(item.get("body"), f"additional[{i - 1}].body"),
            )
        )

    return ResumeData(
        name=_as_text(raw.get("name")),
        contact=contact,
        work_experience=work,
        education=education,
        projects=projects,
        awards=awards,
        publications=publications,
        skills=_normalize_skills(raw.get("skills")),
        additional=additional,
    )


def load_resume(yaml_path: Union[str, Path]) -> ResumeData:
    """
    Load and normalize a resume YAML file.

    Args:
        yaml_path: Path to resume YAML

    Returns:
        ResumeData instance

    Raises:
        FileNotFoundError: If yaml_path does not exist
        InvalidResumeStructureError: If the YAML does not describe a resume
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.exists():
        raise FileNotFoundError(f"YAML file not found: {yaml_path}")

    loaded = OmegaConf.load(yaml_path)
    raw: Optional[Any] = OmegaConf.to_container(loaded, resolve=True)
    return normalize_resume(raw)

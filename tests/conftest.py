"""Shared test helpers: synthetic groups and a fixed-height measurement oracle."""

from pathlib import Path

import pytest

from quire.contexts.document import normalize_resume
from quire.contexts.layout.blocks import BlockKind, ContentBlock, Group

FIXTURES_PATH = Path(__file__).parent / "fixtures"


class FixedHeightOracle:
    """Returns preset heights per block key and records every call."""

    def __init__(self, heights=None, default=0.0):
        self.heights = dict(heights or {})
        self.default = default
        self.commits = []
        self.measured = []

    def commit(self, blocks, text_scale):
        self.commits.append(([block.key for block in blocks], text_scale))

    def measure(self, block, text_scale):
        self.measured.append(block.key)
        return self.heights.get(block.key, self.default) * text_scale


def make_group(key, section_id=None, kind=BlockKind.ENTRY, position=0):
    block = ContentBlock(key=key, kind=kind, section_id=section_id or key, position=position)
    return Group((block,))


def make_groups(*keys):
    """One single-block group per key; 'header' becomes the header group."""
    return [
        make_group(key, kind=BlockKind.HEADER if key == "header" else BlockKind.ENTRY, position=i)
        for i, key in enumerate(keys)
    ]


def page_keys(pages):
    return [[group.key for group in page] for page in pages]


@pytest.fixture
def raw_resume():
    return {
        "name": "Jane Smith",
        "contact": {
            "phone": "555-0100",
            "email": "jane@example.com",
            "location": "Austin, TX",
            "linkedin": "linkedin.com/in/janesmith",
        },
        "work_experience": [
            {
                "company": "Acme Corp",
                "title": "Senior Engineer",
                "location": "Austin, TX",
                "dates": "2021 - Present",
                "responsibilities": ["Led migration to a service architecture", "Mentored four engineers"],
            },
            {
                "company": "Initech",
                "title": "Engineer",
                "dates": "2018 - 2021",
                "responsibilities": "Built reporting pipeline\nReduced build times by 40%",
            },
        ],
        "education": [
            {"institution": "State University", "graduation_date": "2018", "details": "B.S. Computer Science"}
        ],
        "skills": {"hard_skills": ["Python", "SQL"], "soft_skills": "Mentoring"},
        "additional": [
            {"id": "volunteering", "title": "Volunteering", "body": ["Food bank coordinator"]},
            {"title": "Interests", "body": "Running\nChess"},
        ],
    }


@pytest.fixture
def resume(raw_resume):
    return normalize_resume(raw_resume)

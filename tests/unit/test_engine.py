"""Unit tests for the layout pipeline and LayoutSession."""

import pytest

from quire.contexts.document import ResumeData, UnknownSectionError
from quire.contexts.layout.engine import LayoutSession, run_pipeline
from quire.contexts.layout.state import LayoutMode, initial_state
from tests.conftest import FixedHeightOracle, page_keys

# Per-block heights; page breaks fall between sections on a 1008px page
BLOCK_HEIGHTS = {
    "header": 100,
    "work_experience:title": 50,
    "work_experience:0": 350,
    "work_experience:1": 300,
    "education:title": 50,
    "education:0": 150,
    "skills": 200,
    "additional:volunteering": 150,
    "additional:item-2": 150,
}

AUTO_PAGES = [
    ["header", "work_experience:title", "work_experience:1", "education:title"],
    ["skills", "additional:volunteering", "additional:item-2"],
]

AUTO_ASSIGNMENT = {
    "header": 1,
    "work_experience": 1,
    "education": 1,
    "skills": 2,
    "additional:volunteering": 2,
    "additional:item-2": 2,
}


class RecordingRenderer:
    def __init__(self):
        self.rendered = []

    def render(self, result):
        self.rendered.append(result)
        return f"{result.page_count} pages"


@pytest.fixture
def oracle():
    return FixedHeightOracle(BLOCK_HEIGHTS)


@pytest.fixture
def session(oracle, resume):
    session = LayoutSession(oracle, renderer=RecordingRenderer())
    session.load_document(resume)
    return session


@pytest.mark.unit
def test_pipeline_commits_before_measuring(oracle, resume):
    """Test that the pipeline commits blocks before measuring them."""
    run_pipeline(resume, initial_state(), oracle)

    committed_keys, scale = oracle.commits[0]
    assert scale == 1.0
    assert set(oracle.measured) <= set(committed_keys)


@pytest.mark.unit
def test_pipeline_is_idempotent(oracle, resume):
    """Test that running the pipeline twice gives the same result."""
    state = initial_state()

    first = run_pipeline(resume, state, oracle)
    second = run_pipeline(resume, state, oracle)

    assert page_keys(first.pages) == page_keys(second.pages)
    assert first.page_assignment == second.page_assignment
    assert first.heights == second.heights


@pytest.mark.unit
def test_load_document_runs_automatic_layout(session):
    """Test that loading a document lays it out automatically."""
    result = session.result

    assert result.mode == LayoutMode.AUTOMATIC
    assert result.target_page_count is None
    assert page_keys(result.pages) == AUTO_PAGES
    assert result.page_assignment == AUTO_ASSIGNMENT
    assert result.usable_height == 1008
    assert session.state.last_assignment == AUTO_ASSIGNMENT


@pytest.mark.unit
def test_every_action_rerenders(session):
    """Test that each session action renders the new result."""
    renderer = session.renderer
    count = len(renderer.rendered)

    result = session.shrink_text()

    assert len(renderer.rendered) == count + 1
    assert renderer.rendered[-1] is result
    assert session.rendered == f"{result.page_count} pages"


@pytest.mark.unit
def test_switching_to_manual_causes_no_jump(session):
    """Test that entering manual mode keeps the automatic layout."""
    result = session.set_mode(LayoutMode.MANUAL)

    assert result.mode == LayoutMode.MANUAL
    assert result.target_page_count == 2
    assert session.state.pin_map == AUTO_ASSIGNMENT
    assert page_keys(result.pages) == AUTO_PAGES
    assert result.overflowed is False


@pytest.mark.unit
def test_switching_to_manual_keeps_spanning_section(resume):
    """Test that a section split across the automatic page break stays split after entering manual mode."""
    heights = {
        **BLOCK_HEIGHTS,
        "work_experience:0": 400,
        "work_experience:1": 500,
        "education:0": 100,
        "skills": 100,
        "additional:volunteering": 100,
        "additional:item-2": 100,
    }
    session = LayoutSession(FixedHeightOracle(heights), renderer=RecordingRenderer())
    auto = session.load_document(resume)

    manual = session.set_mode(LayoutMode.MANUAL)

    assert page_keys(auto.pages) == [
        ["header", "work_experience:title"],
        ["work_experience:1", "education:title", "skills", "additional:volunteering", "additional:item-2"],
    ]
    assert page_keys(manual.pages) == page_keys(auto.pages)
    assert manual.page_assignment == auto.page_assignment
    assert manual.overflowed is False


@pytest.mark.unit
def test_pin_moves_only_that_section(session):
    """Test that pinning moves only the pinned section."""
    session.set_mode(LayoutMode.MANUAL)

    result = session.pin_section("education", 2)

    assert page_keys(result.pages) == [
        ["header", "work_experience:title", "work_experience:1"],
        ["education:title", "skills", "additional:volunteering", "additional:item-2"],
    ]
    assert result.page_assignment == {**AUTO_ASSIGNMENT, "education": 2}


@pytest.mark.unit
def test_pin_in_automatic_mode_enters_manual(session):
    """Test that pinning in automatic mode switches to manual."""
    result = session.pin_section("education", 2)

    assert result.mode == LayoutMode.MANUAL
    assert result.target_page_count == 2
    assert result.page_assignment == {**AUTO_ASSIGNMENT, "education": 2}


@pytest.mark.unit
def test_pin_onto_full_page_overflows(session):
    """Test that pinning onto a full page overflows."""
    result = session.pin_section("additional:item-2", 1)

    assert page_keys(result.pages) == [
        ["header", "work_experience:title", "work_experience:1", "education:title"],
        ["additional:item-2"],
        ["skills", "additional:volunteering"],
    ]
    assert result.overflowed is True
    assert session.state.pin_map["additional:item-2"] == 1


@pytest.mark.unit
def test_pin_unknown_section_raises(session):
    """Test that pinning an unknown section raises."""
    with pytest.raises(UnknownSectionError):
        session.pin_section("hobbies", 1)


@pytest.mark.unit
def test_target_page_count_redistributes(session):
    """Test that changing the target page count redistributes sections."""
    result = session.set_target_page_count(1)

    assert result.mode == LayoutMode.MANUAL
    assert session.state.pin_map == {}
    assert result.overflowed is True
    assert session.state.overflowed is True
    assert result.page_count == 2


@pytest.mark.unit
def test_back_to_automatic_drops_pins(session):
    """Test that returning to automatic mode drops pins."""
    session.pin_section("education", 2)

    result = session.set_mode(LayoutMode.AUTOMATIC)

    assert session.state.pin_map == {}
    assert page_keys(result.pages) == AUTO_PAGES


@pytest.mark.unit
def test_text_scale_changes_heights(session):
    """Test that shrinking text shrinks measured heights."""
    result = session.shrink_text()

    assert result.text_scale_percent == 95
    assert result.heights["skills"] == pytest.approx(200 * 0.95)
    assert session.oracle.commits[-1][1] == pytest.approx(0.95)


@pytest.mark.unit
def test_set_text_scale(session):
    """Test setting the text scale directly."""
    result = session.set_text_scale(60)

    assert result.text_scale_percent == 60
    # 1500px of content at 60% fits one page
    assert result.page_count == 1


@pytest.mark.unit
def test_load_document_resets_session(session, resume):
    """Test that loading a document resets the session state."""
    session.shrink_text()
    session.pin_section("education", 2)
    session.move_section_up("education")

    result = session.load_document(resume)

    assert result.text_scale_percent == 100
    assert result.mode == LayoutMode.AUTOMATIC
    assert session.state.pin_map == {}
    assert page_keys(result.pages) == AUTO_PAGES


@pytest.mark.unit
def test_section_order_actions(session):
    """Test the section order actions."""
    result = session.move_section_up("education")
    assert page_keys(result.pages)[0][:2] == ["header", "education:title"]

    result = session.move_section_down("education")
    assert page_keys(result.pages) == AUTO_PAGES

    result = session.move_section("skills", 0)
    assert page_keys(result.pages)[0][1] == "skills"

    result = session.reorder_sections(["work_experience", "education", "skills"])
    assert page_keys(result.pages) == AUTO_PAGES


@pytest.mark.unit
def test_hide_section(session):
    """Test hiding a section."""
    result = session.hide_section("skills")
    assert "skills" not in result.page_assignment

    result = session.hide_section("skills", hidden=False)
    assert result.page_assignment["skills"] == 2


@pytest.mark.unit
def test_start_over_gives_empty_layout(session):
    """Test that starting over gives an empty layout."""
    result = session.start_over()

    assert result.is_empty
    assert result.page_count == 0
    assert session.document == ResumeData()


@pytest.mark.unit
def test_empty_document_in_manual_mode(session):
    """Test laying out an empty document in manual mode."""
    session.start_over()

    result = session.set_target_page_count(2)

    assert result.page_count == 0
    assert result.overflowed is False


@pytest.mark.unit
def test_fit_single_page_leaves_scale_alone(session):
    """Test that fitting to one page reports a scale without applying it."""
    scale = session.fit_single_page()

    # 1500px of content on a 1008px page
    assert 1008 / 1500 - 0.001 < scale <= 1008 / 1500
    assert session.state.text_scale_percent == 100

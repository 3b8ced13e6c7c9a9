import random

import pytest

from backend.errors import AgreementRequiredError, DesignLockedError, SceneNotFoundError
from backend.wizard import NEW_DESIGN_HEADING, TOTAL_STEPS, ShowDesignWizard
from models.show import STATUS_DRAFT, STATUS_LOCKED, ShowDesign
from prompts.registry import TITLE_CANDIDATES


def wizard_on_last_step(**answers):
    wizard = ShowDesignWizard(ShowDesign(id=1, **answers))
    wizard.step = TOTAL_STEPS
    return wizard


# ── Navigation ────────────────────────────────────────────────────────────────

def test_starts_on_step_one():
    assert ShowDesignWizard().step == 1


def test_previous_on_first_step_stays_put():
    wizard = ShowDesignWizard()
    wizard.previous()
    assert wizard.step == 1


def test_next_stops_at_last_step():
    wizard = ShowDesignWizard()
    for _ in range(TOTAL_STEPS + 3):
        wizard.next()
    assert wizard.step == TOTAL_STEPS
    assert wizard.is_last_step


def test_random_walk_stays_in_range():
    rng = random.Random(7)
    wizard = ShowDesignWizard()
    for _ in range(500):
        if rng.random() < 0.5:
            wizard.next()
        else:
            wizard.previous()
        assert 1 <= wizard.step <= TOTAL_STEPS


def test_progress_and_heading():
    wizard = ShowDesignWizard()
    assert wizard.progress == pytest.approx(1 / 7)
    assert wizard.heading == NEW_DESIGN_HEADING
    assert wizard.step_title == "The Ensemble"
    wizard.update(title="Echoes")
    assert wizard.heading == "Echoes"


# ── Field edits ───────────────────────────────────────────────────────────────

def test_update_sets_fields():
    wizard = ShowDesignWizard()
    wizard.update(band_size="120", mood="triumphant")
    assert wizard.design.band_size == "120"
    assert wizard.design.mood == "triumphant"


@pytest.mark.parametrize("name", ["id", "scenes", "colour"])
def test_update_rejects_non_editable_names(name):
    with pytest.raises(AttributeError):
        ShowDesignWizard().update(**{name: "x"})


def test_generate_title_uses_candidate_pool():
    wizard = ShowDesignWizard()
    assert wizard.generate_title() in TITLE_CANDIDATES
    assert wizard.design.title in TITLE_CANDIDATES


def test_generate_title_uses_injected_strategy():
    wizard = ShowDesignWizard(title_picker=lambda candidates: candidates[-1])
    assert wizard.generate_title() == "Starlight Revolution"


def test_generate_narrative_overwrites_existing_text():
    wizard = ShowDesignWizard()
    wizard.update(narrative="old", synopsis="a storm", weakest_sections="low brass")
    text = wizard.generate_narrative()
    assert text == wizard.design.narrative
    assert "a storm" in text
    assert "low brass" in text
    assert "full band" in text


# ── Scenes ────────────────────────────────────────────────────────────────────

def test_add_scene_appends_with_unique_id():
    wizard = ShowDesignWizard()
    added = [wizard.add_scene() for _ in range(5)]
    ids = wizard.design.scene_ids()
    assert len(ids) == 5
    assert len(set(ids)) == 5
    assert [s.id for s in added] == ids
    assert all(s.desc == "" for s in wizard.design.scenes)


def test_update_scene_edits_by_id():
    wizard = ShowDesignWizard()
    first = wizard.add_scene()
    second = wizard.add_scene()
    wizard.update_scene(second.id, "the reveal")
    assert wizard.design.find_scene(second.id).desc == "the reveal"
    assert wizard.design.find_scene(first.id).desc == ""


def test_remove_scene_keeps_order_of_rest():
    wizard = ShowDesignWizard()
    scenes = [wizard.add_scene() for _ in range(4)]
    wizard.remove_scene(scenes[1].id)
    assert wizard.design.scene_ids() == [scenes[0].id, scenes[2].id, scenes[3].id]


def test_unknown_scene_id_raises():
    wizard = ShowDesignWizard()
    with pytest.raises(SceneNotFoundError):
        wizard.update_scene(404, "nope")
    with pytest.raises(SceneNotFoundError):
        wizard.remove_scene(404)


# ── Submission ────────────────────────────────────────────────────────────────

def test_submit_unsigned_is_refused_without_change():
    wizard = wizard_on_last_step(title="Echoes")
    before = wizard.design.copy()
    with pytest.raises(AgreementRequiredError, match="agree to the rewrite policy"):
        wizard.submit()
    assert wizard.step == TOTAL_STEPS
    assert wizard.design == before


def test_submit_before_last_step_is_refused():
    wizard = ShowDesignWizard(ShowDesign(id=1, signed=True))
    with pytest.raises(AgreementRequiredError):
        wizard.submit()
    assert wizard.step == 1


def test_submit_signed_returns_locked_design():
    wizard = wizard_on_last_step(title="Echoes")
    wizard.set_signed(True)
    design = wizard.submit()
    assert design.signed
    assert design.title == "Echoes"
    assert design.status == STATUS_LOCKED


def test_submit_leaves_open_design_as_draft():
    wizard = wizard_on_last_step(title="Echoes")
    wizard.set_signed(True)
    design = wizard.submit()
    assert design is not wizard.design
    assert wizard.design.status == STATUS_DRAFT


def test_submit_without_locking_keeps_draft_status():
    wizard = ShowDesignWizard(ShowDesign(id=1, title="Echoes"), lock_on_submit=False)
    wizard.step = TOTAL_STEPS
    wizard.set_signed(True)
    design = wizard.submit()
    assert design.signed
    assert design.status == STATUS_DRAFT


def test_read_only_wizard_refuses_edits_but_navigates():
    wizard = ShowDesignWizard(ShowDesign(id=1, signed=True), read_only=True)
    wizard.next()
    assert wizard.step == 2
    with pytest.raises(DesignLockedError):
        wizard.update(title="Changed")
    with pytest.raises(DesignLockedError):
        wizard.add_scene()
    with pytest.raises(DesignLockedError):
        wizard.generate_title()
    wizard.step = TOTAL_STEPS
    with pytest.raises(DesignLockedError):
        wizard.submit()

"""
The seven-step show design wizard, the core of the app.

One mutable ShowDesign is edited across seven ordered steps:

    1  The Ensemble          band size, season, instrumentation, strengths
    2  Parameters            date needed, things to include / avoid
    3  The Concept           title, synopsis, narrative, mood, soloists
    4  THE Big Moment        the anchor the whole show builds to
    5  Scene Breakdown       ordered, editable list of scenes
    6  Soundtrack Selection  song / arrangement list
    7  Agreement             rewrite policy + sign-off checkbox

Navigation is unconditional; only the final submission is gated, on the
sign-off checkbox.  The wizard never touches storage: submit() hands the
finished design back and the router decides where it goes.
"""

from typing import Dict, Optional

from backend.errors import AgreementRequiredError, DesignLockedError, SceneNotFoundError
from backend.generators import (
    NarrativeStrategy,
    TitleStrategy,
    pick_random_title,
    template_narrative,
)
from models.show import STATUS_LOCKED, Scene, ShowDesign
from prompts.registry import PromptRegistry

TOTAL_STEPS = 7
FIRST_STEP = 1

STEP_TITLES: Dict[int, str] = {
    1: "The Ensemble",
    2: "Parameters",
    3: "The Concept",
    4: "THE Big Moment",
    5: "Scene Breakdown",
    6: "Soundtrack Selection",
    7: "Agreement & Submission",
}

NEW_DESIGN_HEADING = "New Show Design"


class ShowDesignWizard:
    """
    Linear step machine over a single ShowDesign.

    Usage:
        wizard = ShowDesignWizard()                 # fresh design
        wizard = ShowDesignWizard(existing_design)  # edit an existing one
        wizard.design.title = "Echoes"
        wizard.next()
        ...
        design = wizard.submit()   # raises AgreementRequiredError unless signed

    read_only      : set for designs that are signed and locked; every edit raises
    lock_on_submit : submit() marks the design "locked"; off, it stays "draft"
    title_picker   : strategy used by generate_title()
    narrator       : strategy used by generate_narrative()
    """

    def __init__(
        self,
        design: Optional[ShowDesign] = None,
        read_only: bool = False,
        lock_on_submit: bool = True,
        title_picker: TitleStrategy = pick_random_title,
        narrator: NarrativeStrategy = template_narrative,
    ):
        self.design = design if design is not None else ShowDesign()
        self.step = FIRST_STEP
        self.read_only = read_only
        self.lock_on_submit = lock_on_submit
        self._title_picker = title_picker
        self._narrator = narrator

    # ── Navigation ────────────────────────────────────────────────────────────

    def next(self) -> int:
        """Advance one step; a no-op on the last step."""
        self.step = min(self.step + 1, TOTAL_STEPS)
        return self.step

    def previous(self) -> int:
        """Go back one step; a no-op on the first step."""
        self.step = max(self.step - 1, FIRST_STEP)
        return self.step

    @property
    def is_first_step(self) -> bool:
        return self.step == FIRST_STEP

    @property
    def is_last_step(self) -> bool:
        return self.step == TOTAL_STEPS

    @property
    def progress(self) -> float:
        """Fraction of the wizard reached, for the progress bar."""
        return self.step / TOTAL_STEPS

    @property
    def step_title(self) -> str:
        return STEP_TITLES[self.step]

    @property
    def heading(self) -> str:
        return self.design.title or NEW_DESIGN_HEADING

    # ── Field edits ───────────────────────────────────────────────────────────

    def update(self, **answers) -> None:
        """
        Set one or more answers by attribute name, e.g. update(title="Echoes").

        Unknown names raise AttributeError; scenes have their own methods.
        """
        self._ensure_editable()
        for name, value in answers.items():
            if name in ("id", "scenes") or not hasattr(self.design, name):
                raise AttributeError(f"ShowDesign has no editable field '{name}'")
            setattr(self.design, name, value)

    def generate_title(self) -> str:
        """Overwrite the title with a suggestion from the candidate pool."""
        self._ensure_editable()
        self.design.title = self._title_picker(PromptRegistry.title_candidates())
        return self.design.title

    def generate_narrative(self) -> str:
        """Overwrite the narrative with one built from the current answers."""
        self._ensure_editable()
        self.design.narrative = self._narrator(self.design)
        return self.design.narrative

    # ── Scenes ────────────────────────────────────────────────────────────────

    def add_scene(self) -> Scene:
        """Append an empty scene with a fresh identity and return it."""
        self._ensure_editable()
        scene = Scene(id=self.design.next_scene_id())
        self.design.scenes.append(scene)
        return scene

    def update_scene(self, scene_id: int, desc: str) -> Scene:
        self._ensure_editable()
        scene = self.design.find_scene(scene_id)
        if scene is None:
            raise SceneNotFoundError(f"No scene with id {scene_id}")
        scene.desc = desc
        return scene

    def remove_scene(self, scene_id: int) -> None:
        self._ensure_editable()
        if self.design.find_scene(scene_id) is None:
            raise SceneNotFoundError(f"No scene with id {scene_id}")
        self.design.scenes = [s for s in self.design.scenes if s.id != scene_id]

    # ── Submission ────────────────────────────────────────────────────────────

    def set_signed(self, signed: bool) -> None:
        self._ensure_editable()
        self.design.signed = bool(signed)

    def submit(self) -> ShowDesign:
        """
        Finish the wizard and return a copy of the design to be saved.

        Refused (nothing changes) unless we are on the last step and the
        rewrite policy has been agreed to.  The open design is left as it is,
        so a save that fails afterwards has nothing to undo.
        """
        self._ensure_editable()
        if not self.is_last_step:
            raise AgreementRequiredError(
                f"Submission is only possible from step {TOTAL_STEPS}."
            )
        if not self.design.signed:
            raise AgreementRequiredError(PromptRegistry.get("agreement_required"))
        finished = self.design.copy()
        if self.lock_on_submit:
            finished.status = STATUS_LOCKED
        return finished

    # ── Private helpers ───────────────────────────────────────────────────────

    def _ensure_editable(self) -> None:
        if self.read_only:
            raise DesignLockedError(PromptRegistry.get("design_locked"))

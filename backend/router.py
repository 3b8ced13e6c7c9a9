"""
View routing for the show design portal.

Exactly one of three views is active at a time:

    auth      → login / register form (no credential check)
    dashboard → saved designs, "start new", logout
    wizard    → the seven-step editor for one design

The router owns the session's cross-view state: who is logged in, the saved
collection, which design (if any) is being edited, and the active wizard.
Persistence goes through the injected ShowRepository only.
"""

import logging
from typing import List, Optional

from backend.errors import DesignLockedError
from backend.store import ShowRepository
from backend.wizard import ShowDesignWizard
from models.show import ShowDesign, User

logger = logging.getLogger(__name__)

VIEW_AUTH = "auth"
VIEW_DASHBOARD = "dashboard"
VIEW_WIZARD = "wizard"


class Router:
    """
    Holds the active view and moves between views.

    Usage:
        router = Router(ShowRepository(JsonFileStore("show_designs.json")))
        router.login("director@school.edu")
        router.start_new()
        router.wizard.update(title="Echoes")
        ...
        router.submit()        # saves and returns to the dashboard
    """

    def __init__(self, repository: ShowRepository):
        self.repository = repository
        self.view = VIEW_AUTH
        self.user: Optional[User] = None
        self.shows: List[ShowDesign] = repository.load_all()
        self.current_show_id: Optional[int] = None
        self.wizard: Optional[ShowDesignWizard] = None

    # ── Session ───────────────────────────────────────────────────────────────

    def login(self, identifier: str) -> User:
        """Record who is using the app and show the dashboard."""
        self.user = User.from_identifier(identifier)
        self._go(VIEW_DASHBOARD)
        return self.user

    def logout(self) -> None:
        self.user = None
        self.wizard = None
        self.current_show_id = None
        self._go(VIEW_AUTH)

    # ── Wizard entry / exit ───────────────────────────────────────────────────

    def start_new(self) -> ShowDesignWizard:
        """Open the wizard on a blank design."""
        self.current_show_id = None
        self.wizard = self._open(self._fresh_design())
        self._go(VIEW_WIZARD)
        return self.wizard

    def edit(self, show_id: int) -> ShowDesignWizard:
        """
        Open the wizard on a copy of the saved design with *show_id*.

        The copy keeps unsaved edits out of the collection until submission.
        Signed designs open read-only when the repository locks them.  An id
        that is not in the collection opens a blank design.
        """
        self.current_show_id = show_id
        saved = self.find(show_id)
        if saved is None:
            logger.debug("No saved design with id %s; opening a blank one", show_id)
            self.wizard = self._open(self._fresh_design())
        else:
            self.wizard = self._open(
                saved.copy(), read_only=self.repository.is_locked(saved)
            )
        self._go(VIEW_WIZARD)
        return self.wizard

    def submit(self) -> ShowDesign:
        """
        Submit the active wizard and, if it accepts, save and return.

        AgreementRequiredError / DesignLockedError propagate; in that case
        nothing is saved and the wizard stays open where it was.  A save refused
        because the stored copy was signed in the meantime reloads the
        collection first.
        """
        if self.wizard is None:
            raise RuntimeError("No design is open in the wizard.")
        design = self.wizard.submit()
        try:
            self.save_and_return(design)
        except DesignLockedError:
            logger.warning("Design %s was signed elsewhere; reloading", design.id)
            self.shows = self.repository.load_all()
            raise
        return design

    def save_and_return(self, design: ShowDesign) -> None:
        """Upsert *design*, persist the whole collection and show the dashboard."""
        self.shows = self.repository.upsert(design)
        self.current_show_id = None
        self.wizard = None
        self._go(VIEW_DASHBOARD)

    def cancel_and_return(self) -> None:
        """Drop the open design without saving and show the dashboard."""
        self.current_show_id = None
        self.wizard = None
        self._go(VIEW_DASHBOARD)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def find(self, show_id: int) -> Optional[ShowDesign]:
        for show in self.shows:
            if show.id == show_id:
                return show
        return None

    # ── Private helpers ───────────────────────────────────────────────────────

    def _fresh_design(self) -> ShowDesign:
        """A blank design whose clock-based id is not already taken."""
        design = ShowDesign()
        while self.find(design.id) is not None:
            design.id += 1
        return design

    def _open(self, design: ShowDesign, read_only: bool = False) -> ShowDesignWizard:
        return ShowDesignWizard(
            design, read_only=read_only, lock_on_submit=self.repository.lock_signed
        )

    def _go(self, view: str) -> None:
        logger.debug("View %s -> %s", self.view, view)
        self.view = view

"""Exceptions raised by the show design core and surfaced by the UI."""


class ShowDesignError(Exception):
    """Base class for every refusal the core makes."""


class AgreementRequiredError(ShowDesignError):
    """Submission attempted without agreeing to the rewrite policy."""


class DesignLockedError(ShowDesignError):
    """A signed design was about to be changed."""


class SceneNotFoundError(ShowDesignError):
    """No scene with the given identity in this design."""

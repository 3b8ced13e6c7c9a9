"""
Suggestion generators for the Concept step.

Both suggestions are deliberately offline: the title comes from a fixed pool
and the narrative is a three-act template filled from answers already given.

Each generator is a plain callable so the wizard can be handed a different
one (for instance, a model-backed writer) without changing its own code:

    TitleStrategy     : (candidates) -> str
    NarrativeStrategy : (design)     -> str
"""

import random
from typing import Callable, Optional, Sequence

from models.show import ShowDesign
from prompts.registry import PromptRegistry

TitleStrategy = Callable[[Sequence[str]], str]
NarrativeStrategy = Callable[[ShowDesign], str]

# Stand-ins used when the corresponding answer is still blank.
NARRATIVE_FALLBACKS = {
    "synopsis": "the unknown",
    "weakest": "ensemble",
    "strongest": "full band",
}


def pick_random_title(candidates: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """Return one of *candidates* at random."""
    if not candidates:
        raise ValueError("No title candidates to choose from.")
    chooser = rng or random
    return chooser.choice(list(candidates))


def template_narrative(design: ShowDesign) -> str:
    """
    Fill the three-act narrative template from the design's current answers.

    Act 1 uses the synopsis, Act 2 the weakest sections, Act 3 the strongest
    sections; blank answers fall back to generic nouns.
    """
    return PromptRegistry.get(
        "narrative_template",
        synopsis=design.synopsis or NARRATIVE_FALLBACKS["synopsis"],
        weakest=design.weakest_sections or NARRATIVE_FALLBACKS["weakest"],
        strongest=design.strongest_sections or NARRATIVE_FALLBACKS["strongest"],
    )

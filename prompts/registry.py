"""
Prompt Registry — every fixed piece of wizard copy and text template lives here.

Pattern: PromptRegistry acts as a factory.  Call PromptRegistry.get(name)
to retrieve a template by its key, passing keyword arguments to fill its
placeholders.  Changing wording means editing one entry in PROMPTS; no
changes needed anywhere else.
"""

from typing import Dict, List


# ── Suggestion pool for the show title ────────────────────────────────────────

TITLE_CANDIDATES: List[str] = [
    "Echoes of Tomorrow",
    "The Golden Horizon",
    "Velocity",
    "Urban Myths",
    "Starlight Revolution",
]


# ── Template definitions ──────────────────────────────────────────────────────

PROMPTS: Dict[str, str] = {

    # ------------------------------------------------------------------
    # Step 3 — narrative suggestion (three acts, one line each)
    # ------------------------------------------------------------------
    "narrative_template": (
        "Act 1 establishes the world of {synopsis}. \n"
        "Act 2 introduces conflict through the {weakest}. \n"
        "Act 3 resolves in a glorious explosion of sound featuring the {strongest}."
    ),

    # ------------------------------------------------------------------
    # Step 4 — the anchor of the whole show
    # ------------------------------------------------------------------
    "big_moment_callout": """This HAS to be well thought out. The ENTIRE show revolves around this point.
We build to, and around this point. What is the "WOW" factor?""",

    # ------------------------------------------------------------------
    # Step 6 — song list
    # ------------------------------------------------------------------
    "songs_warning": """**Warning:** Anything not listed here will not be used. Any request to add
songs after the draft is presented will be charged a rewrite fee.""",

    # ------------------------------------------------------------------
    # Step 7 — the rewrite policy and the sign-off statement
    # ------------------------------------------------------------------
    "rewrite_policy": """I will work diligently to design the show to your wants and needs based on
the information provided in this form. However, to maintain workflow and fairness:

- Once you have agreed to the arrangements and signed below, the design is **locked**.
- All subsequent rewrites will be charged at **$100 per movement, per rewrite**.
- I will **NOT** accept pressure for immediate turnarounds on rewrites. They are handled in the order received.
- Songs not listed in the previous step constitute a new design request.""",

    "agreement_label": (
        "**I HAVE READ AND AGREE.** I understand that my form submission acts as the "
        "foundational document for this project. I accept the fee structure for changes "
        "requested after the initial agreement is signed."
    ),

    "agreement_required": "You must agree to the rewrite policy to submit.",

    "design_locked": (
        "This design is signed and locked. Rewrites are charged at $100 per movement, "
        "per rewrite."
    ),
}


# ── Registry class ────────────────────────────────────────────────────────────

class PromptRegistry:
    """Simple factory for retrieving template strings by name."""

    @staticmethod
    def get(name: str, **kwargs: str) -> str:
        """
        Fetch a template by key and optionally format it with keyword arguments.

        Example:
            PromptRegistry.get("narrative_template", synopsis="a city", weakest="brass", strongest="drums")
        """
        if name not in PROMPTS:
            raise KeyError(f"Prompt '{name}' not found in registry. "
                           f"Available: {list(PROMPTS.keys())}")
        prompt = PROMPTS[name]
        # Format only if kwargs are supplied; the policy texts contain no
        # placeholders but may contain braces in future copy.
        if kwargs:
            prompt = prompt.format(**kwargs)
        return prompt

    @staticmethod
    def list_prompts() -> list:
        """Return all registered template keys."""
        return list(PROMPTS.keys())

    @staticmethod
    def title_candidates() -> List[str]:
        """Return a copy of the title suggestion pool."""
        return list(TITLE_CANDIDATES)

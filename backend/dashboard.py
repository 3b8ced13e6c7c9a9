"""
What the dashboard shows for each saved design.

Pure presentation: no filtering or sorting, one card per design in
collection order.
"""

from dataclasses import dataclass
from typing import List

from models.show import ShowDesign

UNTITLED = "Untitled Show"
NO_SYNOPSIS = "No synopsis yet..."
NO_DATE = "Not set"

BADGE_SIGNED = "Signed"
BADGE_DRAFT = "Draft"


@dataclass
class DesignCard:
    """
    The display values of one dashboard card.

    show_id   : identity passed to Router.edit when the card is clicked
    year      : season badge
    badge     : "Signed" or "Draft"
    title     : title, or a placeholder
    synopsis  : synopsis, or a placeholder
    due       : "Due: <date>" line
    """
    show_id: int
    year: str
    badge: str
    title: str
    synopsis: str
    due: str

    @property
    def is_signed(self) -> bool:
        return self.badge == BADGE_SIGNED


def design_card(show: ShowDesign) -> DesignCard:
    return DesignCard(
        show_id=show.id,
        year=str(show.year),
        badge=BADGE_SIGNED if show.signed else BADGE_DRAFT,
        title=show.title or UNTITLED,
        synopsis=show.synopsis or NO_SYNOPSIS,
        due=f"Due: {show.date_needed or NO_DATE}",
    )


def dashboard_cards(shows: List[ShowDesign]) -> List[DesignCard]:
    return [design_card(show) for show in shows]


def brief_filename(show: ShowDesign) -> str:
    """File name for the downloadable plain-text brief."""
    stem = "".join(c if c.isalnum() else "_" for c in (show.title or "untitled_show"))
    return f"{stem.strip('_').lower() or 'untitled_show'}_{show.id}.txt"

"""
Data models for a show design brief.

Kept intentionally simple: plain dataclasses, no ORM.  The persisted
shape uses camelCase keys (``bandSize``, ``dateNeeded`` …); the Python
attributes are snake_case and ``to_dict`` / ``from_dict`` translate.
"""

import time
from dataclasses import dataclass, field, fields
from datetime import date
from typing import List, Optional

STATUS_DRAFT = "draft"
STATUS_LOCKED = "locked"

# Python attribute → persisted key, for every scalar field of ShowDesign.
_WIRE_NAMES = {
    "id": "id",
    "year": "year",
    "status": "status",
    "signed": "signed",
    "band_size": "bandSize",
    "instrumentation": "instrumentation",
    "strongest_sections": "strongestSections",
    "weakest_sections": "weakestSections",
    "includes": "includes",
    "avoids": "avoids",
    "date_needed": "dateNeeded",
    "title": "title",
    "synopsis": "synopsis",
    "narrative": "narrative",
    "mood": "mood",
    "soloists": "soloists",
    "big_moment": "bigMoment",
    "songs": "songs",
}


def now_ms() -> int:
    """Milliseconds since the epoch, used as an identity token."""
    return int(time.time() * 1000)


def is_email_shaped(identifier: str) -> bool:
    """True for ``something@something``, the only shape check the login form makes."""
    local, sep, domain = identifier.strip().partition("@")
    return bool(local and sep and domain)


@dataclass
class User:
    """
    The person behind the current session.  Never persisted.

    email : whatever was typed into the login form
    name  : display name, the part of the email before the ``@``
    """
    email: str
    name: str

    @classmethod
    def from_identifier(cls, identifier: str) -> "User":
        email = identifier.strip()
        return cls(email=email, name=email.split("@")[0])


@dataclass
class Scene:
    """One entry of the scene breakdown: an identity and what happens in it."""
    id: int
    desc: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "desc": self.desc}

    @classmethod
    def from_dict(cls, data: dict) -> "Scene":
        return cls(id=int(data["id"]), desc=str(data.get("desc") or ""))


@dataclass
class ShowDesign:
    """
    The full creative brief for one show.

    id                 : identity token, unique within the saved collection
    year               : season year
    status             : "draft" until submitted, "locked" once signed off
    signed             : agreement to the rewrite policy
    band_size … songs  : the free-text answers collected by the wizard
    scenes             : ordered scene breakdown
    """
    id: int = field(default_factory=now_ms)
    year: int = field(default_factory=lambda: date.today().year)
    status: str = STATUS_DRAFT
    signed: bool = False
    # Step 1
    band_size: str = ""
    instrumentation: str = ""
    strongest_sections: str = ""
    weakest_sections: str = ""
    # Step 2
    includes: str = ""
    avoids: str = ""
    date_needed: str = ""
    # Step 3
    title: str = ""
    synopsis: str = ""
    narrative: str = ""
    mood: str = ""
    soloists: str = ""
    # Step 4
    big_moment: str = ""
    # Step 5
    scenes: List[Scene] = field(default_factory=list)
    # Step 6
    songs: str = ""

    # ── Scenes ────────────────────────────────────────────────────────────────

    def scene_ids(self) -> List[int]:
        return [s.id for s in self.scenes]

    def find_scene(self, scene_id: int) -> Optional[Scene]:
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        return None

    def next_scene_id(self) -> int:
        """
        A fresh scene identity.

        Clock based like every other identity in the app, but bumped past the
        current maximum so two scenes added in the same millisecond still differ.
        """
        candidate = now_ms()
        if self.scenes:
            candidate = max(candidate, max(self.scene_ids()) + 1)
        return candidate

    # ── Serialisation ─────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        data = {wire: getattr(self, attr) for attr, wire in _WIRE_NAMES.items()}
        data["scenes"] = [s.to_dict() for s in self.scenes]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ShowDesign":
        """
        Rebuild a design from its persisted dict.

        Missing optional keys fall back to defaults; a missing or non-numeric
        ``id`` raises, so the caller can decide what to do with the record.
        """
        kwargs = {}
        for attr, wire in _WIRE_NAMES.items():
            if wire in data and data[wire] is not None:
                kwargs[attr] = data[wire]
        kwargs["id"] = int(data["id"])
        if "year" in kwargs:
            try:
                kwargs["year"] = int(kwargs["year"])
            except (TypeError, ValueError):
                del kwargs["year"]
        kwargs["signed"] = bool(kwargs.get("signed", False))
        for f in fields(cls):
            if f.type is str and f.name in kwargs:
                kwargs[f.name] = str(kwargs[f.name])
        kwargs["scenes"] = [Scene.from_dict(s) for s in data.get("scenes") or []]
        return cls(**kwargs)

    def copy(self) -> "ShowDesign":
        return ShowDesign.from_dict(self.to_dict())

    # ── Presentation helpers ──────────────────────────────────────────────────

    def summary(self) -> str:
        """Return a plain-text brief, one labelled line or block per answer."""
        lines = [
            f"Title       : {self.title or 'Untitled Show'}",
            f"Season      : {self.year}",
            f"Status      : {'Signed' if self.signed else 'Draft'}",
            f"Band size   : {self.band_size}",
            f"Music due   : {self.date_needed or 'Not set'}",
            f"Mood        : {self.mood}",
            f"Soloists    : {self.soloists}",
            "",
            "Instrumentation:", self.instrumentation,
            "",
            "Strongest sections:", self.strongest_sections,
            "Weakest sections:", self.weakest_sections,
            "",
            "Include:", self.includes,
            "Avoid:", self.avoids,
            "",
            "Synopsis:", self.synopsis,
            "",
            "Narrative:", self.narrative,
            "",
            "The big moment:", self.big_moment,
            "",
            "Scenes:",
        ]
        lines += [f"  {i}. {s.desc}" for i, s in enumerate(self.scenes, start=1)]
        lines += ["", "Songs:", self.songs]
        return "\n".join(lines)

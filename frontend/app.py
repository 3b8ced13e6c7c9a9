"""
Streamlit frontend for the Show Design Portal.

Three views, one at a time:
  🔐 Auth      — email sign-in / register (no credential check)
  📋 Dashboard — saved show designs, start a new one, logout
  🧭 Wizard    — seven-step creative brief, saved on signed submission

All state lives on a Router kept in st.session_state.  Wizard widgets keep
their own values under design-scoped keys; _commit_widgets copies them into
the open design before anything reads it.
"""

import sys
import os
from datetime import date

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import streamlit as st

from backend import config
from backend.dashboard import brief_filename, dashboard_cards
from backend.errors import ShowDesignError
from backend.router import VIEW_DASHBOARD, VIEW_WIZARD, Router
from backend.store import JsonFileStore, ShowRepository
from backend.wizard import TOTAL_STEPS
from models.show import is_email_shaped
from prompts.registry import PromptRegistry

config.configure_logging()

# ── Page config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Show Design Portal",
    page_icon="🎺",
    layout="wide",
)

# Free-text design fields that are edited with a plain text widget.
_TEXT_FIELDS = [
    "band_size", "instrumentation", "strongest_sections", "weakest_sections",
    "includes", "avoids",
    "title", "synopsis", "narrative", "mood", "soloists",
    "big_moment", "songs",
]

_FLASH_KEY = "flash_error"


# ── Shared helpers ────────────────────────────────────────────────────────────

def get_router() -> Router:
    """Build the router once per browser session."""
    if "router" not in st.session_state:
        repository = ShowRepository(
            JsonFileStore(config.store_path()),
            key=config.storage_key(),
            lock_signed=config.lock_signed(),
        )
        st.session_state["router"] = Router(repository)
    return st.session_state["router"]


def _flash(message: str) -> None:
    st.session_state[_FLASH_KEY] = message


def _show_flash() -> None:
    message = st.session_state.pop(_FLASH_KEY, None)
    if message:
        st.error(message, icon="⚠️")


def _key(router: Router, name: str) -> str:
    """Widget key scoped to the open design, so two designs never share widget state."""
    return f"design_{router.wizard.design.id}_{name}"


def _seed(router: Router, name: str, value) -> str:
    """Give a widget its starting value from the design the first time it is drawn."""
    key = _key(router, name)
    if key not in st.session_state:
        st.session_state[key] = value
    return key


def _commit_widgets(router: Router) -> None:
    """Copy every wizard widget value currently held by Streamlit into the design."""
    wizard = router.wizard
    if wizard is None or wizard.read_only:
        return
    state = st.session_state
    answers = {}
    for attr in _TEXT_FIELDS:
        key = _key(router, attr)
        if key in state:
            answers[attr] = state[key]
    year_key = _key(router, "year")
    if year_key in state:
        answers["year"] = int(state[year_key])
    date_key = _key(router, "date_needed")
    if date_key in state:
        picked = state[date_key]
        answers["date_needed"] = picked.isoformat() if picked else ""
    if answers:
        wizard.update(**answers)
    signed_key = _key(router, "signed")
    if signed_key in state:
        wizard.set_signed(state[signed_key])
    for scene in wizard.design.scenes:
        scene_key = _key(router, f"scene_{scene.id}")
        if scene_key in state:
            wizard.update_scene(scene.id, state[scene_key])


def _text(router: Router, label: str, attr: str, area: bool = False, **kwargs) -> None:
    key = _seed(router, attr, getattr(router.wizard.design, attr))
    widget = st.text_area if area else st.text_input
    widget(label, key=key, disabled=router.wizard.read_only, **kwargs)


# ── Callbacks ─────────────────────────────────────────────────────────────────
# Run before the next rerun, so the page always renders the updated state.

def _on_login(router: Router) -> None:
    identifier = st.session_state.get("auth_email", "")
    if not is_email_shaped(identifier):
        _flash("Please enter a valid email address.")
        return
    router.login(identifier)


def _on_step(router: Router, forward: bool) -> None:
    _commit_widgets(router)
    if forward:
        router.wizard.next()
    else:
        router.wizard.previous()


def _on_generate_title(router: Router) -> None:
    _commit_widgets(router)
    st.session_state[_key(router, "title")] = router.wizard.generate_title()


def _on_generate_narrative(router: Router) -> None:
    _commit_widgets(router)
    st.session_state[_key(router, "narrative")] = router.wizard.generate_narrative()


def _on_add_scene(router: Router) -> None:
    _commit_widgets(router)
    router.wizard.add_scene()


def _on_remove_scene(router: Router, scene_id: int) -> None:
    _commit_widgets(router)
    router.wizard.remove_scene(scene_id)
    st.session_state.pop(_key(router, f"scene_{scene_id}"), None)


def _on_submit(router: Router) -> None:
    _commit_widgets(router)
    try:
        router.submit()
    except ShowDesignError as exc:
        _flash(str(exc))


# ══════════════════════════════════════════════════════════════════════════════
# AUTH
# ══════════════════════════════════════════════════════════════════════════════

def render_auth(router: Router) -> None:
    is_login = st.session_state.setdefault("auth_is_login", True)

    _, middle, _ = st.columns([1, 2, 1])
    with middle:
        st.title("🎺 Show Design Portal")
        st.caption("Design. Arrange. Perform.")
        _show_flash()

        with st.form("auth_form"):
            st.text_input("Email Address", key="auth_email", placeholder="director@school.edu")
            st.form_submit_button(
                "Sign In" if is_login else "Create Account",
                type="primary",
                use_container_width=True,
                on_click=_on_login,
                args=(router,),
            )

        if st.button(
            "Need an account? Register" if is_login else "Have an account? Login",
            key="auth_toggle",
        ):
            st.session_state["auth_is_login"] = not is_login
            st.rerun()


# ══════════════════════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════════════════════

def render_dashboard(router: Router) -> None:
    header, logout_col = st.columns([5, 1])
    with header:
        st.title(f"Welcome, {router.user.name if router.user else 'guest'}")
        st.caption("Manage your show designs")
    with logout_col:
        st.button("Logout", key="logout", on_click=router.logout)

    _show_flash()

    columns = st.columns(3)
    with columns[0]:
        with st.container(border=True):
            st.markdown("### 📅 Start New Design")
            st.button(
                "➕ Start New Design",
                type="primary",
                key="start_new",
                use_container_width=True,
                on_click=router.start_new,
            )

    for index, (show, card) in enumerate(zip(router.shows, dashboard_cards(router.shows)), start=1):
        with columns[index % 3]:
            with st.container(border=True):
                badge = "🔒 :green[Signed]" if card.is_signed else ":orange[Draft]"
                st.markdown(f"`{card.year}` &nbsp; {badge}")
                st.markdown(f"### {card.title}")
                st.caption(card.synopsis)
                st.divider()
                st.markdown(card.due)
                left, right = st.columns(2)
                left.button(
                    "Open",
                    key=f"edit_{card.show_id}",
                    use_container_width=True,
                    on_click=router.edit,
                    args=(card.show_id,),
                )
                right.download_button(
                    label="⬇️ Brief",
                    data=show.summary(),
                    file_name=brief_filename(show),
                    mime="text/plain",
                    key=f"dl_{card.show_id}",
                    use_container_width=True,
                )


# ══════════════════════════════════════════════════════════════════════════════
# WIZARD — one render function per step
# ══════════════════════════════════════════════════════════════════════════════

def _step_ensemble(router: Router) -> None:
    wizard = router.wizard
    left, right = st.columns(2)
    with left:
        _text(router, "Total Band Size", "band_size")
    with right:
        key = _seed(router, "year", int(wizard.design.year))
        st.number_input("Season Year", min_value=1900, max_value=2200, step=1,
                        key=key, disabled=wizard.read_only)
    _text(router, "Projected Instrumentation", "instrumentation", area=True,
          placeholder="e.g. 12 Flutes, 24 Clarinets, 4 Tubas...")
    left, right = st.columns(2)
    with left:
        _text(router, ":green[Strongest Sections]", "strongest_sections", area=True)
    with right:
        _text(router, ":red[Weakest Sections]", "weakest_sections", area=True)


def _step_parameters(router: Router) -> None:
    wizard = router.wizard
    try:
        due = date.fromisoformat(wizard.design.date_needed)
    except ValueError:
        due = None
    key = _seed(router, "date_needed", due)
    st.date_input("Date Music Needed By", key=key, disabled=wizard.read_only)

    left, right = st.columns(2)
    with left:
        _text(router, ":green[Things to Include]", "includes", area=True,
              placeholder="Specific quotes, visual ideas, props...")
    with right:
        _text(router, ":red[Things to Avoid]", "avoids", area=True,
              placeholder="Certain keys, difficult techniques, clichés...")


def _step_concept(router: Router) -> None:
    wizard = router.wizard
    label_col, button_col = st.columns([4, 1])
    with button_col:
        st.button("🪄 AI Suggest", key="gen_title", disabled=wizard.read_only,
                  on_click=_on_generate_title, args=(router,))
    with label_col:
        _text(router, "Show Name", "title")

    _text(router, "Synopsis", "synopsis", area=True,
          placeholder="Brief summary of the show's theme...")

    label_col, button_col = st.columns([4, 1])
    with button_col:
        st.button("🪄 AI Generate", key="gen_narrative", disabled=wizard.read_only,
                  on_click=_on_generate_narrative, args=(router,))
    with label_col:
        _text(router, "Narrative (Story Flow)", "narrative", area=True, height=140)

    left, right = st.columns(2)
    with left:
        _text(router, "Overall Mood (Emotion)", "mood")
    with right:
        _text(router, "Featured Soloists", "soloists")


def _step_big_moment(router: Router) -> None:
    st.warning(PromptRegistry.get("big_moment_callout"), icon="⚠️")
    _text(router, "The Big Moment", "big_moment", area=True, height=260,
          placeholder="Describe the climax/anchor of the show here...",
          label_visibility="collapsed")


def _step_scenes(router: Router) -> None:
    wizard = router.wizard
    st.button("➕ Add Scene", key="add_scene", disabled=wizard.read_only,
              on_click=_on_add_scene, args=(router,))
    st.caption("Describe the action page-by-page or movement-by-movement.")

    if not wizard.design.scenes:
        st.info("No scenes added yet.")
        return

    for number, scene in enumerate(wizard.design.scenes, start=1):
        with st.container(border=True):
            title_col, remove_col = st.columns([5, 1])
            title_col.markdown(f"**Scene {number}**")
            remove_col.button(
                "Remove", key=f"remove_scene_{scene.id}", disabled=wizard.read_only,
                on_click=_on_remove_scene, args=(router, scene.id),
            )
            key = _seed(router, f"scene_{scene.id}", scene.desc)
            st.text_area(
                f"Scene {number}", key=key, disabled=wizard.read_only,
                placeholder="What happens in this scene?", label_visibility="collapsed",
            )


def _step_songs(router: Router) -> None:
    st.error(PromptRegistry.get("songs_warning"), icon="⚠️")
    _text(router, "Songs", "songs", area=True, height=260,
          placeholder="List all desired songs, specific arrangements, or public domain works...",
          label_visibility="collapsed")


def _step_agreement(router: Router) -> None:
    wizard = router.wizard
    with st.container(border=True):
        st.markdown("#### The Rewrite Policy")
        st.markdown(PromptRegistry.get("rewrite_policy"))

    key = _seed(router, "signed", wizard.design.signed)
    st.checkbox(PromptRegistry.get("agreement_label"), key=key, disabled=wizard.read_only)


_STEP_RENDERERS = {
    1: _step_ensemble,
    2: _step_parameters,
    3: _step_concept,
    4: _step_big_moment,
    5: _step_scenes,
    6: _step_songs,
    7: _step_agreement,
}


def render_wizard(router: Router) -> None:
    _commit_widgets(router)
    wizard = router.wizard

    header, exit_col = st.columns([5, 1])
    with header:
        st.title(wizard.heading)
        st.caption(f"Step {wizard.step} of {TOTAL_STEPS}")
    with exit_col:
        st.button("Exit", key="wizard_exit", on_click=router.cancel_and_return)

    st.progress(wizard.progress)

    if wizard.read_only:
        st.info(PromptRegistry.get("design_locked"), icon="🔒")
    _show_flash()

    st.subheader(wizard.step_title)
    _STEP_RENDERERS[wizard.step](router)

    st.divider()
    back_col, _, forward_col = st.columns([1, 3, 1])
    back_col.button("◀ Previous", key="wizard_prev", disabled=wizard.is_first_step,
                    on_click=_on_step, args=(router, False), use_container_width=True)
    if not wizard.is_last_step:
        forward_col.button("Next Step ▶", key="wizard_next", type="primary",
                           on_click=_on_step, args=(router, True), use_container_width=True)
    elif not wizard.read_only:
        forward_col.button("💾 Submit Design", key="wizard_submit",
                           type="primary" if wizard.design.signed else "secondary",
                           on_click=_on_submit, args=(router,), use_container_width=True)


# ── Main ──────────────────────────────────────────────────────────────────────

router = get_router()

if router.view == VIEW_WIZARD and router.wizard is not None:
    render_wizard(router)
elif router.view == VIEW_DASHBOARD:
    render_dashboard(router)
else:
    render_auth(router)

"""State machines for back-office workflows.

Deterministic state machines that define valid state transitions
for the catalog view and the product editor. Every transition is an
explicit event; nothing is recomputed implicitly.
"""

from enum import Enum

from backoffice.domain.exceptions import InvalidStateTransitionError


# ============================================================================
# Catalog View State Machine
# ============================================================================


class ViewStatus(str, Enum):
    """Catalog view lifecycle states.

    State diagram:
        LOADING ───────────► READY
          │   ▲               │
          │   └───── reload ──┤
          │                   │
          ▼                   │
        LOAD_ERROR ◄──────────┘ (via LOADING)
          │
          └──── reload ────► LOADING
    """

    LOADING = "loading"
    READY = "ready"
    LOAD_ERROR = "load_error"

    def can_transition_to(self, target: "ViewStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _VIEW_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["ViewStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return sorted(_VIEW_TRANSITIONS.get(self, set()), key=lambda s: s.value)


# View state transitions (defined outside enum to avoid Enum restrictions)
_VIEW_TRANSITIONS: dict[ViewStatus, set[ViewStatus]] = {
    # LOADING -> LOADING happens when a newer load supersedes an outstanding one
    ViewStatus.LOADING: {ViewStatus.READY, ViewStatus.LOAD_ERROR, ViewStatus.LOADING},
    ViewStatus.READY: {ViewStatus.LOADING},
    ViewStatus.LOAD_ERROR: {ViewStatus.LOADING},
}


# ============================================================================
# Product Editor State Machine
# ============================================================================


class EditorMode(str, Enum):
    """Product editor modes.

    CLOSED means no draft exists. CREATE and EDIT each hold exactly
    one private draft; only one can be active at a time.
    """

    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"

    def is_open(self) -> bool:
        """Check if a draft is active.

        Returns:
            True for CREATE and EDIT.
        """
        return self != EditorMode.CLOSED

    def can_transition_to(self, target: "EditorMode") -> bool:
        """Check if transition to target mode is valid.

        Args:
            target: Target mode.

        Returns:
            True if transition is valid.
        """
        return target in _EDITOR_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["EditorMode"]:
        """Get list of valid target modes.

        Returns:
            List of modes that can be transitioned to.
        """
        return sorted(_EDITOR_TRANSITIONS.get(self, set()), key=lambda s: s.value)


# An open draft must be closed before another one is opened
_EDITOR_TRANSITIONS: dict[EditorMode, set[EditorMode]] = {
    EditorMode.CLOSED: {EditorMode.CREATE, EditorMode.EDIT},
    EditorMode.CREATE: {EditorMode.CLOSED},
    EditorMode.EDIT: {EditorMode.CLOSED},
}


# ============================================================================
# State Machine Helpers
# ============================================================================


def validate_view_transition(
    view_id: str,
    current_status: ViewStatus,
    target_status: ViewStatus,
) -> None:
    """Validate and raise if a catalog view transition is invalid.

    Args:
        view_id: View identifier for error message.
        current_status: Current view status.
        target_status: Target view status.

    Raises:
        InvalidStateTransitionError: If transition is not valid.
    """
    if not current_status.can_transition_to(target_status):
        raise InvalidStateTransitionError(
            entity_type="CatalogView",
            entity_id=view_id,
            current_state=current_status.value,
            target_state=target_status.value,
            allowed_transitions=[s.value for s in current_status.allowed_transitions()],
        )


def validate_editor_transition(
    editor_id: str,
    current_mode: EditorMode,
    target_mode: EditorMode,
) -> None:
    """Validate and raise if a product editor transition is invalid.

    Args:
        editor_id: Editor identifier for error message.
        current_mode: Current editor mode.
        target_mode: Target editor mode.

    Raises:
        InvalidStateTransitionError: If transition is not valid.
    """
    if not current_mode.can_transition_to(target_mode):
        raise InvalidStateTransitionError(
            entity_type="ProductEditor",
            entity_id=editor_id,
            current_state=current_mode.value,
            target_state=target_mode.value,
            allowed_transitions=[s.value for s in current_mode.allowed_transitions()],
        )

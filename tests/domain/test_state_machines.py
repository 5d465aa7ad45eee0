"""Tests for domain state machines."""

import pytest

from backoffice.domain import EditorMode, ViewStatus
from backoffice.domain.exceptions import InvalidStateTransitionError
from backoffice.domain.state_machines import (
    validate_editor_transition,
    validate_view_transition,
)


class TestViewStatus:
    """Tests for ViewStatus state machine."""

    def test_loading_can_become_ready(self) -> None:
        """LOADING can transition to READY."""
        assert ViewStatus.LOADING.can_transition_to(ViewStatus.READY)

    def test_loading_can_fail(self) -> None:
        """LOADING can transition to LOAD_ERROR."""
        assert ViewStatus.LOADING.can_transition_to(ViewStatus.LOAD_ERROR)

    def test_loading_can_be_superseded(self) -> None:
        """A newer load can start while one is outstanding."""
        assert ViewStatus.LOADING.can_transition_to(ViewStatus.LOADING)

    def test_ready_only_reloads(self) -> None:
        """READY can only go back to LOADING."""
        assert ViewStatus.READY.allowed_transitions() == [ViewStatus.LOADING]
        assert not ViewStatus.READY.can_transition_to(ViewStatus.LOAD_ERROR)

    def test_load_error_recovers_through_loading(self) -> None:
        """LOAD_ERROR cannot jump straight to READY."""
        assert ViewStatus.LOAD_ERROR.can_transition_to(ViewStatus.LOADING)
        assert not ViewStatus.LOAD_ERROR.can_transition_to(ViewStatus.READY)


class TestEditorMode:
    """Tests for EditorMode state machine."""

    def test_closed_is_not_open(self) -> None:
        """CLOSED holds no draft."""
        assert not EditorMode.CLOSED.is_open()
        assert EditorMode.CREATE.is_open()
        assert EditorMode.EDIT.is_open()

    def test_closed_opens_either_way(self) -> None:
        """CLOSED can open for create or edit."""
        assert EditorMode.CLOSED.can_transition_to(EditorMode.CREATE)
        assert EditorMode.CLOSED.can_transition_to(EditorMode.EDIT)

    def test_closed_cannot_close_again(self) -> None:
        """CLOSED -> CLOSED is not a transition."""
        assert not EditorMode.CLOSED.can_transition_to(EditorMode.CLOSED)

    def test_open_editor_only_closes(self) -> None:
        """An open draft must close before another one opens."""
        assert EditorMode.CREATE.allowed_transitions() == [EditorMode.CLOSED]
        assert EditorMode.EDIT.allowed_transitions() == [EditorMode.CLOSED]
        assert not EditorMode.CREATE.can_transition_to(EditorMode.EDIT)
        assert not EditorMode.EDIT.can_transition_to(EditorMode.EDIT)


class TestTransitionValidation:
    """Tests for transition validation helpers."""

    def test_valid_view_transition_passes(self) -> None:
        """Valid transitions don't raise."""
        validate_view_transition("view-1", ViewStatus.READY, ViewStatus.LOADING)

    def test_invalid_view_transition_raises(self) -> None:
        """Invalid transitions raise with context."""
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            validate_view_transition("view-1", ViewStatus.READY, ViewStatus.LOAD_ERROR)

        error = exc_info.value
        assert error.details["entity_type"] == "CatalogView"
        assert error.details["entity_id"] == "view-1"
        assert error.details["current_state"] == "ready"
        assert error.details["target_state"] == "load_error"
        assert error.details["allowed_transitions"] == ["loading"]

    def test_invalid_editor_transition_raises(self) -> None:
        """Closing a closed editor is rejected."""
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            validate_editor_transition("editor-1", EditorMode.CLOSED, EditorMode.CLOSED)

        assert exc_info.value.details["entity_type"] == "ProductEditor"
        assert "Cannot transition ProductEditor(editor-1)" in exc_info.value.message

    def test_switching_open_modes_is_rejected(self) -> None:
        """CREATE cannot jump straight to EDIT."""
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            validate_editor_transition("editor-1", EditorMode.CREATE, EditorMode.EDIT)

        assert exc_info.value.details["allowed_transitions"] == ["closed"]

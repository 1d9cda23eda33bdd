"""Settings editing session with a live preview."""

from __future__ import annotations

import logging

from .binder import PresentationBinder
from .config_model import Configuration, NotificationKind
from .config_sync import ConfigSync, FieldEdit
from .ports import FilePicker, VisualTarget

logger = logging.getLogger(__name__)

PREVIEW_KIND = NotificationKind.COPY


class SettingsController:
    """Routes settings edits through ConfigSync and keeps the preview current.

    Closing keeps the last edit; there is no discard.
    """

    def __init__(
        self,
        config_sync: ConfigSync,
        binder: PresentationBinder,
        preview_target: VisualTarget,
        file_picker: FilePicker | None = None,
    ):
        self._sync = config_sync
        self._binder = binder
        self._preview = preview_target
        self._picker = file_picker
        self.is_open = False
        config_sync.on_commit(self._on_commit)

    def open(self) -> Configuration:
        pending = self._sync.begin_edit()
        self.is_open = True
        self.refresh_preview()
        return pending

    def close(self) -> None:
        self.is_open = False

    def set_theme(self, theme: str) -> Configuration | None:
        return self._sync.mutate_pending(FieldEdit.theme(theme))

    def set_display_time(self, seconds) -> Configuration | None:
        return self._sync.mutate_pending(FieldEdit.display_time(seconds))

    def set_corner(self, corner: str) -> Configuration | None:
        return self._sync.mutate_pending(FieldEdit.corner(corner))

    async def pick_image(self, kind: NotificationKind | str) -> str | None:
        """Ask the picker for an image and store it for ``kind``."""
        kind = NotificationKind.parse(kind)
        if self._picker is None or self._sync.pending is None:
            return None
        selected = await self._picker.pick_image(kind.value)
        if isinstance(selected, (list, tuple)):
            selected = selected[0] if selected else None
        if not selected:
            return None
        self._sync.mutate_pending(FieldEdit.custom_image(kind.value, selected))
        logger.info("Custom %s image set to %s", kind.value, selected)
        return selected

    def image_labels(self) -> dict[str, str]:
        pending = self._sync.pending
        if pending is None:
            return {kind.value: "" for kind in NotificationKind}
        return {kind.value: pending.image_for(kind) for kind in NotificationKind}

    def refresh_preview(self) -> bool:
        pending = self._sync.pending
        if pending is None:
            return False
        return self._binder.render(self._preview, pending, PREVIEW_KIND)

    def _on_commit(self, pending: Configuration) -> None:
        self._binder.render(self._preview, pending, PREVIEW_KIND)

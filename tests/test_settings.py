import asyncio

from clippop.adapters.backend_memory import MemoryBackend
from clippop.core.binder import PresentationBinder
from clippop.core.config_sync import ConfigSync
from clippop.core.settings import SettingsController

from fakes import ManualScheduler, RecordingPicker, RecordingTarget


def _make(stored=None, picker=None):
    backend = MemoryBackend(config=stored if stored is not None else {})
    sync = ConfigSync(backend, ManualScheduler())
    asyncio.run(sync.load())
    preview = RecordingTarget()
    ui = SettingsController(sync, PresentationBinder(), preview, picker)
    return ui, sync, backend, preview


def test_open_begins_edit_and_renders_preview():
    ui, sync, _, preview = _make({"theme": "light"})
    pending = ui.open()
    assert ui.is_open
    assert pending is sync.pending
    assert preview.theme == "light"
    assert preview.message == "Copied!"


def test_each_setter_commits_and_refreshes_preview():
    ui, sync, backend, preview = _make()
    ui.open()

    ui.set_theme("light")
    ui.set_corner("top_right")
    ui.set_display_time(15)

    assert (sync.active.theme, sync.active.corner, sync.active.display_time) == ("light", "top_right", 15)
    assert (preview.theme, preview.corner) == ("light", "top_right")
    assert backend.calls.count("save_config") == 3


def test_pick_image_stores_first_selection():
    picker = RecordingPicker(["/imgs/a.png", "/imgs/b.png"])
    ui, sync, backend, preview = _make({"theme": "custom"}, picker)
    ui.open()

    assert asyncio.run(ui.pick_image("copy")) == "/imgs/a.png"
    assert picker.requests == ["copy"]
    assert sync.active.custom_images["copy"] == "/imgs/a.png"
    assert backend.saved[-1]["custom_images"]["copy"] == "/imgs/a.png"
    assert preview.image.endswith("a.png")
    assert ui.image_labels() == {"copy": "/imgs/a.png", "clear": ""}


def test_cancelled_pick_changes_nothing():
    ui, sync, backend, _ = _make(picker=RecordingPicker(None))
    ui.open()
    assert asyncio.run(ui.pick_image("clear")) is None
    assert sync.active.custom_images["clear"] == ""
    assert "save_config" not in backend.calls


def test_pick_without_picker_is_a_no_op():
    ui, _, _, _ = _make()
    ui.open()
    assert asyncio.run(ui.pick_image("copy")) is None


def test_close_keeps_last_edit():
    ui, sync, _, _ = _make()
    ui.open()
    ui.set_display_time(20)
    ui.close()
    assert not ui.is_open
    assert sync.active.display_time == 20


def test_preview_suppressed_for_custom_theme_without_image():
    ui, _, _, preview = _make()
    ui.open()
    ui.set_theme("custom")
    assert ui.refresh_preview() is False
    assert (preview.image, preview.icon, preview.message) == (None, None, None)

from clippop.core.binder import PresentationBinder, icon_for
from clippop.core.locale import Messages
from clippop.core.normalizer import normalize

from fakes import RecordingTarget


def _binder(table=None):
    return PresentationBinder(Messages(table), resolve_resource=lambda path: f"file://{path}")


def test_builtin_theme_shows_icon_and_message():
    target = RecordingTarget()
    shown = _binder().render(target, normalize({"theme": "light", "corner": "top_left"}), "copy")
    assert shown is True
    assert (target.theme, target.corner) == ("light", "top_left")
    assert target.icon == "copy"
    assert target.message == "Copied!"
    assert target.image is None


def test_clear_kind_uses_clear_icon_and_text():
    target = RecordingTarget()
    _binder().render(target, normalize({}), "clear")
    assert target.icon == "clear"
    assert target.message == "Cleared"


def test_localized_messages_and_fallback():
    binder = _binder({"copied": "コピーしました", "cleared": ""})
    target = RecordingTarget()
    binder.render(target, normalize({}), "copy")
    assert target.message == "コピーしました"
    binder.render(target, normalize({}), "clear")
    assert target.message == "Cleared"


def test_custom_theme_with_image():
    target = RecordingTarget()
    config = normalize({"theme": "custom", "custom_images": {"copy": "/img/copy.png"}})
    assert _binder().render(target, config, "copy") is True
    assert target.image == "file:///img/copy.png"
    assert target.icon is None
    assert target.message is None


def test_custom_theme_without_image_hides_everything():
    target = RecordingTarget()
    config = normalize({"theme": "custom", "custom_images": {"copy": "/img/copy.png"}})
    assert _binder().render(target, config, "clear") is False
    assert (target.image, target.icon, target.message) == (None, None, None)
    assert ("visible", True) not in target.calls


def test_same_binder_drives_two_targets_independently():
    binder = _binder()
    live, preview = RecordingTarget(), RecordingTarget()
    active = normalize({"theme": "dark", "corner": "bottom_left"})
    pending = normalize({"theme": "custom", "custom_images": {"copy": "/p.gif"}})

    binder.render(live, active, "clear")
    binder.render(preview, pending, "copy")

    assert (live.theme, live.corner, live.message) == ("dark", "bottom_left", "Cleared")
    assert (preview.theme, preview.image) == ("custom", "file:///p.gif")


def test_icon_for_unknown_kind_falls_back_to_copy():
    assert icon_for("power") == "power"
    assert icon_for("paste") == "copy"

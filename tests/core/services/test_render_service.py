from ganymede_toolkit.core.exceptions import MarkupParseError
from ganymede_toolkit.core.models import GuideInfo
from ganymede_toolkit.core.nodes import (
    Checkbox,
    CrossGuideStepLink,
    ExternalAnchor,
    HiddenLinkPlaceholder,
    PositionToken,
    ResourceTag,
)
from ganymede_toolkit.core.services import RenderService
import ganymede_toolkit.core.services.render_service as render_service

REGISTRY = {7: GuideInfo(step_count=10, lang="fr"), 8: GuideInfo(step_count=5, lang="fr")}


def test_render_step(collect):
    result = RenderService(guide_registry=REGISTRY).render_step("<p>Go to [1,2]</p>", guide_id=7, step_index=0)
    assert result.success is True
    assert result.message == ""
    (token,) = collect(result.tree, PositionToken)
    assert token.copy_text == "[1,2]"


def test_packaged_whitelist_is_used(collect):
    markup = (
        '<p><a href="https://dofusdb.fr/fr/database">db</a>'
        '<a href="https://evil.example">bad</a></p>'
        '<p>https://evil.example/spam</p>'
    )
    tree = RenderService().render_step(markup).tree
    anchors = collect(tree, ExternalAnchor)
    assert [a.href for a in anchors] == ["https://dofusdb.fr/fr/database"]
    (placeholder,) = collect(tree, HiddenLinkPlaceholder)
    assert placeholder.message == "hidden link"


def test_checked_state_comes_from_progress(progress, collect):
    progress.toggle_checkbox(7, 0, 1)
    service = RenderService(guide_registry=REGISTRY, progress=progress)
    markup = '<input type="checkbox"><input type="checkbox">'

    boxes = collect(service.render_step(markup, 7, 0).tree, Checkbox)
    assert [b.checked for b in boxes] == [False, True]

    other_step = collect(service.render_step(markup, 7, 1).tree, Checkbox)
    assert [b.checked for b in other_step] == [False, False]


def test_saved_progress_drives_resume_links(progress, collect):
    progress.set_current_step(8, 3)
    service = RenderService(guide_registry=REGISTRY, progress=progress)
    markup = '<span data-type="guide-step" guideid="8" stepnumber="1" stepid="0">resume</span>'
    (link,) = collect(service.render_step(markup, 7, 0).tree, CrossGuideStepLink)
    assert link.target_step == 3
    assert link.needs_download is False


def test_auto_travel_copy(collect):
    tree = RenderService(auto_travel_copy=True).render_step("[5,-5]").tree
    (token,) = collect(tree, PositionToken)
    assert token.copy_text == "/travel 5,-5"


def test_disabled_render(collect):
    tree = RenderService(guide_registry=REGISTRY).render_step('<input type="checkbox">', 7, 0, disabled=True).tree
    (box,) = collect(tree, Checkbox)
    assert box.interactive is False


def test_user_overrides_flow_into_context(isolated_config, collect):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "resource_mapping.yml").write_text(
        "quest:\n  123: https://www.dofuspourlesnoobs.com/intro.html\n", encoding="utf-8"
    )
    (isolated_config / "messages.yml").write_text('hidden_link: "lien masqué"\n', encoding="utf-8")

    service = RenderService(guide_registry=REGISTRY)
    markup = (
        '<span data-type="custom-tag" type="quest" name="Intro" dofusdbid="123"><img src="q.png"></span>'
        '<p>https://evil.example</p>'
    )
    tree = service.render_step(markup, 7, 0).tree
    (tag,) = collect(tree, ResourceTag)
    assert tag.mapped_url == "https://www.dofuspourlesnoobs.com/intro.html"
    assert tag.database_url == "https://dofusdb.fr/fr/database/quest/123"
    (placeholder,) = collect(tree, HiddenLinkPlaceholder)
    assert placeholder.message == "lien masqué"


def test_build_context_outside_of_guide():
    ctx = RenderService().build_context()
    assert ctx.current_guide_id is None
    assert ctx.checked_indices == frozenset()
    assert "https://dofusdb.fr" in ctx.whitelist


def test_parse_error_is_reported(monkeypatch):
    def fail(markup):
        raise MarkupParseError("broken", cause=ValueError("bad"))

    monkeypatch.setattr(render_service, "parse_markup", fail)
    result = RenderService().render_step("<p>x</p>", 7, 0)
    assert result.success is False
    assert result.tree is None
    assert result.message
    assert result.details == {"reason": "parse_error", "error_class": "ValueError"}


def test_parse_error_message_is_configurable(isolated_config, monkeypatch):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "messages.yml").write_text(
        'parse_failed: "Étape illisible"\n', encoding="utf-8"
    )

    def fail(markup):
        raise MarkupParseError("broken")

    monkeypatch.setattr(render_service, "parse_markup", fail)
    result = RenderService().render_step("<p>x</p>")
    assert result.message == "Étape illisible"
    assert result.details["error_class"] is None

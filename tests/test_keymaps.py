import pytest

from cursor_undo.keymaps import (
    DEFAULT_BINDINGS,
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeymapResolver,
    KeySequence,
    KeyStroke,
    WhenClause,
    load_default_keymaps,
)


def make_action(action_id: str = "test.action") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    keys: str = "ctrl+k ctrl+u",
    action_id: str = "test.action",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def test_keystroke_parse_normalizes_modifier_order() -> None:
    stroke = KeyStroke.parse("Shift+Ctrl+J")

    assert stroke.token == "ctrl+shift+j"
    assert KeyStroke("u", ("ctrl",)).token == "ctrl+u"


def test_when_clause_parse_negation() -> None:
    clause = WhenClause.parse("!panel_open")

    assert clause.expected is False
    assert clause.evaluate({}) is True
    assert clause.evaluate({"panel_open": True}) is False


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="first"))

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(make_binding(binding_id="second"))

    assert [b.id for b in info.value.conflicts] == ["first"]


def test_bindings_in_exclusive_contexts_coexist() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="default"))
    registry.register_binding(
        make_binding(binding_id="focused", when=(WhenClause("text_input_focus"),))
    )
    registry.register_binding(
        make_binding(binding_id="unfocused", when=(WhenClause.parse("!text_input_focus"),))
    )

    assert registry.stats().binding_count == 3


def test_register_binding_with_replace_drops_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="old"))

    registry.register_binding(make_binding(binding_id="new"), replace=True)

    assert [b.id for b in registry.iter_bindings()] == ["new"]


def test_duplicate_action_rejected_without_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())


def test_unregister_binding_bumps_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="b"))
    revision = registry.revision()

    removed = registry.unregister_binding("b")

    assert removed is not None and removed.id == "b"
    assert registry.revision() > revision
    assert registry.unregister_binding("b") is None


def test_resolver_reports_pending_then_match() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="chord"))
    resolver = KeymapResolver(registry)

    pending = resolver.resolve(["ctrl+k"])
    match = resolver.resolve(["ctrl+k", "ctrl+u"])
    miss = resolver.resolve(["ctrl+x"])

    assert pending.status == "pending"
    assert match.status == "match"
    assert match.match is not None and match.match.binding.id == "chord"
    assert miss.status == "miss"


def test_resolver_prefers_priority_then_specific_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action("generic"))
    registry.register_action(make_action("focused"))
    registry.register_binding(
        make_binding(binding_id="generic", keys="ctrl+u", action_id="generic")
    )
    registry.register_binding(
        make_binding(
            binding_id="focused",
            keys="ctrl+u",
            action_id="focused",
            when=(WhenClause("text_input_focus"),),
        )
    )
    resolver = KeymapResolver(registry)

    focused = resolver.resolve(["ctrl+u"], context={"text_input_focus": True})
    unfocused = resolver.resolve(["ctrl+u"], context={})

    assert focused.match is not None and focused.match.action.id == "focused"
    assert unfocused.match is not None and unfocused.match.action.id == "generic"


def test_resolver_picks_up_registry_changes() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    resolver = KeymapResolver(registry)
    assert resolver.resolve(["ctrl+u"]).status == "miss"

    registry.register_binding(make_binding(binding_id="late", keys="ctrl+u"))

    assert resolver.resolve(["ctrl+u"]).status == "match"


def test_default_keymaps_bind_soft_undo_and_redo() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    focused = {"text_input_focus": True}

    undo = resolver.resolve(["ctrl+u"], context=focused)
    redo = resolver.resolve(["ctrl+shift+j"], context=focused)

    assert undo.match is not None and undo.match.action.id == "cursor.undo"
    assert undo.match.action.label == "Soft Undo"
    assert redo.match is not None and redo.match.action.id == "cursor.redo"
    assert redo.match.action.label == "Soft Redo"
    assert resolver.resolve(["ctrl+u"], context={}).status == "miss"


def test_default_keymaps_can_exclude_bindings() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=[DEFAULT_BINDINGS[1].id])

    assert registry.stats().binding_count == 1
    assert registry.stats().action_count == 2

"""Dataclasses describing key bindings and the actions they trigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIER_ORDER = ("ctrl", "alt", "shift", "meta")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    known = [m for m in MODIFIER_ORDER if m in values]
    extra = sorted(values.difference(MODIFIER_ORDER))
    return tuple(known + extra)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One chord, e.g. ``ctrl+shift+j``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, chord: str) -> "KeyStroke":
        parts = [part for part in chord.strip().split("+") if part]
        if not parts:
            raise ValueError(f"Cannot parse key chord '{chord}'")
        return cls(parts[-1], tuple(parts[:-1]))

    @property
    def token(self) -> str:
        return "+".join(self.modifiers + (self.key,))


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Ordered chords that must be pressed in turn."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def parse(cls, text: str) -> "KeySequence":
        """Parse space separated chords such as ``"ctrl+k ctrl+u"``."""

        return cls(tuple(KeyStroke.parse(chord) for chord in text.split()))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Context flag a binding requires (``flag``) or forbids (``!flag``)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:].strip(), False)
        return cls(expr, True)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A command the host can invoke by id or through a binding."""

    id: str
    handler: Callable[..., object]
    label: str = ""
    alias: str = ""
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if not self.label:
            object.__setattr__(self, "label", self.id)
        if not self.alias:
            object.__setattr__(self, "alias", self.label)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence with an action, gated by ``when`` clauses."""

    id: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0
    source: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        normalized = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", normalized)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
]

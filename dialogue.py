from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Union


@dataclass(frozen=True)
class NameChange:
    handle: str
    name: str


@dataclass(frozen=True)
class Phrase:
    speakers: tuple[str, ...]
    text: str


@dataclass(frozen=True)
class ChoiceOption:
    text: str
    label: str


@dataclass(frozen=True)
class Choice:
    options: tuple[ChoiceOption, ...]


@dataclass(frozen=True)
class Jump:
    label: str


Instruction = Union[NameChange, Phrase, Choice, Jump]


class Dialogue:
    """A compiled script: instructions in program order plus label -> index."""

    def __init__(self, entries=(), labels=None):
        self._entries = tuple(entries)
        self._labels = MappingProxyType(dict(labels or {}))

    @classmethod
    def example(cls) -> Dialogue:
        """Built-in demo dialogue."""
        entries = [
            NameChange("m", "Maria"),
            NameChange("l", "Leon"),
            Phrase((), "This is a phrase told by... well, nobody."),
            Phrase(("m",), "Hello, my name is Maria!"),
            Phrase(("l",), "Hello, my name is Leon."),
            Phrase(("m", "l"), "And we can talk together as well!"),
            Phrase(("m",), "Now, you pick where to go!"),
            Choice((ChoiceOption("I pick A", "a"), ChoiceOption("I pick B", "b"))),
            Phrase(("m",), "Excellent choice!"),
            Jump("last"),
            Phrase(("l",), "Certainly better choice."),
            Phrase(("l", "m"), "Now, last choice... well, you only have one."),
            Choice((ChoiceOption("Byeee!", "end"),)),
            Phrase(("m",), "Goodbye!"),
        ]
        labels = {"a": 8, "b": 10, "last": 11, "end": 13}
        return cls(entries, labels)

    def get(self, index: int) -> Instruction | None:
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def label(self, name: str) -> int | None:
        return self._labels.get(name)

    @property
    def entries(self) -> tuple[Instruction, ...]:
        return self._entries

    @property
    def labels(self) -> Mapping[str, int]:
        return self._labels

    def len(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def label_count(self) -> int:
        return len(self._labels)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Instruction:
        return self._entries[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dialogue):
            return NotImplemented
        return self._entries == other._entries and dict(self._labels) == dict(other._labels)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Dialogue({len(self._entries)} instructions, {len(self._labels)} labels)"

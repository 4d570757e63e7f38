from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union


@dataclass(frozen=True)
class BulletRow:
    text: str
    kind: Literal["bullet"] = field(default="bullet", init=False)


@dataclass(frozen=True)
class KeyValueRow:
    key: str
    value: str
    kind: Literal["key_value"] = field(default="key_value", init=False)


@dataclass(frozen=True)
class ProseRow:
    text: str
    kind: Literal["prose"] = field(default="prose", init=False)


Row = Union[BulletRow, KeyValueRow, ProseRow]


@dataclass(frozen=True)
class Section:
    """
    One blank-line delimited block of generator output.
    ``title`` is the first line, verbatim.
    """

    title: str
    rows: List[Row] = field(default_factory=list)

    def get(self, key: str) -> Optional[str]:
        for row in self.rows:
            if isinstance(row, KeyValueRow) and row.key == key:
                return row.value
        return None


@dataclass(frozen=True)
class Translation:
    language_label: str
    sections: List[Section] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedDocument:
    """
    Derived view of a stored analysis. Recomputed on every render,
    never persisted.
    """

    primary: List[Section] = field(default_factory=list)
    translation: Optional[Translation] = None

    @property
    def has_translation(self) -> bool:
        return self.translation is not None

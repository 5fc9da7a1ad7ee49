"""
楽曲フィールドの変更種別。

任意キーの部分更新ではなく、変更の種類ごとに型を分ける。
履歴ラベル ("Updated lyrics" など) は型から決まる。
"""
from dataclasses import dataclass
from typing import ClassVar, List, Sequence, Union

from domain.constants import PROGRESS_STAGES

@dataclass(frozen=True)
class TitleChanged:
    value: str
    field: ClassVar[str] = "title"

@dataclass(frozen=True)
class LyricsChanged:
    value: str
    field: ClassVar[str] = "lyrics"

@dataclass(frozen=True)
class NotesChanged:
    value: str
    field: ClassVar[str] = "notes"

@dataclass(frozen=True)
class ProgressChanged:
    value: str
    field: ClassVar[str] = "progress"

    def __post_init__(self):
        if self.value not in PROGRESS_STAGES:
            raise ValueError(f"Unknown progress stage: {self.value}")

@dataclass(frozen=True)
class OriginChanged:
    value: str
    field: ClassVar[str] = "origin"

SongMutation = Union[TitleChanged, LyricsChanged, NotesChanged, ProgressChanged, OriginChanged]

MUTATION_TYPES = (TitleChanged, LyricsChanged, NotesChanged, ProgressChanged, OriginChanged)

# 変更種別 -> ラベル用の名称 (各型の field から作る)
CHANGE_NAMES = {mutation_type: mutation_type.field for mutation_type in MUTATION_TYPES}

def describe_changes(mutations: Sequence[SongMutation]) -> str:
    """
    変更リストから履歴ラベルを作る。
    同じ種別が複数あっても1回だけ、最初に現れた順で並べる。
    """
    names: List[str] = []
    for mutation in mutations:
        try:
            name = CHANGE_NAMES[type(mutation)]
        except KeyError:
            raise TypeError(f"Unsupported song mutation: {mutation!r}")
        if name not in names:
            names.append(name)
    if not names:
        raise ValueError("No mutations to describe")
    return "Updated " + ", ".join(names)

def mutations_from_fields(**fields) -> List[SongMutation]:
    """
    API層の部分更新 (None は未指定扱い) を変更リストに変換する。
    """
    builders = {name: mutation_type for mutation_type, name in CHANGE_NAMES.items()}
    mutations: List[SongMutation] = []
    for key, value in fields.items():
        if value is None:
            continue
        if key not in builders:
            raise TypeError(f"Unknown song field: {key}")
        mutations.append(builders[key](value))
    return mutations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Set

from .Tag import Tag


def _value(value: Any) -> str:
    # tag sem valor no YAML (`Owner:`) vira "", nunca "None"
    return "" if value is None else str(value)


@dataclass
class TagSet:
    """
    Representação interna canônica de tags.
    Independente de como cada API da AWS quer receber essas tags.

    Semanticamente é um conjunto: dois Tag com mesma key e value são a mesma tag.
    """

    tags: List[Tag] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "TagSet":
        return cls([Tag(key=str(k), value=_value(v)) for k, v in (data or {}).items()])

    @classmethod
    def from_aws(cls, data: List[Dict[str, Any]] | None) -> "TagSet":
        """
        Converte o formato da AWS [{"Key": ..., "Value": ...}] em TagSet.
        Duplicatas exatas (mesmo Key e Value) são descartadas.
        """
        seen: Set[Tag] = set()
        tags: List[Tag] = []
        for item in data or []:
            tag = Tag(key=str(item["Key"]), value=_value(item.get("Value")))
            if tag not in seen:
                seen.add(tag)
                tags.append(tag)
        return cls(tags)

    @classmethod
    def from_any(cls, data: Any) -> "TagSet":
        """
        Aceita vários formatos de tags:
        - None/vazio -> TagSet vazio
        - TagSet -> ele mesmo
        - dict[str, str]
        - List[{"Key": ..., "Value": ...}]
        """
        if not data:
            return cls()
        if isinstance(data, TagSet):
            return data
        if isinstance(data, dict):
            return cls.from_dict(data)
        if isinstance(data, list):
            return cls.from_aws(data)
        raise TypeError(f"Formato de tags não suportado: {type(data)!r}")

    def to_dict(self) -> Dict[str, str]:
        return {t.key: t.value for t in self.tags}

    def to_aws(self) -> List[Dict[str, str]]:
        # ordem estável para o request e para os stubs de teste
        ordered = sorted(self.as_set(), key=lambda t: (t.key, t.value))
        return [t.to_aws() for t in ordered]

    def keys(self) -> Set[str]:
        return {t.key for t in self.tags}

    def as_set(self) -> Set[Tag]:
        return set(self.tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)

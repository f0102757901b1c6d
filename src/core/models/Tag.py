from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Tag:
    """
    Par key/value imutável. Hashable, então set de Tag compara key E value.
    """

    key: str
    value: str

    def to_aws(self) -> Dict[str, str]:
        return {"Key": self.key, "Value": self.value}

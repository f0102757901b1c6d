from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class UpdateRunResult:
    """
    Resultado de um update de StackSet, independente de dry-run.
    """

    stack_set_id: str
    active_tags: Dict[str, str]
    previous_tags: Dict[str, str]
    template_tags: Dict[str, str]
    tags_to_set: Dict[str, str]
    request: Dict[str, Any]
    dry_run: bool
    operation_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stack_set_id": self.stack_set_id,
            "dry_run": self.dry_run,
            **({"operation_id": self.operation_id} if self.operation_id else {}),
            "tags": {
                "active": self.active_tags,
                "previous": self.previous_tags,
                "template": self.template_tags,
                "final": self.tags_to_set,
            },
            "request": self.request,
        }

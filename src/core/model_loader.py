from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jinja2 import Environment, StrictUndefined

from .models import ResourceModel, ResourceModelError, TagSet


env = Environment(undefined=StrictUndefined)


def _read_document(path: str | Path, ctx: Optional[Dict[str, Any]] = None) -> Any:
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResourceModelError(f"Não foi possível ler {path}: {e}") from e

    # placeholders {{ var }} são resolvidos antes do parse
    if ctx is not None:
        content = env.from_string(content).render(**ctx)

    # Suporta YAML e JSON (YAML já é superset)
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ResourceModelError(f"Arquivo inválido {path}: {e}") from e


def load_model(path: str | Path, ctx: Optional[Dict[str, Any]] = None) -> ResourceModel:
    """
    Carrega o resource model do StackSet. Aceita as propriedades direto na raiz
    ou dentro de "Properties", como num template do CloudFormation:

    Properties:
      StackSetName: minha-stackset
      PermissionModel: SERVICE_MANAGED
      Tags:
        - Key: Owner
          Value: "{{ owner }}"
    """
    data = _read_document(path, ctx or {})
    if isinstance(data, dict) and isinstance(data.get("Properties"), dict):
        data = data["Properties"]
    if not isinstance(data, dict):
        raise ResourceModelError(f"{path} não contém um resource model (esperado um objeto)")
    return ResourceModel.from_dict(data)


def load_tags(path: str | Path) -> TagSet:
    """
    Lê um arquivo de tags: dict {Key: Value} ou lista [{"Key": ..., "Value": ...}].
    Arquivo vazio == nenhuma tag.
    """
    data = _read_document(path)
    try:
        return TagSet.from_any(data)
    except (TypeError, KeyError) as e:
        raise ResourceModelError(f"Tags inválidas em {path}: {e}") from e

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from jinja2 import TemplateError

from core.model_loader import load_model
from core.models import ResourceModel, ResourceModelError


def load_vars(vars_json: Optional[str]) -> Dict[str, Any]:
    """
    Carrega as variáveis do resource model a partir de JSON inline.
    """
    if vars_json is None:
        return {}
    try:
        data = json.loads(vars_json)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"--vars não é um JSON válido: {e}") from e
    if not isinstance(data, dict):
        raise typer.BadParameter("--vars precisa ser um objeto JSON.")
    return data


def load_model_or_fail(path: Path, ctx: Dict[str, Any]) -> ResourceModel:
    try:
        return load_model(path, ctx)
    except (ResourceModelError, TemplateError) as e:
        raise typer.BadParameter(str(e)) from e

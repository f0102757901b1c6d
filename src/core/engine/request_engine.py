import dataclasses
import logging
from typing import Any, Callable, Dict, List, Optional

from ..models import ResourceModel
from ..translator import request_translator as rt


logger = logging.getLogger(__name__)


def _require(value: Optional[str], option: str, operation: str) -> str:
    if not value:
        raise ValueError(f"A operação '{operation}' precisa de {option}.")
    return value


def _stack_set_name(model: ResourceModel, operation: str) -> str:
    return _require(model.identifier, "StackSetName ou StackSetId no resource model", operation)


def _instances(builder: Callable[..., Dict[str, Any]]) -> Callable[..., List[Dict[str, Any]]]:
    """
    Operações de stack instances geram um request por item de StackInstancesGroup.
    """

    def render(model: ResourceModel, operation: str, **_: Any) -> List[Dict[str, Any]]:
        name = _stack_set_name(model, operation)
        return [
            builder(name, model.operation_preferences, group, model.call_as)
            for group in model.stack_instances_group
        ]

    return render


def _create_stack_set(model: ResourceModel, operation: str, request_token: Optional[str] = None, **_: Any):
    _require(model.stack_set_name, "StackSetName no resource model", operation)
    return [rt.create_stack_set_request(model, request_token, model.tags.to_dict() or None)]


def _delete_stack_set(model: ResourceModel, operation: str, **_: Any):
    return [rt.delete_stack_set_request(_stack_set_name(model, operation), model.call_as)]


def _update_managed_execution(model: ResourceModel, operation: str, **_: Any):
    if model.stack_set_id is None:
        # sem StackSetId o nome serve de identificador
        model = dataclasses.replace(model, stack_set_id=_stack_set_name(model, operation))
    return [rt.update_managed_execution_request(model)]


def _list_stack_sets(model: ResourceModel, operation: str, next_token: Optional[str] = None, **_: Any):
    return [rt.list_stack_sets_request(next_token)]


def _list_stack_instances(model: ResourceModel, operation: str, next_token: Optional[str] = None, **_: Any):
    return [rt.list_stack_instances_request(next_token, _stack_set_name(model, operation), model.call_as)]


def _describe_stack_set(model: ResourceModel, operation: str, **_: Any):
    return [rt.describe_stack_set_request(_stack_set_name(model, operation), model.call_as)]


def _describe_stack_instance(
    model: ResourceModel,
    operation: str,
    account: Optional[str] = None,
    stack_region: Optional[str] = None,
    **_: Any,
):
    return [
        rt.describe_stack_instance_request(
            _require(account, "--account", operation),
            _require(stack_region, "--stack-region", operation),
            _stack_set_name(model, operation),
            model.call_as,
        )
    ]


def _describe_stack_set_operation(
    model: ResourceModel, operation: str, operation_id: Optional[str] = None, **_: Any
):
    return [
        rt.describe_stack_set_operation_request(
            _stack_set_name(model, operation),
            _require(operation_id, "--operation-id", operation),
            model.call_as,
        )
    ]


def _get_template_summary(model: ResourceModel, operation: str, **_: Any):
    if not model.template_body and not model.template_url:
        raise ValueError(f"A operação '{operation}' precisa de TemplateBody ou TemplateURL no resource model.")
    return [rt.get_template_summary_request(model.template_body, model.template_url)]


def _list_stack_set_operation_results(
    model: ResourceModel,
    operation: str,
    next_token: Optional[str] = None,
    operation_id: Optional[str] = None,
    **_: Any,
):
    return [
        rt.list_stack_set_operation_results_request(
            next_token,
            _stack_set_name(model, operation),
            _require(operation_id, "--operation-id", operation),
            model.call_as,
        )
    ]


OPERATIONS: Dict[str, Callable[..., List[Dict[str, Any]]]] = {
    "create-stack-set": _create_stack_set,
    "create-stack-instances": _instances(rt.create_stack_instances_request),
    "update-stack-instances": _instances(rt.update_stack_instances_request),
    "delete-stack-instances": _instances(rt.delete_stack_instances_request),
    "delete-stack-set": _delete_stack_set,
    "update-managed-execution": _update_managed_execution,
    "list-stack-sets": _list_stack_sets,
    "list-stack-instances": _list_stack_instances,
    "describe-stack-set": _describe_stack_set,
    "describe-stack-instance": _describe_stack_instance,
    "describe-stack-set-operation": _describe_stack_set_operation,
    "get-template-summary": _get_template_summary,
    "list-stack-set-operation-results": _list_stack_set_operation_results,
}


def render_requests(
    operation: str,
    model: ResourceModel,
    *,
    next_token: str | None = None,
    operation_id: str | None = None,
    account: str | None = None,
    stack_region: str | None = None,
    request_token: str | None = None,
) -> List[Dict[str, Any]]:
    """
    Monta, sem chamar a AWS, os requests de uma operação para o resource model.
    update-stack-set fica de fora: ele depende das tags ativas (ver stackset_engine).
    """
    operation = operation.lower()
    handler = OPERATIONS.get(operation)
    if handler is None:
        raise ValueError(
            f"Operação desconhecida: '{operation}'. Use uma de: {', '.join(sorted(OPERATIONS))}."
        )

    requests = handler(
        model,
        operation,
        next_token=next_token,
        operation_id=operation_id,
        account=account,
        stack_region=stack_region,
        request_token=request_token,
    )
    logger.debug("Rendered %d request(s) for %s", len(requests), operation)
    return requests

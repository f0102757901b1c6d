"""
Monta os requests (kwargs do boto3) da API do CloudFormation a partir do
resource model do StackSet.

Cada função só copia campos: opcional ausente some do request, enums passam
como string. A única lógica de verdade é a reconciliação de tags no update.
"""

from typing import Any, Dict, Optional

from ..models import OperationPreferences, ResourceModel, StackInstances, TagSet
from ..reconcile import reconcile_tags
from .property_translator import (
    compact,
    translate_to_sdk_auto_deployment,
    translate_to_sdk_deployment_targets,
    translate_to_sdk_managed_execution,
    translate_to_sdk_operation_preferences,
    translate_to_sdk_parameters,
    translate_to_sdk_tags,
)


LIST_MAX_ITEMS = 100
ACTIVE = "ACTIVE"


def create_stack_set_request(
    model: ResourceModel,
    request_token: Optional[str],
    tags: Optional[Dict[str, str]],
) -> Dict[str, Any]:
    return compact(
        {
            "StackSetName": model.stack_set_name,
            "AdministrationRoleARN": model.administration_role_arn,
            "AutoDeployment": translate_to_sdk_auto_deployment(model.auto_deployment),
            "ClientRequestToken": request_token,
            "PermissionModel": model.permission_model,
            "Capabilities": model.capabilities,
            "Description": model.description,
            "ExecutionRoleName": model.execution_role_name,
            "Parameters": translate_to_sdk_parameters(model.parameters),
            "Tags": translate_to_sdk_tags(tags),
            "TemplateBody": model.template_body,
            "TemplateURL": model.template_url,
            "CallAs": model.call_as,
            "ManagedExecution": translate_to_sdk_managed_execution(model.managed_execution),
        }
    )


def _stack_instances_request(
    stack_set_name: str,
    operation_preferences: Optional[OperationPreferences],
    stack_instances: StackInstances,
    call_as: Optional[str],
) -> Dict[str, Any]:
    return compact(
        {
            "StackSetName": stack_set_name,
            "Regions": stack_instances.regions,
            "OperationPreferences": translate_to_sdk_operation_preferences(operation_preferences),
            "DeploymentTargets": translate_to_sdk_deployment_targets(stack_instances.deployment_targets),
            "ParameterOverrides": translate_to_sdk_parameters(stack_instances.parameter_overrides),
            "CallAs": call_as,
        }
    )


def create_stack_instances_request(
    stack_set_name: str,
    operation_preferences: Optional[OperationPreferences],
    stack_instances: StackInstances,
    call_as: Optional[str],
) -> Dict[str, Any]:
    return _stack_instances_request(stack_set_name, operation_preferences, stack_instances, call_as)


def update_stack_instances_request(
    stack_set_name: str,
    operation_preferences: Optional[OperationPreferences],
    stack_instances: StackInstances,
    call_as: Optional[str],
) -> Dict[str, Any]:
    return _stack_instances_request(stack_set_name, operation_preferences, stack_instances, call_as)


def delete_stack_set_request(stack_set_name: str, call_as: Optional[str]) -> Dict[str, Any]:
    return compact({"StackSetName": stack_set_name, "CallAs": call_as})


def delete_stack_instances_request(
    stack_set_name: str,
    operation_preferences: Optional[OperationPreferences],
    stack_instances: StackInstances,
    call_as: Optional[str],
) -> Dict[str, Any]:
    # RetainStacks é obrigatório na API; apagar a instância apaga a stack
    return compact(
        {
            "StackSetName": stack_set_name,
            "Regions": stack_instances.regions,
            "OperationPreferences": translate_to_sdk_operation_preferences(operation_preferences),
            "DeploymentTargets": translate_to_sdk_deployment_targets(stack_instances.deployment_targets),
            "RetainStacks": False,
            "CallAs": call_as,
        }
    )


def update_stack_set_request(
    model: ResourceModel,
    previous_tags: Any,
    tags: Any,
    current_tags: Any,
) -> Dict[str, Any]:
    """
    Request de UpdateStackSet com as tags já reconciliadas.

    - previous_tags: tags do template no último apply
    - tags: tags do template agora
    - current_tags: tags ativas no StackSet (lidas via DescribeStackSet)

    Aceita dict, lista no formato AWS, TagSet ou None (== vazio).
    """
    tags_to_set = reconcile_tags(
        active=TagSet.from_any(current_tags),
        previous_template=TagSet.from_any(previous_tags),
        new_template=TagSet.from_any(tags),
    )

    request = compact(
        {
            "StackSetName": model.stack_set_id,
            "AdministrationRoleARN": model.administration_role_arn,
            "AutoDeployment": translate_to_sdk_auto_deployment(model.auto_deployment),
            "OperationPreferences": translate_to_sdk_operation_preferences(model.operation_preferences),
            "Capabilities": model.capabilities,
            "Description": model.description,
            "ExecutionRoleName": model.execution_role_name,
            "Parameters": translate_to_sdk_parameters(model.parameters),
            "TemplateURL": model.template_url,
            "TemplateBody": model.template_body,
            "CallAs": model.call_as,
        }
    )
    # lista vazia remove todas as tags, então nunca omitir
    request["Tags"] = tags_to_set.to_aws()
    return request


def update_managed_execution_request(model: ResourceModel) -> Dict[str, Any]:
    # roles e capabilities vão junto caso o create tenha usado roles customizadas
    return compact(
        {
            "StackSetName": model.stack_set_id,
            "ManagedExecution": translate_to_sdk_managed_execution(model.managed_execution),
            "AdministrationRoleARN": model.administration_role_arn,
            "ExecutionRoleName": model.execution_role_name,
            "Capabilities": model.capabilities,
            "UsePreviousTemplate": True,
            "CallAs": model.call_as,
        }
    )


def list_stack_sets_request(next_token: Optional[str]) -> Dict[str, Any]:
    return compact(
        {
            "MaxResults": LIST_MAX_ITEMS,
            "NextToken": next_token,
            "Status": ACTIVE,
        }
    )


def list_stack_instances_request(
    next_token: Optional[str],
    stack_set_name: str,
    call_as: Optional[str],
) -> Dict[str, Any]:
    return compact(
        {
            "MaxResults": LIST_MAX_ITEMS,
            "NextToken": next_token,
            "StackSetName": stack_set_name,
            "CallAs": call_as,
        }
    )


def describe_stack_set_request(stack_set_id: str, call_as: Optional[str]) -> Dict[str, Any]:
    return compact({"StackSetName": stack_set_id, "CallAs": call_as})


def describe_stack_instance_request(
    account: str,
    region: str,
    stack_set_id: str,
    call_as: Optional[str],
) -> Dict[str, Any]:
    return compact(
        {
            "StackInstanceAccount": account,
            "StackInstanceRegion": region,
            "StackSetName": stack_set_id,
            "CallAs": call_as,
        }
    )


def describe_stack_set_operation_request(
    stack_set_name: str,
    operation_id: str,
    call_as: Optional[str],
) -> Dict[str, Any]:
    return compact(
        {
            "StackSetName": stack_set_name,
            "OperationId": operation_id,
            "CallAs": call_as,
        }
    )


def get_template_summary_request(template_body: Optional[str], template_url: Optional[str]) -> Dict[str, Any]:
    return compact({"TemplateBody": template_body, "TemplateURL": template_url})


def list_stack_set_operation_results_request(
    next_token: Optional[str],
    stack_set_name: str,
    operation_id: str,
    call_as: Optional[str],
) -> Dict[str, Any]:
    return compact(
        {
            "MaxResults": LIST_MAX_ITEMS,
            "NextToken": next_token,
            "StackSetName": stack_set_name,
            "OperationId": operation_id,
            "CallAs": call_as,
        }
    )

from typing import Any, Dict, List, Optional

from ..models import (
    AutoDeployment,
    DeploymentTargets,
    ManagedExecution,
    OperationPreferences,
    Parameter,
    TagSet,
)


def compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove as chaves com valor None. O boto3 trata chave ausente como "não
    informado", enquanto None quebra a validação de parâmetros.
    """
    return {k: v for k, v in data.items() if v is not None}


def translate_to_sdk_tags(tags: Optional[Dict[str, str]]) -> Optional[List[Dict[str, str]]]:
    if tags is None:
        return None
    return TagSet.from_dict(tags).to_aws()


def translate_to_sdk_parameters(parameters: Optional[List[Parameter]]) -> Optional[List[Dict[str, str]]]:
    if parameters is None:
        return None
    return [
        compact({"ParameterKey": p.parameter_key, "ParameterValue": p.parameter_value})
        for p in parameters
    ]


def translate_to_sdk_auto_deployment(auto_deployment: Optional[AutoDeployment]) -> Optional[Dict[str, bool]]:
    if auto_deployment is None:
        return None
    return compact(
        {
            "Enabled": auto_deployment.enabled,
            "RetainStacksOnAccountRemoval": auto_deployment.retain_stacks_on_account_removal,
        }
    )


def translate_to_sdk_deployment_targets(targets: Optional[DeploymentTargets]) -> Optional[Dict[str, Any]]:
    if targets is None:
        return None
    return compact(
        {
            "Accounts": targets.accounts,
            "AccountsUrl": targets.accounts_url,
            "OrganizationalUnitIds": targets.organizational_unit_ids,
            "AccountFilterType": targets.account_filter_type,
        }
    )


def translate_to_sdk_operation_preferences(preferences: Optional[OperationPreferences]) -> Optional[Dict[str, Any]]:
    if preferences is None:
        return None
    return compact(
        {
            "RegionConcurrencyType": preferences.region_concurrency_type,
            "RegionOrder": preferences.region_order,
            "FailureToleranceCount": preferences.failure_tolerance_count,
            "FailureTolerancePercentage": preferences.failure_tolerance_percentage,
            "MaxConcurrentCount": preferences.max_concurrent_count,
            "MaxConcurrentPercentage": preferences.max_concurrent_percentage,
            "ConcurrencyMode": preferences.concurrency_mode,
        }
    )


def translate_to_sdk_managed_execution(managed_execution: Optional[ManagedExecution]) -> Optional[Dict[str, bool]]:
    if managed_execution is None:
        return None
    return compact({"Active": managed_execution.active})

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .TagSet import TagSet


PERMISSION_MODELS = {"SERVICE_MANAGED", "SELF_MANAGED"}
CALL_AS = {"SELF", "DELEGATED_ADMIN"}
REGION_CONCURRENCY_TYPES = {"SEQUENTIAL", "PARALLEL"}
CONCURRENCY_MODES = {"STRICT_FAILURE_TOLERANCE", "SOFT_FAILURE_TOLERANCE"}
ACCOUNT_FILTER_TYPES = {"NONE", "INTERSECTION", "DIFFERENCE", "UNION"}


class ResourceModelError(ValueError):
    pass


def _enum(data: Dict[str, Any], name: str, allowed: set) -> Optional[str]:
    value = data.get(name)
    if value is None:
        return None
    value = str(value)
    if value not in allowed:
        raise ResourceModelError(
            f"Valor inválido para {name}: {value!r} (esperado um de {sorted(allowed)})"
        )
    return value


def _int(data: Dict[str, Any], name: str) -> Optional[int]:
    value = data.get(name)
    if value is None:
        return None
    # bool é int em Python, mas aqui é sempre erro de digitação
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ResourceModelError(f"{name} precisa ser inteiro, recebido {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ResourceModelError(f"{name} precisa ser inteiro, recebido {value!r}") from e


def _str_list(data: Dict[str, Any], name: str) -> Optional[List[str]]:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ResourceModelError(f"{name} precisa ser uma lista, recebido {type(value).__name__}")
    return [str(v) for v in value]


def _section(data: Dict[str, Any], name: str) -> Optional[Dict[str, Any]]:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ResourceModelError(f"{name} precisa ser um objeto, recebido {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Parameter:
    parameter_key: str
    parameter_value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Parameter":
        if not isinstance(data, dict):
            raise ResourceModelError(f"Item de Parameters precisa ser um objeto: {data!r}")
        if "ParameterKey" not in data:
            raise ResourceModelError(f"Parameter sem ParameterKey: {data!r}")
        value = data.get("ParameterValue")
        return cls(
            parameter_key=str(data["ParameterKey"]),
            parameter_value=None if value is None else str(value),
        )


def _parameters(data: Dict[str, Any], name: str) -> Optional[List[Parameter]]:
    value = data.get(name)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ResourceModelError(f"{name} precisa ser uma lista, recebido {type(value).__name__}")
    return [Parameter.from_dict(p) for p in value]


@dataclass(frozen=True)
class AutoDeployment:
    enabled: Optional[bool] = None
    retain_stacks_on_account_removal: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AutoDeployment":
        return cls(
            enabled=data.get("Enabled"),
            retain_stacks_on_account_removal=data.get("RetainStacksOnAccountRemoval"),
        )


@dataclass(frozen=True)
class ManagedExecution:
    active: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ManagedExecution":
        return cls(active=data.get("Active"))


@dataclass(frozen=True)
class OperationPreferences:
    failure_tolerance_count: Optional[int] = None
    failure_tolerance_percentage: Optional[int] = None
    max_concurrent_count: Optional[int] = None
    max_concurrent_percentage: Optional[int] = None
    region_order: Optional[List[str]] = None
    region_concurrency_type: Optional[str] = None
    concurrency_mode: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OperationPreferences":
        return cls(
            failure_tolerance_count=_int(data, "FailureToleranceCount"),
            failure_tolerance_percentage=_int(data, "FailureTolerancePercentage"),
            max_concurrent_count=_int(data, "MaxConcurrentCount"),
            max_concurrent_percentage=_int(data, "MaxConcurrentPercentage"),
            region_order=_str_list(data, "RegionOrder"),
            region_concurrency_type=_enum(data, "RegionConcurrencyType", REGION_CONCURRENCY_TYPES),
            concurrency_mode=_enum(data, "ConcurrencyMode", CONCURRENCY_MODES),
        )


@dataclass(frozen=True)
class DeploymentTargets:
    accounts: Optional[List[str]] = None
    accounts_url: Optional[str] = None
    organizational_unit_ids: Optional[List[str]] = None
    account_filter_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentTargets":
        return cls(
            accounts=_str_list(data, "Accounts"),
            accounts_url=data.get("AccountsUrl"),
            organizational_unit_ids=_str_list(data, "OrganizationalUnitIds"),
            account_filter_type=_enum(data, "AccountFilterType", ACCOUNT_FILTER_TYPES),
        )


@dataclass(frozen=True)
class StackInstances:
    """
    Um item de StackInstancesGroup: alvos de deployment + regiões.
    """

    regions: List[str]
    deployment_targets: Optional[DeploymentTargets] = None
    parameter_overrides: Optional[List[Parameter]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StackInstances":
        if not isinstance(data, dict):
            raise ResourceModelError(f"Item de StackInstancesGroup precisa ser um objeto: {data!r}")
        targets = _section(data, "DeploymentTargets")
        return cls(
            regions=_str_list(data, "Regions") or [],
            deployment_targets=DeploymentTargets.from_dict(targets) if targets is not None else None,
            parameter_overrides=_parameters(data, "ParameterOverrides"),
        )


@dataclass
class ResourceModel:
    """
    Modelo do recurso AWS::CloudFormation::StackSet.

    Os arquivos usam os nomes de propriedade do CloudFormation (PascalCase);
    aqui tudo vira snake_case. Campo ausente == None.
    """

    stack_set_name: Optional[str] = None
    stack_set_id: Optional[str] = None
    administration_role_arn: Optional[str] = None
    auto_deployment: Optional[AutoDeployment] = None
    call_as: Optional[str] = None
    capabilities: Optional[List[str]] = None
    description: Optional[str] = None
    execution_role_name: Optional[str] = None
    managed_execution: Optional[ManagedExecution] = None
    operation_preferences: Optional[OperationPreferences] = None
    parameters: Optional[List[Parameter]] = None
    permission_model: Optional[str] = None
    stack_instances_group: List[StackInstances] = field(default_factory=list)
    tags: TagSet = field(default_factory=TagSet)
    template_body: Optional[str] = None
    template_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResourceModel":
        if not isinstance(data, dict):
            raise ResourceModelError(f"Resource model precisa ser um objeto, recebido {type(data).__name__}")

        auto_deployment = _section(data, "AutoDeployment")
        managed_execution = _section(data, "ManagedExecution")
        operation_preferences = _section(data, "OperationPreferences")

        try:
            tags = TagSet.from_any(data.get("Tags"))
        except (TypeError, KeyError) as e:
            raise ResourceModelError(f"Tags inválidas no resource model: {e}") from e

        return cls(
            stack_set_name=data.get("StackSetName"),
            stack_set_id=data.get("StackSetId"),
            administration_role_arn=data.get("AdministrationRoleARN"),
            auto_deployment=AutoDeployment.from_dict(auto_deployment) if auto_deployment is not None else None,
            call_as=_enum(data, "CallAs", CALL_AS),
            capabilities=_str_list(data, "Capabilities"),
            description=data.get("Description"),
            execution_role_name=data.get("ExecutionRoleName"),
            managed_execution=ManagedExecution.from_dict(managed_execution) if managed_execution is not None else None,
            operation_preferences=(
                OperationPreferences.from_dict(operation_preferences) if operation_preferences is not None else None
            ),
            parameters=_parameters(data, "Parameters"),
            permission_model=_enum(data, "PermissionModel", PERMISSION_MODELS),
            stack_instances_group=[StackInstances.from_dict(g) for g in data.get("StackInstancesGroup") or []],
            tags=tags,
            template_body=data.get("TemplateBody"),
            template_url=data.get("TemplateURL"),
        )

    @property
    def identifier(self) -> Optional[str]:
        """
        Identificador estável usado nas chamadas de update/describe.
        """
        return self.stack_set_id or self.stack_set_name

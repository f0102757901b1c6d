from .AwsIdentity import AwsIdentity, AwsIdentityError
from .ResourceModel import (
    AutoDeployment,
    DeploymentTargets,
    ManagedExecution,
    OperationPreferences,
    Parameter,
    ResourceModel,
    ResourceModelError,
    StackInstances,
)
from .Tag import Tag
from .TagSet import TagSet
from .UpdateRunResult import UpdateRunResult

__all__ = [
    "AutoDeployment",
    "AwsIdentity",
    "AwsIdentityError",
    "DeploymentTargets",
    "ManagedExecution",
    "OperationPreferences",
    "Parameter",
    "ResourceModel",
    "ResourceModelError",
    "StackInstances",
    "Tag",
    "TagSet",
    "UpdateRunResult",
]

import pytest

from core.models import ResourceModel
from core.translator import request_translator as rt


FULL_MODEL = {
    "StackSetName": "baseline",
    "StackSetId": "baseline:1111-2222",
    "AdministrationRoleARN": "arn:aws:iam::111111111111:role/AWSCloudFormationStackSetAdministrationRole",
    "ExecutionRoleName": "AWSCloudFormationStackSetExecutionRole",
    "PermissionModel": "SELF_MANAGED",
    "CallAs": "SELF",
    "Capabilities": ["CAPABILITY_NAMED_IAM"],
    "Description": "org baseline",
    "TemplateURL": "https://bucket.s3.amazonaws.com/baseline.yaml",
    "AutoDeployment": {"Enabled": True, "RetainStacksOnAccountRemoval": False},
    "ManagedExecution": {"Active": True},
    "OperationPreferences": {
        "FailureToleranceCount": 1,
        "MaxConcurrentCount": 2,
        "RegionConcurrencyType": "PARALLEL",
    },
    "Parameters": [{"ParameterKey": "Env", "ParameterValue": "prd"}],
    "StackInstancesGroup": [
        {
            "Regions": ["us-east-1", "sa-east-1"],
            "DeploymentTargets": {"Accounts": ["222222222222"]},
            "ParameterOverrides": [{"ParameterKey": "Env", "ParameterValue": "hml"}],
        }
    ],
    "Tags": [{"Key": "Owner", "Value": "platform"}],
}


@pytest.fixture
def model():
    return ResourceModel.from_dict(FULL_MODEL)


def test_create_stack_set_request_maps_every_field(model):
    req = rt.create_stack_set_request(model, "token-1", {"Owner": "platform", "Env": "prd"})

    assert req == {
        "StackSetName": "baseline",
        "AdministrationRoleARN": FULL_MODEL["AdministrationRoleARN"],
        "AutoDeployment": {"Enabled": True, "RetainStacksOnAccountRemoval": False},
        "ClientRequestToken": "token-1",
        "PermissionModel": "SELF_MANAGED",
        "Capabilities": ["CAPABILITY_NAMED_IAM"],
        "Description": "org baseline",
        "ExecutionRoleName": "AWSCloudFormationStackSetExecutionRole",
        "Parameters": [{"ParameterKey": "Env", "ParameterValue": "prd"}],
        "Tags": [{"Key": "Env", "Value": "prd"}, {"Key": "Owner", "Value": "platform"}],
        "TemplateURL": FULL_MODEL["TemplateURL"],
        "CallAs": "SELF",
        "ManagedExecution": {"Active": True},
    }


def test_create_stack_set_request_omits_missing_optionals():
    req = rt.create_stack_set_request(ResourceModel(stack_set_name="s"), None, None)
    assert req == {"StackSetName": "s"}


def test_update_stack_set_request_reconciles_tags(model):
    req = rt.update_stack_set_request(
        model,
        previous_tags={"Owner": "platform", "Old": "x"},
        tags={"Owner": "platform", "Env": "prd"},
        current_tags=[
            {"Key": "Owner", "Value": "platform"},
            {"Key": "Old", "Value": "x"},
            {"Key": "CostCenter", "Value": "42"},
        ],
    )

    assert req["StackSetName"] == "baseline:1111-2222"
    assert req["Tags"] == [
        {"Key": "CostCenter", "Value": "42"},
        {"Key": "Env", "Value": "prd"},
        {"Key": "Owner", "Value": "platform"},
    ]
    assert req["OperationPreferences"] == {
        "RegionConcurrencyType": "PARALLEL",
        "FailureToleranceCount": 1,
        "MaxConcurrentCount": 2,
    }
    assert "ManagedExecution" not in req
    assert "PermissionModel" not in req


def test_update_stack_set_request_keeps_empty_tag_list(model):
    req = rt.update_stack_set_request(
        model,
        previous_tags={"Owner": "platform"},
        tags=None,
        current_tags=[{"Key": "Owner", "Value": "platform"}],
    )
    assert req["Tags"] == []


def test_update_managed_execution_request(model):
    req = rt.update_managed_execution_request(model)
    assert req == {
        "StackSetName": "baseline:1111-2222",
        "ManagedExecution": {"Active": True},
        "AdministrationRoleARN": FULL_MODEL["AdministrationRoleARN"],
        "ExecutionRoleName": "AWSCloudFormationStackSetExecutionRole",
        "Capabilities": ["CAPABILITY_NAMED_IAM"],
        "UsePreviousTemplate": True,
        "CallAs": "SELF",
    }


@pytest.mark.parametrize(
    "builder",
    [rt.create_stack_instances_request, rt.update_stack_instances_request],
)
def test_stack_instances_requests(model, builder):
    req = builder("baseline", model.operation_preferences, model.stack_instances_group[0], "DELEGATED_ADMIN")
    assert req == {
        "StackSetName": "baseline",
        "Regions": ["us-east-1", "sa-east-1"],
        "OperationPreferences": {
            "RegionConcurrencyType": "PARALLEL",
            "FailureToleranceCount": 1,
            "MaxConcurrentCount": 2,
        },
        "DeploymentTargets": {"Accounts": ["222222222222"]},
        "ParameterOverrides": [{"ParameterKey": "Env", "ParameterValue": "hml"}],
        "CallAs": "DELEGATED_ADMIN",
    }


def test_delete_stack_instances_request_has_no_overrides_and_deletes_stacks(model):
    req = rt.delete_stack_instances_request("baseline", None, model.stack_instances_group[0], None)
    assert req == {
        "StackSetName": "baseline",
        "Regions": ["us-east-1", "sa-east-1"],
        "DeploymentTargets": {"Accounts": ["222222222222"]},
        "RetainStacks": False,
    }


def test_list_requests_use_fixed_page_size():
    assert rt.list_stack_sets_request(None) == {"MaxResults": 100, "Status": "ACTIVE"}
    assert rt.list_stack_instances_request("tok", "s", "SELF") == {
        "MaxResults": 100,
        "NextToken": "tok",
        "StackSetName": "s",
        "CallAs": "SELF",
    }
    assert rt.list_stack_set_operation_results_request(None, "s", "op-1", None) == {
        "MaxResults": 100,
        "StackSetName": "s",
        "OperationId": "op-1",
    }


def test_describe_and_delete_requests():
    assert rt.describe_stack_set_request("s:1", None) == {"StackSetName": "s:1"}
    assert rt.delete_stack_set_request("s", "DELEGATED_ADMIN") == {"StackSetName": "s", "CallAs": "DELEGATED_ADMIN"}
    assert rt.describe_stack_instance_request("222222222222", "sa-east-1", "s:1", "SELF") == {
        "StackInstanceAccount": "222222222222",
        "StackInstanceRegion": "sa-east-1",
        "StackSetName": "s:1",
        "CallAs": "SELF",
    }
    assert rt.describe_stack_set_operation_request("s", "op-1", None) == {"StackSetName": "s", "OperationId": "op-1"}


def test_get_template_summary_request():
    assert rt.get_template_summary_request(None, "https://x/t.yaml") == {"TemplateURL": "https://x/t.yaml"}
    assert rt.get_template_summary_request("{}", None) == {"TemplateBody": "{}"}

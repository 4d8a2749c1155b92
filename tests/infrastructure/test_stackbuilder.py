"""Test building the networking stack from account configuration."""

import pytest
from aws_cdk.assertions import Match, Template

from topology_builder.errors import ValidationError
from topology_builder.utils import stackbuilder


@pytest.fixture()
def account_config():
    """Return an account section like the ones in cdk.json."""
    return {
        "name": "dev-network",
        "vpc_cidr": "10.0.0.0/16",
        "availability_zones": ["us-west-2a", "us-west-2b"],
        "public_subnet_cidrs": ["10.0.1.0/24", "10.0.2.0/24"],
        "private_subnet_cidrs": ["10.0.11.0/24", "10.0.12.0/24"],
        "tags": {"environment": "dev"},
    }


@pytest.fixture()
def web_tier():
    """Return a web tier section."""
    return {
        "name": "dev-web",
        "ami_id": "ami-12345",
        "listeners": [{"load_balancer_port": 80, "instance_port": 8080}],
        "access_logs": {"bucket": "elb-logs"},
    }


def test_build_network(app, env, account_config):
    """Ensure the stack holds the VPC and no web tier."""
    stack = stackbuilder.build_network(app, env, account_config)
    template = Template.from_stack(stack)

    assert stack.stack_name == "NetworkingStack"
    template.resource_count_is("AWS::EC2::VPC", 1)
    template.resource_count_is("AWS::EC2::Subnet", 4)
    template.resource_count_is("AWS::EC2::NatGateway", 1)
    template.resource_count_is("AWS::ElasticLoadBalancing::LoadBalancer", 0)
    template.resource_count_is("AWS::AutoScaling::AutoScalingGroup", 0)
    template.has_resource_properties(
        "AWS::EC2::VPC",
        props={
            "CidrBlock": "10.0.0.0/16",
            "Tags": Match.array_with([{"Key": "environment", "Value": "dev"}]),
        },
    )


def test_build_network_looks_up_zones(app, env, account_config, mocked_ec2):
    """Ensure unpinned zones are looked up in the stack's region."""
    del account_config["availability_zones"]

    stack = stackbuilder.build_network(app, env, account_config)
    template = Template.from_stack(stack)

    for zone in ("us-west-2a", "us-west-2b"):
        template.has_resource_properties(
            "AWS::EC2::Subnet", props={"AvailabilityZone": zone}
        )
    template.resource_count_is("AWS::EC2::Subnet", 4)


def test_build_web_tier(app, env, account_config, web_tier):
    """Ensure the web tier is wired to the VPC's subnets."""
    account_config["web_tier"] = web_tier

    stack = stackbuilder.build_network(app, env, account_config)
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::EC2::SecurityGroup",
        props={
            "GroupName": "dev-web",
            "VpcId": {"Ref": Match.string_like_regexp("Vpcdevnetwork")},
            "SecurityGroupIngress": [
                Match.object_like({"FromPort": 80, "ToPort": 80}),
                Match.object_like({"FromPort": 8080, "ToPort": 8080}),
            ],
        },
    )
    template.has_resource_properties(
        "AWS::ElasticLoadBalancing::LoadBalancer",
        props={
            "Subnets": [
                {"Ref": Match.string_like_regexp("Subnetdevnetworkpublicsubnet0")},
                {"Ref": Match.string_like_regexp("Subnetdevnetworkpublicsubnet1")},
            ],
            "AccessLoggingPolicy": Match.object_like({"S3BucketName": "elb-logs"}),
        },
    )
    template.has_resource_properties(
        "AWS::AutoScaling::AutoScalingGroup",
        props={
            "VPCZoneIdentifier": [
                {"Ref": Match.string_like_regexp("Subnetdevnetworkprivatesubnet0")},
                {"Ref": Match.string_like_regexp("Subnetdevnetworkprivatesubnet1")},
            ],
            "LoadBalancerNames": [
                {"Ref": Match.string_like_regexp("WebLoadBalancer")}
            ],
        },
    )
    template.has_resource_properties(
        "AWS::EC2::LaunchTemplate",
        props={"LaunchTemplateData": Match.object_like({"InstanceType": "t3.micro"})},
    )


def test_web_tier_without_private_subnets(app, env, account_config, web_tier):
    """Ensure instances fall back to the public subnets."""
    account_config["private_subnet_cidrs"] = []
    account_config["web_tier"] = web_tier

    stack = stackbuilder.build_network(app, env, account_config)
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::AutoScaling::AutoScalingGroup",
        props={
            "VPCZoneIdentifier": [
                {"Ref": Match.string_like_regexp("Subnetdevnetworkpublicsubnet0")},
                {"Ref": Match.string_like_regexp("Subnetdevnetworkpublicsubnet1")},
            ],
        },
    )


def test_web_tier_missing_key(app, env, account_config, web_tier):
    """Ensure a bad web_tier section is rejected before any stack exists."""
    del web_tier["ami_id"]
    account_config["web_tier"] = web_tier

    with pytest.raises(ValidationError, match="ami_id"):
        stackbuilder.build_network(app, env, account_config)

    assert app.node.try_find_child("NetworkingStack") is None

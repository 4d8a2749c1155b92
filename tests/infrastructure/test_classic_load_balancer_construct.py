"""Test the classic load balancer construct."""

from aws_cdk.assertions import Match, Template

from topology_builder.constructs.classic_load_balancer_construct import (
    AccessLogsConfig,
    ClassicLoadBalancerConstruct,
    ClassicLoadBalancerInput,
    Listener,
)


def _load_balancer_input(**kwargs):
    defaults = {
        "name": "web",
        "subnet_ids": ("subnet-1", "subnet-2"),
        "listeners": (Listener(load_balancer_port=80, instance_port=8080),),
        "security_group_ids": ("sg-1",),
        "tags": {"team": "web"},
    }
    defaults.update(kwargs)
    return ClassicLoadBalancerInput(**defaults)


def test_load_balancer(stack):
    """Ensure subnets, listeners and security groups are passed through."""
    ClassicLoadBalancerConstruct(stack, "LoadBalancer", _load_balancer_input())
    template = Template.from_stack(stack)

    template.resource_count_is("AWS::ElasticLoadBalancing::LoadBalancer", 1)
    template.has_resource_properties(
        "AWS::ElasticLoadBalancing::LoadBalancer",
        props={
            "LoadBalancerName": "web",
            "Subnets": ["subnet-1", "subnet-2"],
            "SecurityGroups": ["sg-1"],
            "Listeners": [
                {"LoadBalancerPort": "80", "InstancePort": "8080", "Protocol": "HTTP"}
            ],
            "Tags": [{"Key": "team", "Value": "web"}],
            "AccessLoggingPolicy": Match.absent(),
        },
    )


def test_access_logs(stack):
    """Ensure access logging is configured when requested."""
    ClassicLoadBalancerConstruct(
        stack,
        "LoadBalancer",
        _load_balancer_input(
            access_logs=AccessLogsConfig(
                bucket="elb-logs", bucket_prefix="web", interval=5
            )
        ),
    )
    template = Template.from_stack(stack)

    template.has_resource_properties(
        "AWS::ElasticLoadBalancing::LoadBalancer",
        props={
            "AccessLoggingPolicy": {
                "Enabled": True,
                "S3BucketName": "elb-logs",
                "S3BucketPrefix": "web",
                "EmitInterval": 5,
            }
        },
    )

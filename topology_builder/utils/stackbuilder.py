"""Module with helper functions for creating the networking stack."""

import logging

from aws_cdk import App, Environment, Stack

from topology_builder.config import (
    topology_request_from_config,
    web_tier_from_config,
)
from topology_builder.constructs import (
    auto_scaling_group_construct,
    classic_load_balancer_construct,
    security_group_construct,
    vpc_construct,
)
from topology_builder.models import WebTierConfig
from topology_builder.utils.availability_zones import get_availability_zones

logger = logging.getLogger(__name__)


def build_network(
    scope: App,
    env: Environment,
    account_config: dict,
):
    """Build the networking stack.

    Parameters
    ----------
    scope : Construct
        Parent construct.
    env : Environment
        Account and region
    account_config : dict
        Account configuration (VPC CIDRs, flow logs, tags and an optional
        ``web_tier`` section)

    Returns
    -------
    Stack
        The stack holding the VPC and, if configured, the web tier.

    """
    availability_zones = None
    if "availability_zones" not in account_config:
        # Only ask the account when the zones are not pinned in cdk.json
        count = max(
            len(account_config.get("public_subnet_cidrs", [])),
            len(account_config.get("private_subnet_cidrs", [])),
        )
        availability_zones = get_availability_zones(env.region, count)

    request = topology_request_from_config(account_config, availability_zones)
    web_tier = web_tier_from_config(account_config.get("web_tier"))
    logger.info("Building topology %s in %s", request.name, env.region)

    networking_stack = Stack(scope, "NetworkingStack", env=env)
    networking = vpc_construct.VpcConstruct(networking_stack, "Vpc", request=request)

    if web_tier is not None:
        build_web_tier(networking_stack, networking, web_tier, request.tags)

    return networking_stack


def build_web_tier(
    scope: Stack,
    networking: vpc_construct.VpcConstruct,
    web_tier: WebTierConfig,
    tags: dict,
):
    """Put a load balanced instance into the VPC.

    The load balancer is placed in the public subnets and the instance in
    the private subnets, falling back to the public subnets when the VPC
    has no private ones.

    Parameters
    ----------
    scope : Stack
        Stack to add the web tier to.
    networking : VpcConstruct
        The VPC to place the web tier in.
    web_tier : WebTierConfig
        Image, instance type, listeners and access logs of the web tier
    tags : dict
        Tags for every web tier resource

    """
    name = web_tier.name
    ports = sorted(
        {listener.load_balancer_port for listener in web_tier.listeners}
        | {listener.instance_port for listener in web_tier.listeners}
    )
    security_group = security_group_construct.SecurityGroupConstruct(
        scope,
        "WebSecurityGroup",
        security_group_construct.SecurityGroupInput(
            name=name,
            vpc_id=networking.vpc_id,
            ingress=tuple(
                security_group_construct.SecurityGroupRule(
                    ip_protocol="tcp",
                    from_port=port,
                    to_port=port,
                    cidr_ip="0.0.0.0/0",
                )
                for port in ports
            ),
            egress=(
                security_group_construct.SecurityGroupRule(
                    ip_protocol="-1", cidr_ip="0.0.0.0/0"
                ),
            ),
            tags=tags,
        ),
    )

    load_balancer = classic_load_balancer_construct.ClassicLoadBalancerConstruct(
        scope,
        "WebLoadBalancer",
        classic_load_balancer_construct.ClassicLoadBalancerInput(
            name=name,
            subnet_ids=tuple(networking.public_subnet_ids),
            listeners=web_tier.listeners,
            security_group_ids=(security_group.security_group_id,),
            access_logs=web_tier.access_logs,
            tags=tags,
        ),
    )

    instance_subnet_ids = networking.private_subnet_ids or networking.public_subnet_ids
    auto_scaling_group_construct.AutoScalingGroupConstruct(
        scope,
        "WebAutoScalingGroup",
        auto_scaling_group_construct.AutoScalingGroupInput(
            name=name,
            ami_id=web_tier.ami_id,
            instance_type=web_tier.instance_type,
            subnet_ids=tuple(instance_subnet_ids),
            load_balancer_name=load_balancer.load_balancer.ref,
            security_group_ids=(security_group.security_group_id,),
            user_data=web_tier.user_data,
            tags=tags,
        ),
    )

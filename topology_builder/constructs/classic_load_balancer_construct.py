"""Configure a classic load balancer."""

from dataclasses import dataclass, field
from typing import Optional

from aws_cdk import aws_elasticloadbalancing as elb
from constructs import Construct

from topology_builder.utils.tags import to_cfn_tags


@dataclass(frozen=True)
class Listener:
    """Port mapping from the load balancer to its instances."""

    load_balancer_port: int
    instance_port: int
    protocol: str = "HTTP"
    instance_protocol: Optional[str] = None


@dataclass(frozen=True)
class AccessLogsConfig:
    """Where and how often access logs are written."""

    bucket: str
    bucket_prefix: Optional[str] = None
    enabled: bool = True
    interval: Optional[int] = None


@dataclass(frozen=True)
class ClassicLoadBalancerInput:
    """Classic load balancer settings."""

    name: str
    subnet_ids: tuple = ()
    listeners: tuple = ()
    security_group_ids: tuple = ()
    access_logs: Optional[AccessLogsConfig] = None
    tags: dict = field(default_factory=dict)


class ClassicLoadBalancerConstruct(Construct):
    """Construct for a classic (EC2-VPC) elastic load balancer."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        load_balancer_input: ClassicLoadBalancerInput,
        **kwargs,
    ) -> None:
        """Create the load balancer.

        Parameters
        ----------
        scope : Construct
            Parent construct.
        construct_id : str
            A unique string identifier for this construct.
        load_balancer_input : ClassicLoadBalancerInput
            Subnets, listeners and security groups of the load balancer.
            Access logging is left unset when ``access_logs`` is None.
        kwargs : dict
            Keyword arguments

        """
        super().__init__(scope, construct_id, **kwargs)
        lb_input = load_balancer_input

        access_logging_policy = None
        if lb_input.access_logs is not None:
            access_logging_policy = (
                elb.CfnLoadBalancer.AccessLoggingPolicyProperty(
                    enabled=lb_input.access_logs.enabled,
                    s3_bucket_name=lb_input.access_logs.bucket,
                    s3_bucket_prefix=lb_input.access_logs.bucket_prefix,
                    emit_interval=lb_input.access_logs.interval,
                )
            )

        self.load_balancer = elb.CfnLoadBalancer(
            self,
            "LoadBalancer",
            load_balancer_name=lb_input.name,
            subnets=list(lb_input.subnet_ids),
            security_groups=list(lb_input.security_group_ids) or None,
            # CloudFormation takes listener ports as strings
            listeners=[
                elb.CfnLoadBalancer.ListenersProperty(
                    load_balancer_port=str(listener.load_balancer_port),
                    instance_port=str(listener.instance_port),
                    protocol=listener.protocol,
                    instance_protocol=listener.instance_protocol,
                )
                for listener in lb_input.listeners
            ],
            access_logging_policy=access_logging_policy,
            tags=to_cfn_tags(lb_input.tags),
        )

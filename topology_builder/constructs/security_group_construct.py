"""Configure a security group."""

from dataclasses import dataclass, field
from typing import Optional

from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from topology_builder.utils.tags import to_cfn_tags, with_name_tag


@dataclass(frozen=True)
class SecurityGroupRule:
    """One ingress or egress rule."""

    ip_protocol: str
    from_port: Optional[int] = None
    to_port: Optional[int] = None
    cidr_ip: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SecurityGroupInput:
    """Security group settings."""

    name: str
    vpc_id: Optional[str] = None
    ingress: tuple = ()
    egress: tuple = ()
    tags: dict = field(default_factory=dict)


class SecurityGroupConstruct(Construct):
    """Construct for a named security group."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        security_group_input: SecurityGroupInput,
        **kwargs,
    ) -> None:
        """Create the security group.

        Parameters
        ----------
        scope : Construct
            Parent construct.
        construct_id : str
            A unique string identifier for this construct.
        security_group_input : SecurityGroupInput
            Name, VPC and rules of the group. The name doubles as the
            group description and ``Name`` tag.
        kwargs : dict
            Keyword arguments

        """
        super().__init__(scope, construct_id, **kwargs)
        sg_input = security_group_input

        ingress = [
            ec2.CfnSecurityGroup.IngressProperty(
                ip_protocol=rule.ip_protocol,
                from_port=rule.from_port,
                to_port=rule.to_port,
                cidr_ip=rule.cidr_ip,
                description=rule.description,
            )
            for rule in sg_input.ingress
        ]
        egress = [
            ec2.CfnSecurityGroup.EgressProperty(
                ip_protocol=rule.ip_protocol,
                from_port=rule.from_port,
                to_port=rule.to_port,
                cidr_ip=rule.cidr_ip,
                description=rule.description,
            )
            for rule in sg_input.egress
        ]

        self.security_group = ec2.CfnSecurityGroup(
            self,
            "SecurityGroup",
            group_name=sg_input.name,
            group_description=sg_input.name,
            vpc_id=sg_input.vpc_id,
            security_group_ingress=ingress or None,
            security_group_egress=egress or None,
            tags=to_cfn_tags(with_name_tag(sg_input.tags, sg_input.name)),
        )

    @property
    def security_group_id(self):
        """Return the group id token."""
        return self.security_group.attr_group_id

"""Configure a single-instance auto scaling group behind a load balancer."""

from dataclasses import dataclass, field
from typing import Optional

from aws_cdk import aws_autoscaling as autoscaling
from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from topology_builder.utils.tags import to_cfn_tags


@dataclass(frozen=True)
class AutoScalingGroupInput:
    """Launch template and placement of the group."""

    name: str
    ami_id: str
    instance_type: str
    subnet_ids: tuple
    load_balancer_name: str
    security_group_ids: tuple = ()
    user_data: Optional[str] = None
    tags: dict = field(default_factory=dict)


class AutoScalingGroupConstruct(Construct):
    """Construct for a launch template and its auto scaling group."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        asg_input: AutoScalingGroupInput,
        **kwargs,
    ) -> None:
        """Create the launch template and group.

        The group always runs exactly one instance and follows the latest
        version of the launch template.

        Parameters
        ----------
        scope : Construct
            Parent construct.
        construct_id : str
            A unique string identifier for this construct.
        asg_input : AutoScalingGroupInput
            Instance settings and placement.
        kwargs : dict
            Keyword arguments

        """
        super().__init__(scope, construct_id, **kwargs)

        tag_specifications = None
        if asg_input.tags:
            tag_specifications = [
                ec2.CfnLaunchTemplate.LaunchTemplateTagSpecificationProperty(
                    resource_type="launch-template",
                    tags=to_cfn_tags(asg_input.tags),
                )
            ]

        self.launch_template = ec2.CfnLaunchTemplate(
            self,
            "LaunchTemplate",
            launch_template_data=ec2.CfnLaunchTemplate.LaunchTemplateDataProperty(
                image_id=asg_input.ami_id,
                instance_type=asg_input.instance_type,
                user_data=asg_input.user_data,
                security_group_ids=list(asg_input.security_group_ids) or None,
            ),
            tag_specifications=tag_specifications,
        )

        # CloudFormation does not accept "$Latest" as a version
        launch_template_spec = (
            autoscaling.CfnAutoScalingGroup.LaunchTemplateSpecificationProperty(
                launch_template_id=self.launch_template.ref,
                version=self.launch_template.attr_latest_version_number,
            )
        )

        self.group = autoscaling.CfnAutoScalingGroup(
            self,
            "AutoScalingGroup",
            min_size="1",
            max_size="1",
            desired_capacity="1",
            vpc_zone_identifier=list(asg_input.subnet_ids),
            load_balancer_names=[asg_input.load_balancer_name],
            launch_template=launch_template_spec,
        )

"""Turn an account section of the CDK context into a topology request.

A section looks like::

    "dev": {
        "account": "0123456789",
        "region": "us-west-2",
        "name": "dev-network",
        "vpc_cidr": "10.0.0.0/16",
        "availability_zones": ["us-west-2a", "us-west-2b"],
        "public_subnet_cidrs": ["10.0.1.0/24", "10.0.2.0/24"],
        "private_subnet_cidrs": ["10.0.11.0/24", "10.0.12.0/24"],
        "flow_logs": {
            "enabled": true,
            "traffic_type": "REJECT",
            "log_destination_type": "s3",
            "log_destination": "arn:aws:s3:::flow-log-bucket",
            "destination_options": {"file_format": "parquet"}
        },
        "tags": {"project": "network"}
    }
"""

from topology_builder.constructs.classic_load_balancer_construct import (
    AccessLogsConfig,
    Listener,
)
from topology_builder.errors import ValidationError
from topology_builder.models import (
    FlowLogConfig,
    FlowLogDestinationOptions,
    TopologyRequest,
    WebTierConfig,
)


def _require(config, key):
    try:
        return config[key]
    except KeyError as err:
        raise ValidationError(f"Missing required configuration key: {key}") from err


def _section(config, key):
    section = config.get(key)
    if section is not None and not isinstance(section, dict):
        raise ValidationError(
            f"Configuration key {key} must be a mapping, got {type(section).__name__}"
        )
    return section


def _list(config, key, default=()):
    values = config.get(key, default)
    if values is None:
        return default
    if not isinstance(values, (list, tuple)):
        raise ValidationError(
            f"Configuration key {key} must be a list, got {type(values).__name__}"
        )
    return values


def flow_log_config_from_config(config):
    """Build a ``FlowLogConfig`` from a ``flow_logs`` section, if any."""
    if config is None:
        return None

    options = _section(config, "destination_options")
    destination_options = None
    if options is not None:
        destination_options = FlowLogDestinationOptions(
            file_format=options.get("file_format"),
            hive_compatible_partitions=options.get("hive_compatible_partitions"),
            per_hour_partition=options.get("per_hour_partition"),
        )

    return FlowLogConfig(
        enabled=bool(config.get("enabled", False)),
        traffic_type=config.get("traffic_type", "ALL"),
        log_destination_type=config.get("log_destination_type"),
        log_destination=config.get("log_destination"),
        destination_options=destination_options,
    )


def topology_request_from_config(config, availability_zones=None):
    """Build a ``TopologyRequest`` from an account configuration section.

    Parameters
    ----------
    config : dict
        Account configuration (name, CIDRs, flow logs and tags).
    availability_zones : list of str, optional
        Zones to use when the section does not list its own.

    Returns
    -------
    TopologyRequest
        The request the section describes.
    """
    return TopologyRequest(
        name=_require(config, "name"),
        cidr_block=_require(config, "vpc_cidr"),
        availability_zones=_list(
            config, "availability_zones", availability_zones or ()
        ),
        public_subnet_cidr_blocks=_list(config, "public_subnet_cidrs"),
        private_subnet_cidr_blocks=_list(config, "private_subnet_cidrs"),
        flow_log_config=flow_log_config_from_config(_section(config, "flow_logs")),
        tags=_section(config, "tags") or {},
    )


def web_tier_from_config(config):
    """Build a ``WebTierConfig`` from a ``web_tier`` section, if any.

    Parameters
    ----------
    config : dict or None
        ``name``, ``ami_id`` and ``listeners`` with optional
        ``instance_type``, ``user_data`` and ``access_logs``.

    Returns
    -------
    WebTierConfig or None
        The web tier the section describes.
    """
    if config is None:
        return None

    listeners = []
    for listener in _list(config, "listeners"):
        if not isinstance(listener, dict):
            raise ValidationError(
                "Configuration key listeners must hold mappings, "
                f"got {type(listener).__name__}"
            )
        listeners.append(
            Listener(
                load_balancer_port=_require(listener, "load_balancer_port"),
                instance_port=_require(listener, "instance_port"),
                protocol=listener.get("protocol", "HTTP"),
            )
        )

    access_logs = None
    access_logs_config = _section(config, "access_logs")
    if access_logs_config is not None:
        access_logs = AccessLogsConfig(
            bucket=_require(access_logs_config, "bucket"),
            bucket_prefix=access_logs_config.get("bucket_prefix"),
            enabled=access_logs_config.get("enabled", True),
            interval=access_logs_config.get("interval"),
        )

    return WebTierConfig(
        name=_require(config, "name"),
        ami_id=_require(config, "ami_id"),
        instance_type=config.get("instance_type", "t3.micro"),
        listeners=tuple(listeners),
        user_data=config.get("user_data"),
        access_logs=access_logs,
    )

"""Look up the availability zones of a region."""

import logging

import boto3

logger = logging.getLogger(__name__)


def get_availability_zones(region, count=None):
    """Return the names of the available zones in ``region``.

    Parameters
    ----------
    region : str
        AWS region to query.
    count : int, optional
        Return only the first ``count`` zones, in name order.

    Returns
    -------
    list of str
        Zone names, e.g. ``["us-west-2a", "us-west-2b"]``.
    """
    client = boto3.client("ec2", region_name=region)
    response = client.describe_availability_zones(
        Filters=[{"Name": "state", "Values": ["available"]}]
    )
    zones = sorted(zone["ZoneName"] for zone in response["AvailabilityZones"])
    logger.info("Found availability zones %s in %s", zones, region)
    if count is not None:
        zones = zones[:count]
    return zones

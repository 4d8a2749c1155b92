"""Helpers for the tag maps attached to every resource."""

from aws_cdk import CfnTag


def with_name_tag(tags, name):
    """Return a copy of ``tags`` whose ``Name`` is ``name``.

    Any ``Name`` supplied by the caller is overridden; ``tags`` itself is
    left untouched so one map can be shared by many resources.
    """
    named = dict(tags or {})
    named["Name"] = name
    return named


def to_cfn_tags(tags):
    """Convert a tag map to the list form CloudFormation resources take."""
    return [CfnTag(key=key, value=value) for key, value in sorted(tags.items())]

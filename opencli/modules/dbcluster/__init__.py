"""
Database cluster describe support.

Locates InnoDBCluster resources, fetches them one by one and projects each
into a flat ClusterSummary for printing.
"""
from .describe import ClusterDescriber, DescribeOptions
from .errors import (
    AggregateError,
    DescribeError,
    FetchError,
    LocatorError,
    MalformedResourceError,
    UsageError,
)
from .locator import locate
from .models import ClusterSummary, PlaygroundDefaults, ResourceIdentity
from .projector import project
from .resources import INNODB_CLUSTER, ResourceType, resolve_type

__all__ = [
    'AggregateError',
    'ClusterDescriber',
    'ClusterSummary',
    'DescribeError',
    'DescribeOptions',
    'FetchError',
    'INNODB_CLUSTER',
    'LocatorError',
    'MalformedResourceError',
    'PlaygroundDefaults',
    'ResourceIdentity',
    'ResourceType',
    'UsageError',
    'locate',
    'project',
    'resolve_type',
]

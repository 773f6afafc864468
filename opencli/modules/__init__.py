"""
Database cluster management modules.
"""
from .dbcluster import ClusterDescriber, DescribeOptions, locate, project

__all__ = [
    'ClusterDescriber',
    'DescribeOptions',
    'locate',
    'project',
]

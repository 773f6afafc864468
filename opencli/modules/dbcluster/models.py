"""
Data models for database cluster descriptions.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ...config import Config
from .resources import ResourceType

@dataclass(frozen=True)
class ResourceIdentity:
    """A located resource, or a lookup that failed softly."""
    namespace: str
    name: str
    resource_type: ResourceType
    error: Optional[str] = None  # locator-time error message

@dataclass(frozen=True)
class PlaygroundDefaults:
    """Connection defaults the playground deploys every cluster with."""
    root_user: str = 'root'
    port: int = 3306
    engine: str = 'mysql'

    @classmethod
    def from_config(cls) -> 'PlaygroundDefaults':
        return cls(
            root_user=Config.ROOT_USER,
            port=Config.DB_PORT,
            engine=Config.DB_ENGINE,
        )

@dataclass
class ClusterSummary:
    """Flat view of one database cluster."""
    namespace: str
    cluster_name: str
    root_user: str
    port: int
    engine: str
    version: str
    instances: int
    server_id: int
    secret_name: str
    start_time: str
    status: str
    online_instances: int
    topology: str
    storage: int
    labels: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

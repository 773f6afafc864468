"""Configuration management for the opencli application."""
import os

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

class Config:
    """Application configuration with sensible defaults."""

    # Kubernetes access
    # Explicit path only; an unset value lets the client honour $KUBECONFIG itself
    KUBECONFIG: str = os.getenv("OPENCLI_KUBECONFIG", "")
    KUBE_CONTEXT: str = os.getenv("OPENCLI_CONTEXT", "")

    # Resource lookup
    DBCLUSTER_TYPE: str = os.getenv("OPENCLI_DBCLUSTER_TYPE", "innodbclusters")
    CHUNK_SIZE: int = int(os.getenv("OPENCLI_CHUNK_SIZE", "500"))

    # Playground defaults shown in every cluster summary
    ROOT_USER: str = os.getenv("OPENCLI_ROOT_USER", "root")
    DB_PORT: int = int(os.getenv("OPENCLI_DB_PORT", "3306"))
    DB_ENGINE: str = os.getenv("OPENCLI_DB_ENGINE", "mysql")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        problems = []
        if cls.CHUNK_SIZE < 0:
            problems.append("OPENCLI_CHUNK_SIZE must be >= 0")
        if not 0 < cls.DB_PORT < 65536:
            problems.append("OPENCLI_DB_PORT must be a valid TCP port")
        if not cls.DBCLUSTER_TYPE:
            problems.append("OPENCLI_DBCLUSTER_TYPE must not be empty")
        if problems:
            raise ValueError(f"Invalid configuration: {', '.join(problems)}")

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed

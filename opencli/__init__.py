"""opencli - command line tooling for database clusters running on Kubernetes."""

__version__ = "0.1.0"

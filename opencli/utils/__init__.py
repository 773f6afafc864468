"""Utility helpers shared by opencli commands."""
from .kube import ClusterResourceClient, api_error_message, current_namespace, load_kubeconfig

__all__ = [
    'ClusterResourceClient',
    'api_error_message',
    'current_namespace',
    'load_kubeconfig',
]

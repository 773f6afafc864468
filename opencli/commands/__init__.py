from . import dbcluster

__all__ = ['dbcluster']

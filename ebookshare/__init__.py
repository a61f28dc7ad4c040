"""eBookShare: multi-user eBook sharing REST backend."""

__version__ = "0.1.0"

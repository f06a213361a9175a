class NamespaceNames:
    """Directory names of the on-disk stores under ``settings.cache_dir``."""

    RESPONSES = "NetworkServiceCache"

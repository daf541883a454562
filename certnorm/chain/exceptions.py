class ChainFetchFailedError(Exception):
    """Raised when an intermediate certificate cannot be retrieved.

    Never leaves the chain resolver: it is logged and the leaf-only bundle is kept.
    """

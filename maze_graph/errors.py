class InvalidArgumentError(ValueError):
    """raised when a required input is missing, malformed, or already registered"""

    pass


class UnknownElementError(LookupError):
    """raised when querying a disjoint set for an element that was never registered"""

    pass


class NoPathExistsError(Exception):
    """raised when a shortest path search exhausts its frontier without reaching the target"""

    pass

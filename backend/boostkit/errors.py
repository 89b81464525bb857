"""Custom exceptions for boostkit.

Only wiring mistakes raise.  Storage failures inside repositories are
reported through return values, see :mod:`boostkit.crud.entity_repository`.
"""


class BoostkitError(Exception):
    """Base exception for all boostkit errors."""

    pass


class ServiceNotFoundError(BoostkitError, KeyError):
    """Raised when a container key was never registered."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Service '{key}' not found in container.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class FeatureNotFoundError(BoostkitError, LookupError):
    """Raised when a feature id is not present in the registry."""

    def __init__(self, feature_id: str):
        self.feature_id = feature_id
        super().__init__(f"Feature '{feature_id}' is not registered.")

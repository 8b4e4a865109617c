"""
Configurations computed at most once per process.

Instances are provided as `injector` singletons, see `kubeconf.dependencies`.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from kubeconf.common.error_types import ApplicationError
from kubeconf.entities.configuration import Configuration


class LocalProxyDefault(BaseModel):
    """Configuration for a local proxy, e.g. `kubectl proxy`"""

    configuration: Configuration

    model_config = ConfigDict(frozen=True)


class InClusterAttempt(BaseModel):
    """Outcome of the in-cluster resolution. Exactly one of `configuration` and `error` is set."""

    configuration: Optional[Configuration] = None
    error: Optional[ApplicationError] = None

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @property
    def succeeded(self) -> bool:
        return self.configuration is not None

    def unwrap(self) -> Configuration:
        """Return the configuration, or raise the error the attempt failed with"""
        if self.error is not None:
            raise self.error
        assert self.configuration is not None
        return self.configuration

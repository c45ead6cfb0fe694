"""fedoractl - A client library and CLI for the Fedora Commons REST API.

This package talks to Fedora 3.x style repositories, supporting:
- Escaped endpoint paths for objects, datastreams and disseminations
- Object, datastream, relationship and version operations
- Parsing of repository, object and datastream profiles into plain records
"""

__version__ = "0.1.0"

from fedoractl.core.client import FedoraClient
from fedoractl.core.config import Config, Profile
from fedoractl.core.exceptions import (
    ConfigurationError,
    FedoraCtlError,
    InvalidArgumentError,
    ParseError,
    RequestFailedError,
    ResourceNotFoundError,
)
from fedoractl.services import (
    DatastreamService,
    DisseminationService,
    ObjectService,
    RelationshipService,
    RepositoryService,
)

__all__ = [
    "__version__",
    "FedoraClient",
    "Config",
    "Profile",
    "FedoraCtlError",
    "ConfigurationError",
    "InvalidArgumentError",
    "ParseError",
    "RequestFailedError",
    "ResourceNotFoundError",
    "RepositoryService",
    "ObjectService",
    "DatastreamService",
    "RelationshipService",
    "DisseminationService",
]

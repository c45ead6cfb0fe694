"""Core modules for fedoractl."""

from fedoractl.core.client import FedoraClient
from fedoractl.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile
from fedoractl.core.exceptions import (
    AuthenticationError,
    ChecksumMismatchError,
    ConfigurationError,
    ConnectionError,
    FedoraCtlError,
    InvalidArgumentError,
    NetworkError,
    OperationError,
    ParseError,
    PermissionDeniedError,
    RequestFailedError,
    ResourceNotFoundError,
    RetryExhaustedError,
    ValidationError,
)
from fedoractl.core.logging import LogContext, get_logger, setup_logging
from fedoractl.core.output import (
    OutputFormat,
    console,
    print_error,
    print_json,
    print_output,
    print_success,
    print_table,
    print_warning,
    print_xml,
)
from fedoractl.core.paths import (
    append_query,
    datastream_path,
    dissemination_path,
    object_path,
)
from fedoractl.core.profiles import (
    parse_datastream_history,
    parse_datastream_profile,
    parse_object_history,
    parse_object_profile,
    parse_repository_profile,
    parse_version_history,
)
from fedoractl.core.validation import (
    validate_dsid,
    validate_pid,
    validate_server_url,
    validate_timeout,
)

__all__ = [
    # Exceptions
    "FedoraCtlError",
    "AuthenticationError",
    "ChecksumMismatchError",
    "ConfigurationError",
    "ConnectionError",
    "InvalidArgumentError",
    "NetworkError",
    "OperationError",
    "ParseError",
    "PermissionDeniedError",
    "RequestFailedError",
    "ResourceNotFoundError",
    "RetryExhaustedError",
    "ValidationError",
    # Validation
    "validate_server_url",
    "validate_pid",
    "validate_dsid",
    "validate_timeout",
    # Config
    "Config",
    "Profile",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "FedoraClient",
    # Paths
    "object_path",
    "datastream_path",
    "dissemination_path",
    "append_query",
    # Profiles
    "parse_repository_profile",
    "parse_object_profile",
    "parse_datastream_profile",
    "parse_datastream_history",
    "parse_object_history",
    "parse_version_history",
    # Output
    "OutputFormat",
    "print_output",
    "print_table",
    "print_json",
    "print_error",
    "print_warning",
    "print_xml",
    "print_success",
    "console",
    # Logging
    "get_logger",
    "setup_logging",
    "LogContext",
]

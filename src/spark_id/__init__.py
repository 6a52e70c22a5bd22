"""
spark-id: short, URL-safe, cryptographically random identifiers with optional prefixes.

Example:
    >>> from spark_id import generate_id, parse_id
    >>> user_id = generate_id("USER")  # e.g. "USER_K7QW2MZP9XRB4TN"
    >>> parse_id(user_id).prefix
    'USER'

Importing the package has no side effects beyond creating the default config store.
"""

from spark_id.codec import encode_base32
from spark_id.config import (
    DEFAULT_CONFIG,
    ConfigLoadError,
    ConfigStore,
    ConfigValidationError,
    IdConfig,
    PartialIdConfig,
    configure,
    get_config,
    load_config,
    reset_config,
)
from spark_id.errors import (
    CountTooLargeError,
    ErrorCode,
    GenerationFailedError,
    InvalidAlphabetError,
    InvalidCountError,
    InvalidIdError,
    InvalidPrefixError,
    SparkIdError,
)
from spark_id.generator import (
    GenerationResult,
    generate_id_safe,
    generate_multiple,
    generate_unique,
    validate_id,
)
from spark_id.identifier import (
    IdStats,
    ParsedId,
    SecureId,
    ValidationResult,
    create,
    generate,
    generate_raw,
    get_stats,
    is_valid,
    is_valid_raw_id,
    parse,
)

__version__ = "1.0.0"

# Conventional aliases for the module-level API.
generate_id = generate
spark_id = generate
create_id = create
is_valid_id = is_valid
parse_id = parse

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigLoadError",
    "ConfigStore",
    "ConfigValidationError",
    "CountTooLargeError",
    "ErrorCode",
    "GenerationFailedError",
    "GenerationResult",
    "IdConfig",
    "IdStats",
    "InvalidAlphabetError",
    "InvalidCountError",
    "InvalidIdError",
    "InvalidPrefixError",
    "ParsedId",
    "PartialIdConfig",
    "SecureId",
    "SparkIdError",
    "ValidationResult",
    "__version__",
    "configure",
    "create",
    "create_id",
    "encode_base32",
    "generate",
    "generate_id",
    "generate_id_safe",
    "generate_multiple",
    "generate_raw",
    "generate_unique",
    "get_config",
    "get_stats",
    "is_valid",
    "is_valid_id",
    "is_valid_raw_id",
    "load_config",
    "parse",
    "parse_id",
    "reset_config",
    "spark_id",
    "validate_id",
]

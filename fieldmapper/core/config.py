import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def env_int(name: str, default: int, minimum: int = 1) -> int:
    """Read a positive integer setting, falling back to `default` on bad values."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or value < minimum:
        # utils.get_logger imports this module
        logging.getLogger(__name__).warning(
            f"Invalid {name}={raw!r}, expected an integer >= {minimum}, using {default}"
        )
        return default
    return value


# Metadata key holding a field's ACL declaration
# pydantic: Field(json_schema_extra={...}), dataclasses: field(metadata={...}),
# SQLAlchemy: mapped_column(info={...})
ACL_KEY: str = os.environ.get("FIELDMAPPER_ACL_KEY", "acl")

# If "0", unknown permission codes are dropped with a warning instead of failing the mapping
STRICT_PERMISSIONS: bool = os.environ.get("FIELDMAPPER_STRICT_PERMISSIONS", "1") != "0"

# Default thread count for batch mappings (1 = sequential)
BATCH_WORKERS: int = env_int("FIELDMAPPER_BATCH_WORKERS", 1)

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

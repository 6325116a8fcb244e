"""Custom exceptions for the asset projector."""


class ProjectionError(Exception):
    """Base exception for projection and record-loading errors."""


class RecordFormatError(ProjectionError):
    """Raised when a persisted record cannot be interpreted."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Record error on '{field}': {message}")


class UnsupportedSchemaVersionError(ProjectionError):
    """Raised when a record was written by a newer schema than this build knows."""

    def __init__(self, version: int, supported: int):
        self.version = version
        self.supported = supported
        super().__init__(
            f"Unsupported record schema version {version} "
            f"(this build reads up to version {supported})"
        )


class UnknownAssetError(ProjectionError):
    """Raised when a portfolio lookup references an asset that doesn't exist."""

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"Asset not found: {asset_id}")

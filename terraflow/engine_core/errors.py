"""
Engine Errors - Exceptions for conditions that are not rule failures.

Rule failures (not enough coins, terrain not adjacent, ...) are ordinary
OutcomeCode return values. Exceptions are only raised when:
- A caller passes an identifier that does not exist
- The resource model is corrupted (a programming defect)
"""


class TerraflowError(Exception):
    """Base class for all engine exceptions."""


class UnknownTerrainError(TerraflowError, LookupError):
    """Raised when a terrain id is not on the board."""

    def __init__(self, terrain_id):
        self.terrain_id = terrain_id
        super().__init__(f"Unknown terrain: {terrain_id}")


class UnknownCultTrackError(TerraflowError, LookupError):
    """Raised when a cult track name or id does not exist."""

    def __init__(self, track):
        self.track = track
        super().__init__(f"Unknown cult track: {track}")


class UnknownTypeError(TerraflowError, LookupError):
    """Raised when an external terrain/structure type id cannot be mapped."""

    def __init__(self, kind: str, type_id):
        self.kind = kind
        self.type_id = type_id
        super().__init__(f"Unknown {kind} type: {type_id}")


class ResourcePoolError(TerraflowError):
    """
    Raised when a deduction would drive a resource pool negative.

    Affordability is always checked before spending, so reaching this
    means a caller skipped the check.
    """

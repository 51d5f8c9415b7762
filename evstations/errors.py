"""
Error taxonomy for the station service.
"""
from typing import List, Sequence, Tuple


Violation = Tuple[str, str]


class StationServiceError(Exception):
    """Base class for errors raised by the station core."""

    status_code = 500

    def to_dict(self) -> dict:
        return {"message": str(self)}


class ValidationError(StationServiceError):
    """One or more field constraints were violated."""

    status_code = 400

    def __init__(self, violations: Sequence[Violation]):
        self.violations: List[Violation] = list(violations)
        fields = ", ".join(field for field, _ in self.violations)
        super().__init__(f"Validation failed: {fields}")

    def to_dict(self) -> dict:
        return {
            "message": "Validation failed",
            "errors": [
                {"field": field, "message": message}
                for field, message in self.violations
            ],
        }


class NotFoundError(StationServiceError):
    """The referenced station does not exist."""

    status_code = 404

    def __init__(self, station_id):
        self.station_id = station_id
        super().__init__("Station not found")


class InfrastructureError(StationServiceError):
    """The document store failed or could not be reached."""

    status_code = 500


class AuthenticationError(StationServiceError):
    """The request carries no valid caller identity."""

    status_code = 401

from .subdomain import RecordType, SubdomainRecord, SubdomainStatus
from .operation_result import AvailabilityReason, ErrorKind, OperationResult

__all__ = [
    "RecordType",
    "SubdomainRecord",
    "SubdomainStatus",
    "AvailabilityReason",
    "ErrorKind",
    "OperationResult",
]

from enum import Enum

class PatchForm(str, Enum):
    NARROW = "narrow"
    RICH = "rich"

class ErrorCode(str, Enum):
    CREDENTIAL_MISSING = "credential_missing"
    TRANSPORT_ERROR = "transport_error"
    INVALID_REQUEST = "invalid_request"
    APPLICATION_ERROR = "application_error"
    BAD_RESPONSE = "bad_response"

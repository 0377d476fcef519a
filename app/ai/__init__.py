from .client import GenerativeClient, GenerativeModel, validate_api_key
from .parser import parse_json_response, strip_code_fences

__all__ = [
    "GenerativeClient",
    "GenerativeModel",
    "validate_api_key",
    "parse_json_response",
    "strip_code_fences",
]

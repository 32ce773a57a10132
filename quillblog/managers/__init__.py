from quillblog.managers.rate_limiter import limiter, rate_limit_exceeded_handler
from quillblog.managers.token_manager import decode_identity_token

__all__ = [
    "decode_identity_token",
    "limiter",
    "rate_limit_exceeded_handler",
]

# auth.py
import hmac

class AuthError(Exception):
    """Missing or mismatched notify token."""

def authorize(token: str, secret: str) -> None:
    # An unset secret locks the route rather than opening it.
    if not secret or not hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8")):
        raise AuthError("unauthorized")

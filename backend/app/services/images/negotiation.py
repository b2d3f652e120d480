"""Client image format negotiation."""
from starlette.requests import HTTPConnection


def supports_webp(request: HTTPConnection | None) -> bool:
    """Return True when the client's Accept header lists image/webp."""
    if request is None:
        return False
    accept = request.headers.get("accept", "")
    return any(part.split(";")[0].strip().lower() == "image/webp" for part in accept.split(","))

from solid_mcp.config import AuthConfig

ACCEPT = "application/ld+json, application/json, text/turtle"


def build_request_headers(auth: AuthConfig | None) -> dict[str, str]:
    """Return the Accept header plus whatever credentials ``auth`` carries.

    DPoP is sent as a bare ``DPoP`` authorization scheme; proof JWTs are not
    generated here.
    """
    headers = {"Accept": ACCEPT}
    if auth is None or not auth.token:
        return headers
    if auth.type == "bearer":
        headers["Authorization"] = f"Bearer {auth.token}"
    elif auth.type == "dpop":
        headers["Authorization"] = f"DPoP {auth.token}"
    elif auth.type == "cookie":
        headers["Cookie"] = auth.token
    return headers

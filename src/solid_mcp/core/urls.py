from urllib.parse import urlsplit


def is_absolute_url(value: str) -> bool:
    """Return True when ``value`` carries a URI scheme."""
    try:
        return bool(urlsplit(value).scheme)
    except ValueError:
        return False


def normalize_url(uri: str, base_url: str) -> str:
    """Resolve ``uri`` against ``base_url`` unless it is already absolute.

    Exactly one ``/`` separates the base and the relative part. Malformed
    relative input is joined as-is.
    """
    if is_absolute_url(uri):
        return uri
    base = base_url if base_url.endswith("/") else f"{base_url}/"
    path = uri[1:] if uri.startswith("/") else uri
    return f"{base}{path}"


def filename_from_url(url: str) -> str:
    """Return the last non-empty path segment (``.../docs/`` gives ``docs``)."""
    segments = [s for s in urlsplit(url).path.split("/") if s]
    return segments[-1] if segments else ""


def parent_container_url(url: str) -> str:
    parts = urlsplit(url)
    segments = parts.path.rstrip("/").split("/")
    parent_path = "/".join(segments[:-1])
    return f"{parts.scheme}://{parts.netloc}{parent_path}/"

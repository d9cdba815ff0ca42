"""
Parsing of app references typed by the user.

An app reference names a repository, optionally a release and optionally an
asset or installable inside it:

    github.com/org/repo
    https://github.com/org/repo@v1.2.0#server
    org/repo@latest
"""

from urllib.parse import urlparse

from constants import DEFAULT_HOST
from core.exceptions import InvalidReferenceError
from core.models import AppReference


def parse_app_reference(text: str) -> AppReference:
    """
    Parse an app reference into its parts.

    The version is taken from an "@" suffix of the last path segment, where
    "latest" means the most recent release. The asset or installable name is
    the URL fragment. The host defaults to github.com when the reference is a
    bare "org/repo".

    Raises:
        InvalidReferenceError: If the organization or the repository is missing.
    """
    raw = text.strip()
    if not raw:
        raise InvalidReferenceError(text, "No app reference provided")

    if "://" not in raw:
        first = raw.split("/", 1)[0]
        # "org/repo" has no host, "github.com/org/repo" does
        if "." in first or ":" in first:
            raw = "https://" + raw
        else:
            raw = f"https://{DEFAULT_HOST}/{raw}"

    parsed = urlparse(raw)
    parts = [p for p in parsed.path.split("/") if p]

    version = ""
    if parts:
        last, _, version = parts[-1].partition("@")
        parts[-1] = last
    if version == "latest":
        version = ""

    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise InvalidReferenceError(text)

    return AppReference(
        host=parsed.hostname or DEFAULT_HOST,
        org=parts[0],
        repo=parts[1],
        version=version,
        name=parsed.fragment,
    )

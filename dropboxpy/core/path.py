"""Remote path normalisation."""
import re
from urllib.parse import quote

_REPEATED_SLASHES = re.compile(r'/+')


def format_path(path: str, escape: bool = True) -> str:
    """
    Normalize a remote path.

    Collapses repeated slashes, ensures exactly one leading slash and drops
    a trailing one. When escape is set, every character outside
    ``[A-Za-z0-9-._~/]`` is percent-encoded so the result can be embedded
    in a URL path.

    Args:
        path: Path as given by the caller
        escape: Percent-encode the result

    Returns:
        Normalized path ('' for the root)

    Example:
        >>> format_path('//Photos//2012 trip/')
        '/Photos/2012%20trip'
    """
    path = _REPEATED_SLASHES.sub('/', path)
    if not path.startswith('/'):
        path = '/' + path
    path = path.rstrip('/')

    if escape:
        return quote(path, safe='/')
    return path

"""Source transport security check.

Advisory only: an insecure source produces a warning, never an error. Only
unencrypted ``http://`` and ``git://`` transports are flagged.
"""

import logging
import re
from collections.abc import Callable
from urllib.parse import SplitResult
from urllib.parse import urlsplit

from .schema import Specification

logger = logging.getLogger(__name__)

UNENCRYPTED_SCHEMES = frozenset({"http", "git"})
TRUSTED_HOSTS = frozenset({"localhost"})

# Absolute URI with an authority component; rejects local paths and scp-style remotes
_ABSOLUTE_URI = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://\S+$")


def _source_uri(spec: Specification) -> SplitResult | None:
    """Pick the URI to check from the spec's source, if the check applies."""
    source = spec.source
    if not source:
        return None

    http = source.get("http")
    git = source.get("git")

    if http is not None:
        candidate = str(http)
    elif git is not None:
        candidate = str(git)
        if not _ABSOLUTE_URI.match(candidate):
            logger.debug(f"Skipping security check for '{spec.name}': git source is not a URI: {candidate}")
            return None
    else:
        return None

    try:
        return urlsplit(candidate)
    except ValueError as e:
        logger.debug(f"Skipping security check for '{spec.name}': cannot parse {candidate}: {e}")
        return None


def verify_source_is_secure(
    root_spec: Specification,
    warn: Callable[[str], None] | None = None,
    unencrypted_schemes: frozenset[str] = UNENCRYPTED_SCHEMES,
    trusted_hosts: frozenset[str] = TRUSTED_HOSTS,
) -> bool:
    """
    Warn when the pod is transferred over an unencrypted protocol.

    The ``http`` source wins over ``git``. A ``git`` source that is a local path
    or an scp-style remote (``git@host:org/repo.git``) is not checked.

    Args:
        root_spec: Root specification of the pod
        warn: Warning sink taking one message; defaults to this module's logger
        unencrypted_schemes: Schemes considered insecure
        trusted_hosts: Hosts exempt from the check

    Returns:
        True if a warning was emitted, False otherwise

    Example:
        >>> spec = Specification(name="Foo", version="1.0", source={"http": "http://example.com/x.zip"})
        >>> verify_source_is_secure(spec, warn=print)
        'Foo' uses the unencrypted 'http' protocol to transfer the Pod. ...
        True
    """
    uri = _source_uri(root_spec)
    if uri is None:
        return False

    scheme = uri.scheme.lower()
    if scheme not in unencrypted_schemes or uri.hostname in trusted_hosts:
        return False

    message = (
        f"'{root_spec.name}' uses the unencrypted '{scheme}' protocol to transfer the Pod. "
        "Please be sure you're in a safe network with only trusted hosts. "
        "Otherwise, please reach out to the library author to notify them of this security issue."
    )
    (warn or logger.warning)(message)
    return True

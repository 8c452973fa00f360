"""
Default cryptography context registration.

Builders take an explicit context. When none is passed they fall back to a
context created by the registered factory.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from openpgp_mime.exceptions import InvalidStateError, NullArgumentError

if TYPE_CHECKING:
    from openpgp_mime.crypto.protocol import CryptographyContext

logger = structlog.get_logger(__name__)

ContextFactory = Callable[[], "CryptographyContext"]

_factory: ContextFactory | None = None


def register(factory: ContextFactory) -> None:
    """
    Register the factory used for the default context.

    A later registration replaces an earlier one.

    Raises:
        NullArgumentError: If factory is None.
    """
    global _factory
    if factory is None:
        raise NullArgumentError("factory")
    if _factory is not None:
        logger.debug("Replacing registered context factory")
    _factory = factory


def unregister() -> None:
    """Forget the registered factory."""
    global _factory
    _factory = None


def is_registered() -> bool:
    return _factory is not None


def create() -> "CryptographyContext":
    """
    Create a context from the registered factory.

    Raises:
        InvalidStateError: If no factory is registered.
    """
    if _factory is None:
        msg = "No cryptography context is registered"
        raise InvalidStateError(msg)
    return _factory()


def resolve(ctx: "CryptographyContext | None") -> "CryptographyContext":
    """Return ctx, or a new default context when it is None."""
    return ctx if ctx is not None else create()

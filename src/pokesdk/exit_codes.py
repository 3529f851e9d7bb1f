"""Numeric process exit codes used by the ``pokesdk`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~pokesdk.exceptions.PokeSDKError` subclass.
Shell scripts wrapping the CLI can inspect the exit code to tell a missing
resource apart from a network failure without parsing stderr.

Example::

    $ pokesdk pokemon missingno
    $ echo $?
    4   # EXIT_NOT_FOUND -- the API answered 404
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (e.g. a page size of zero)."""

EXIT_NOT_FOUND = 4
"""The requested resource does not exist (HTTP 404)."""

EXIT_REQUEST_FAILED = 5
"""The API answered with a status other than 200 or 404."""

EXIT_TRANSPORT_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused, cancellation)."""

EXIT_DECODE_ERROR = 7
"""The API returned a payload that could not be decoded."""

EXIT_END_OF_PAGES = 8
"""A cursor was advanced after the last page had already been delivered."""

class FallibleException(Exception):
    """Base exception for errors raised by the fallible package."""

"""
Exception types for structure compilation.

Only configuration mistakes raise. Bad runtime data never does.
"""


class ConfigurationError(Exception):
    """Raised at build time when a structure is unusable."""
    pass


class StructureError(ConfigurationError):
    """Raised when a structure is missing or malformed."""
    pass


class ValidationConfigError(ConfigurationError):
    """Raised when no validation is registered for a type tag."""
    pass

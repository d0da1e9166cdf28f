"""
Exceptions raised by params_coerce.

A coercion that simply cannot be performed is *not* an error: coerce() returns
None. Everything below signals a broken setup and is raised immediately.
"""

#region: Errors

class CoerceException(Exception):
    pass

class ConfigurationError(CoerceException):
    """Exception raised when params_coerce is used with invalid arguments"""
    pass

class IllegalNameError(ConfigurationError):
    """Exception raised for a malformed type name or helper name"""
    pass

class TypeLoadError(ConfigurationError):
    """Exception raised when the module defining a type cannot be loaded"""
    pass

class HelperExistsError(ConfigurationError):
    """Exception raised when install() would overwrite an existing name"""
    pass

class HintExistsError(ConfigurationError):
    """Exception raised when registering a conversion for an already resolved pair"""
    pass

class UnknownHintError(CoerceException):
    """Exception raised when the resolution cache holds a hint of unknown kind"""
    pass

#endregion

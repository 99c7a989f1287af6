"""
Exceptions raised by mhboost.

Every error derives from MHBoostError so that callers, and the command line
program, can catch a single type.
"""


class MHBoostError(Exception):
    pass


class ConfigurationError(MHBoostError):
    """Contradictory or missing inputs, detected before any computation."""
    pass


class DataError(MHBoostError):
    """Data that does not fit the model, or labels that cannot be used."""
    pass


class PersistenceError(MHBoostError):
    """A model file that cannot be read back."""
    pass


class StateError(MHBoostError):
    """An operation that needs a trained model was called on an untrained one."""
    pass

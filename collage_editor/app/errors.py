class AppError(Exception):
    """Base application error"""


class ConfigError(AppError):
    """Missing or invalid configuration"""


class ProviderError(AppError):
    """Image generation provider could not be reached"""


class RelayError(AppError):
    """Relay call failed or returned an unusable answer"""


class LayerIndexError(AppError, IndexError):
    """Reorder index outside the layer list"""

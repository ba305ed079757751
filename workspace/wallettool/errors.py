"""
Error types for WalletTool
"""


class WalletToolError(Exception):
    """Base class for every failure reported to the user"""


class InputError(WalletToolError):
    """Bad wallet path, malformed key or an invalid option combination"""


class DestinationError(WalletToolError):
    """The output wallet could not be written"""

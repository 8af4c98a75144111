class AllowlistMerkleError(Exception):
    """Base class for allowlist tree errors."""


class InvalidAddressFormat(AllowlistMerkleError, ValueError):
    pass


class InvalidHashFormat(AllowlistMerkleError, ValueError):
    pass


class EmptyTreeError(AllowlistMerkleError):
    """Raised when a root or proof is requested from a tree with no leaves."""


class LeafNotFound(AllowlistMerkleError, LookupError):
    pass


class AllowlistFormatError(AllowlistMerkleError, ValueError):
    pass

"""GrantKeeper - entity permission grants and access resolution."""

__version__ = "0.1.0"

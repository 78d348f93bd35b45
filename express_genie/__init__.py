"""express-genie: scaffold Express.js backend projects from preset templates."""

__version__ = "1.0.0"

"""Status bar block logic with the error, escaping, click and fragment helpers it shares."""

__version__ = "0.1.0"
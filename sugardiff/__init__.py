"""Sugar Diff - record measurements through the day and watch their trend."""

__version__ = "0.1.0"

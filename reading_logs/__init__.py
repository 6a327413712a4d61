"""Reading Logs Parser.

Batch-extracts per-student reading minutes from photographed reading-log
forms and writes a CSV summary.
"""

__version__ = "0.1.0"

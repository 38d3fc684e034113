"""Safe GPX: redact private places from GPS track logs.

Streams a GPX document through an XML rewrite that drops every track
point falling inside one or more exclusion regions, keeping the rest of
the document intact.
"""

__version__ = "0.1.0"

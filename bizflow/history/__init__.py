"""
Template and query-history persistence.

Responsibilities:
- Supply stored content templates per platform to seed generation.
- Save newly generated templates back to the template collection.
- Record every consultation and summarise the history.
"""

"""
Property domain layer.

Pure Python: read projections, the availability resolver, the search
predicate and the result shaper. Nothing in this package imports the ORM.
"""

"""Query construction for the therapist directory.

Turns loosely typed request parameters into predicates, orderings and
pagination windows that the storage layer can execute.
"""

"""GEDCOM parsing into a normalized family model and relationship graph queries."""

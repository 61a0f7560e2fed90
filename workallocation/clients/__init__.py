"""HTTP clients for the external services the allocation service depends on.

- FracClient: the FRAC reference taxonomy (roles, activities, competencies,
  positions)
- UserDirectoryClient: batch user detail lookup
"""

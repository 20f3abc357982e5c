"""Repository-style data access bound to a unit of work's session."""

"""Default collaborators for the application ports."""

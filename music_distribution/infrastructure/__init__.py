"""Infrastructure layer - concrete collaborators for the distribution workflows."""

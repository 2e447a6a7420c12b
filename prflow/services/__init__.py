"""Local collaborators of the pull request workflows."""

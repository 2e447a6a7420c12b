"""prflow - pull request workflows across a local git tree and GitHub."""

__version__ = "0.1.0"

"""Map pull request numbers to local branch names and back."""


def encode(number: int | str, prefix: str) -> str:
    """Local branch name of pull request number: prefix followed by number."""
    return f"{prefix}{number}"


def decode(branch_name: str | None, prefix: str) -> str | None:
    """Pull request identifier encoded in branch_name, as text.

    Returns None unless branch_name starts with prefix. Parsing the
    identifier as a number is up to the caller.
    """
    if not branch_name or not branch_name.startswith(prefix):
        return None
    return branch_name[len(prefix):]


def number_from_branch(branch_name: str | None, prefix: str) -> int | None:
    """Pull request number of a pull branch, or None when the branch does not
    encode one (wrong prefix, or a non-numeric remainder)."""
    identifier = decode(branch_name, prefix)
    if identifier is None or not identifier.isdigit():
        return None
    return int(identifier)

"""Changeset engine exceptions."""


class ChangesetError(Exception):
    """Base class for changeset engine errors."""


class UnsupportedStrategyError(ChangesetError):
    """Requested diff strategy is not defined for the given values."""


class ChangesetInvariantError(ChangesetError, AssertionError):
    """Key classification reached a state the key union rules out."""

# errors.py
from __future__ import annotations


class ReconcileError(Exception):
    """Base class for errors that abort a reconcile before or during apply."""


class NoAccessError(ReconcileError):
    """Both private and public endpoint access would be disabled."""


class FormatError(ReconcileError):
    """A manifest value (e.g. a container image) does not have the expected shape."""


class ConfigError(ReconcileError):
    """Flags or the cluster config document are inconsistent or incomplete."""


class AddonNotFoundError(ReconcileError):
    """No add-on (or no manifest) is registered under the requested name."""


class PrivateOnlyWarning(UserWarning):
    """Private-only access is legal but restricts where the API can be reached from."""


class ClusterNotReadyError(ReconcileError):
    """The cluster is not ACTIVE, so its configuration cannot be updated yet."""

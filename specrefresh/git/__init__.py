"""Git capability used to stage and publish the client repository."""

from .client import GitClient, credential_env

__all__ = ["GitClient", "credential_env"]

"""Identity material generation for the credential store."""

from .generators import DefaultSecretGenerator, SecretGenerator, public_key_for

__all__ = ["DefaultSecretGenerator", "SecretGenerator", "public_key_for"]

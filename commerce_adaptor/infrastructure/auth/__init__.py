from commerce_adaptor.infrastructure.auth.basic_auth import BasicAuthHandler
from commerce_adaptor.infrastructure.auth.oauth import Credential, CredentialManager

__all__ = ["BasicAuthHandler", "Credential", "CredentialManager"]

import base64
from typing import Dict, Optional

from commerce_adaptor.core.exceptions import AuthError
from commerce_adaptor.core.logging import get_logger

logger = get_logger(__name__)

class BasicAuthHandler:
    """Builds HTTP Basic credentials for the OAuth client-credentials grant."""

    def __init__(self, username: Optional[str] = None, password: Optional[str] = None):
        """
        Initialize the basic authentication handler.

        Args:
            username: Username (OAuth client id)
            password: Password (OAuth client secret)
        """
        self.username = username
        self.password = password

    def generate_header(self) -> Dict[str, str]:
        """
        Generate an Authorization header for basic authentication.

        Returns:
            Authorization header dict

        Raises:
            AuthError: If credentials are missing
        """
        if not self.username or not self.password:
            logger.error("Missing credentials for basic authentication")
            raise AuthError("Client id and secret are required for basic authentication")

        return {"Authorization": f"Basic {self.encode_credentials(self.username, self.password)}"}

    @staticmethod
    def encode_credentials(username: str, password: str) -> str:
        """
        Encode credentials to base64 for basic authentication.

        Args:
            username: Username
            password: Password

        Returns:
            Base64 encoded credentials
        """
        credentials = f"{username}:{password}"
        return base64.b64encode(credentials.encode("utf-8")).decode("utf-8")

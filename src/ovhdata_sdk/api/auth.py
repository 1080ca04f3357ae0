"""
Account endpoints
"""

from ..models import CredentialDetails, Me
from ..signing import HttpMethod


class AuthApi:
    """Calls about the logged-in account. Mixed into `OvhDataClient`."""

    def me(self) -> Me:
        """Information about the logged user."""
        return self.call(HttpMethod.GET, ["auth", "details"], Me.from_dict)

    def current_credential(self) -> CredentialDetails:
        """Details of the consumer key in use."""
        return self.call(HttpMethod.GET, ["auth", "currentCredential"], CredentialDetails.from_dict)
